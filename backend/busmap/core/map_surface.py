"""Folium map wrapper owning the mutable route overlay."""

import logging

import folium
from folium import Element
from shapely.geometry import MultiPoint

from busmap.config import settings

logger = logging.getLogger(__name__)

LatLon = tuple[float, float]

OVERLAY_NAME = "Bus routes"

_LOADER_TEMPLATE = """
<style>
  #map-loader-overlay {{
    position: fixed; inset: 0; z-index: 1000; display: none;
    align-items: center; justify-content: center;
    background: rgba(255, 255, 255, 0.6); font-family: sans-serif;
  }}
  #map-loader-overlay.visible {{ display: flex; }}
</style>
<div id="map-loader-overlay" class="{css_class}">Loading routes...</div>
"""


class MapSurface:
    """A single map view with one overlay layer that is cleared and refilled per render."""

    def __init__(
        self,
        center: LatLon | None = None,
        zoom_start: int | None = None,
    ) -> None:
        self.center: LatLon = center or (settings.map_center_lat, settings.map_center_lon)
        self.zoom_start = zoom_start if zoom_start is not None else settings.map_zoom_start
        self.overlay = folium.FeatureGroup(name=OVERLAY_NAME)
        self._elements: list = []
        # [[south, west], [north, east]] or None when nothing is fitted
        self.bounds: list[list[float]] | None = None
        self.loading = False

    def clear(self) -> None:
        """Drop every marker and polyline from the overlay."""
        self.overlay = folium.FeatureGroup(name=OVERLAY_NAME)
        self._elements = []
        self.bounds = None

    def add(self, element):
        element.add_to(self.overlay)
        self._elements.append(element)
        return element

    def elements(self) -> list:
        return list(self._elements)

    def fit_bounds(self, points: list[LatLon]) -> None:
        """Fit the viewport to the bounding box of the given (lat, lon) points."""
        if not points:
            return
        # Shapely uses (x, y) = (lon, lat)
        min_lon, min_lat, max_lon, max_lat = MultiPoint([(lon, lat) for lat, lon in points]).bounds
        self.bounds = [[min_lat, min_lon], [max_lat, max_lon]]
        logger.debug("Viewport fitted to %d points: %s", len(points), self.bounds)

    def show_loader(self) -> None:
        self.loading = True

    def hide_loader(self) -> None:
        self.loading = False

    def build_map(self) -> folium.Map:
        """Build a fresh folium map with the current overlay and viewport."""
        m = folium.Map(location=list(self.center), zoom_start=self.zoom_start, tiles=None)
        folium.TileLayer(
            tiles=settings.tile_url,
            attr=settings.tile_attribution,
            max_zoom=settings.tile_max_zoom,
        ).add_to(m)
        self.overlay.add_to(m)
        if self.bounds:
            m.fit_bounds(self.bounds)
        css_class = "visible" if self.loading else ""
        m.get_root().html.add_child(Element(_LOADER_TEMPLATE.format(css_class=css_class)))
        return m

    def render_html(self) -> str:
        return self.build_map().get_root().render()
