"""Origin, destination and intermediate stop markers for route options."""

import enum
import logging
from dataclasses import dataclass

import folium

from busmap.core.map_surface import MapSurface
from busmap.core.payload import LatLon, RouteOption, flatten_option

logger = logging.getLogger(__name__)

ORIGIN_ICON_COLOR = "blue"
DESTINATION_ICON_COLOR = "red"

INTERMEDIATE_STYLE = {
    "radius": 5,
    "fill": True,
    "fill_color": "#808080",
    "color": "#000",
    "weight": 1,
    "opacity": 1,
    "fill_opacity": 0.6,
}


class StopRole(enum.Enum):
    ORIGIN = "Origin"
    DESTINATION = "Destination"
    INTERMEDIATE = "Stop"


@dataclass
class PlacedStop:
    option_index: int
    stop_index: int
    role: StopRole
    location: LatLon

    @property
    def label(self) -> str:
        if self.role is StopRole.INTERMEDIATE:
            return f"Option {self.option_index + 1} - Stop {self.stop_index + 1}"
        return f"Option {self.option_index + 1} - {self.role.value}"


def classify_stop(index: int, count: int) -> StopRole:
    if index == 0:
        return StopRole.ORIGIN
    if index == count - 1:
        return StopRole.DESTINATION
    return StopRole.INTERMEDIATE


def plan_stops(options: list[RouteOption]) -> list[PlacedStop]:
    """Classify every stop of every non-empty option by its position."""
    placed = []
    for op_index, option in enumerate(options):
        if not option:
            continue
        stops = flatten_option(option)
        for index, location in enumerate(stops):
            placed.append(PlacedStop(
                option_index=op_index,
                stop_index=index,
                role=classify_stop(index, len(stops)),
                location=location,
            ))
    return placed


def _make_marker(stop: PlacedStop):
    location = list(stop.location)
    if stop.role is StopRole.ORIGIN:
        return folium.Marker(location, popup=stop.label, icon=folium.Icon(color=ORIGIN_ICON_COLOR))
    if stop.role is StopRole.DESTINATION:
        return folium.Marker(location, popup=stop.label, icon=folium.Icon(color=DESTINATION_ICON_COLOR))
    return folium.CircleMarker(location, popup=stop.label, **INTERMEDIATE_STYLE)


def draw_stop_markers(surface: MapSurface, options: list[RouteOption]) -> list[LatLon]:
    """Add a marker per stop to the overlay and return every plotted point."""
    all_bounds: list[LatLon] = []
    for stop in plan_stops(options):
        surface.add(_make_marker(stop))
        all_bounds.append(stop.location)
    logger.debug("Placed %d stop markers for %d options", len(all_bounds), len(options))
    return all_bounds
