"""Tests for MapSurface."""

import folium

from busmap.core.map_surface import MapSurface


def test_fit_bounds_south_west_north_east():
    """Bounds are the south-west and north-east corners of the points."""
    surface = MapSurface()
    surface.fit_bounds([(-43.05, -65.10), (-43.01, -65.30), (-43.20, -65.17)])
    assert surface.bounds == [[-43.20, -65.30], [-43.01, -65.10]]


def test_fit_bounds_ignores_empty():
    """No points leave the viewport unfitted."""
    surface = MapSurface()
    surface.fit_bounds([])
    assert surface.bounds is None


def test_clear_empties_overlay():
    """Clearing drops elements and bounds."""
    surface = MapSurface()
    surface.add(folium.Marker([-43.0, -65.0]))
    surface.fit_bounds([(-43.0, -65.0)])
    assert len(surface.elements()) == 1

    surface.clear()
    assert surface.elements() == []
    assert surface.bounds is None


def test_render_html_contains_overlay_and_loader():
    """Rendered HTML carries the overlay and the loader state."""
    surface = MapSurface(center=(-43.01, -65.17), zoom_start=10)
    surface.add(folium.PolyLine([[-43.0, -65.0], [-43.1, -65.1]], color="#0000FF"))

    html = surface.render_html()
    assert "leaflet" in html.lower()
    assert "#0000FF" in html
    assert 'id="map-loader-overlay" class=""' in html

    surface.show_loader()
    assert 'id="map-loader-overlay" class="visible"' in surface.render_html()
    surface.hide_loader()
    assert surface.loading is False


def test_elements_tracks_added_in_order():
    """elements() lists what was added, in order, and forgets it on clear."""
    surface = MapSurface()
    marker = folium.Marker([-43.0, -65.0])
    line = folium.PolyLine([[-43.0, -65.0], [-43.1, -65.1]])

    assert surface.add(marker) is marker
    surface.add(line)
    assert surface.elements() == [marker, line]

    # A copy, not the live list
    surface.elements().clear()
    assert len(surface.elements()) == 2

    surface.clear()
    assert surface.elements() == []
