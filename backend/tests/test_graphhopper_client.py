"""Tests for GraphHopperClient against a mocked transport."""

import asyncio
import json

import httpx
import pytest

from busmap.core.graphhopper_client import (
    NETWORK_ERROR_MESSAGE,
    NO_ROUTE_MESSAGE,
    GraphHopperClient,
    PolylineStyle,
    RouteFetchError,
)

STYLE = PolylineStyle(color="#0000FF")
BATCH = [(-43.01, -65.17), (-43.02, -65.18), (-43.03, -65.19)]


def _fetch(handler, batch=BATCH, api_key="secret"):
    async def run():
        client = GraphHopperClient(transport=httpx.MockTransport(handler))
        try:
            return await client.fetch_batch(batch, STYLE, api_key)
        finally:
            await client.close()

    return asyncio.run(run())


def test_request_format():
    """Points are sent lon-first with the fixed routing options."""
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["key"] = request.url.params.get("key")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"paths": [{"points": {"coordinates": [[-65.17, -43.01]]}}]})

    _fetch(handler)

    assert seen["method"] == "POST"
    assert seen["path"].endswith("/route")
    assert seen["key"] == "secret"
    assert seen["body"] == {
        "points": [[-65.17, -43.01], [-65.18, -43.02], [-65.19, -43.03]],
        "vehicle": "car",
        "locale": "es",
        "points_encoded": False,
    }


def test_response_coordinates_flipped_back():
    """The first path's [lon, lat] points come back as (lat, lon)."""
    def handler(request):
        return httpx.Response(200, json={
            "paths": [
                {"points": {"coordinates": [[-65.17, -43.01], [-65.175, -43.015], [-65.19, -43.03]]}},
                {"points": {"coordinates": [[0.0, 0.0]]}},
            ],
        })

    result = _fetch(handler)
    assert result.coords == [(-43.01, -65.17), (-43.015, -65.175), (-43.03, -65.19)]
    assert result.style is STYLE


def test_http_error_uses_service_message():
    """An HTTP error carries GraphHopper's own message."""
    def handler(request):
        return httpx.Response(401, json={"message": "Wrong credentials"})

    with pytest.raises(RouteFetchError, match="Wrong credentials"):
        _fetch(handler)


def test_http_error_without_message_is_generic():
    """An HTTP error without a JSON message uses the generic network text."""
    def handler(request):
        return httpx.Response(502, text="<html>Bad gateway</html>")

    with pytest.raises(RouteFetchError) as exc_info:
        _fetch(handler)
    assert str(exc_info.value) == NETWORK_ERROR_MESSAGE


def test_empty_paths_uses_service_message():
    """A 2xx response with no paths carries the service message."""
    def handler(request):
        return httpx.Response(200, json={"paths": [], "message": "Cannot find point 2"})

    with pytest.raises(RouteFetchError, match="Cannot find point 2"):
        _fetch(handler)


def test_missing_paths_is_no_route():
    """A 2xx response without paths and message is a no-route failure."""
    def handler(request):
        return httpx.Response(200, json={"info": {}})

    with pytest.raises(RouteFetchError) as exc_info:
        _fetch(handler)
    assert str(exc_info.value) == NO_ROUTE_MESSAGE


def test_transport_error_is_network_error():
    """A connection failure becomes a network error."""
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(RouteFetchError, match=NETWORK_ERROR_MESSAGE):
        _fetch(handler)


def test_empty_geometry_is_no_route():
    """A path with no coordinates is a no-route failure, not an empty line."""
    def handler(request):
        return httpx.Response(200, json={"paths": [{"points": {"coordinates": []}}]})

    with pytest.raises(RouteFetchError) as exc_info:
        _fetch(handler)
    assert str(exc_info.value) == NO_ROUTE_MESSAGE
