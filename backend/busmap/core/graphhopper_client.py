"""Async client for the GraphHopper routing API."""

import logging
from dataclasses import dataclass

import httpx

from busmap.config import settings
from busmap.core.payload import LatLon

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Network error contacting GraphHopper"
NO_ROUTE_MESSAGE = "No valid route found in GraphHopper response"


class RouteFetchError(Exception):
    """A single batch could not be routed."""


@dataclass(frozen=True)
class PolylineStyle:
    color: str
    weight: int = 6
    opacity: float = 0.8

    def as_path_options(self) -> dict:
        return {"color": self.color, "weight": self.weight, "opacity": self.opacity}


@dataclass
class RouteResult:
    coords: list[LatLon]  # [(lat, lon), ...]
    style: PolylineStyle


def style_for_option(op_index: int) -> PolylineStyle:
    """Blue for the first option, grey for the rest."""
    if op_index == 0:
        return PolylineStyle(color="#0000FF", weight=6, opacity=0.8)
    return PolylineStyle(color="#808080", weight=6, opacity=0.6)


def split_into_batches(stops: list[LatLon], max_points: int = 5) -> list[list[LatLon]]:
    """Split stops into overlapping batches of at most max_points.

    Consecutive batches share their boundary stop so the drawn path stays
    continuous. Fewer than two stops produce no batches.
    """
    if max_points < 2:
        raise ValueError(f"max_points must be at least 2, got {max_points}")
    batches = []
    for i in range(0, len(stops) - 1, max_points - 1):
        batch = stops[i:i + max_points]
        if len(batch) < 2:
            continue
        batches.append(batch)
    return batches


class GraphHopperClient:
    """Routes stop batches through GraphHopper, one POST per batch."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._client = httpx.AsyncClient(
            base_url=settings.graphhopper_base_url,
            timeout=settings.graphhopper_timeout_seconds,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    @staticmethod
    def _error_message(resp: httpx.Response, default: str) -> str:
        """Extract GraphHopper's 'message' field, falling back to a generic text."""
        try:
            data = resp.json()
        except ValueError:
            return default
        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        return default

    async def fetch_batch(self, batch: list[LatLon], style: PolylineStyle, api_key: str) -> RouteResult:
        """Fetch the driving path through a batch of (lat, lon) stops."""
        # GraphHopper expects [lon, lat]
        body = {
            "points": [[lon, lat] for lat, lon in batch],
            "vehicle": settings.graphhopper_vehicle,
            "locale": settings.graphhopper_locale,
            "points_encoded": False,
        }
        try:
            resp = await self._client.post("/route", params={"key": api_key}, json=body)
        except httpx.TransportError as e:
            raise RouteFetchError(f"{NETWORK_ERROR_MESSAGE}: {type(e).__name__}") from e

        if resp.is_error:
            raise RouteFetchError(self._error_message(resp, NETWORK_ERROR_MESSAGE))

        try:
            data = resp.json()
        except ValueError as e:
            raise RouteFetchError(NO_ROUTE_MESSAGE) from e

        paths = data.get("paths") if isinstance(data, dict) else None
        if not paths:
            raise RouteFetchError(self._error_message(resp, NO_ROUTE_MESSAGE))

        try:
            coords = [(c[1], c[0]) for c in paths[0]["points"]["coordinates"]]
        except (KeyError, IndexError, TypeError) as e:
            raise RouteFetchError(f"Unexpected GraphHopper path format: {e}") from e
        if not coords:
            raise RouteFetchError(NO_ROUTE_MESSAGE)

        logger.debug("Routed batch of %d stops into %d path points", len(batch), len(coords))
        return RouteResult(coords=coords, style=style)
