"""Main orchestrator: draws bus route options and their driving paths on the map."""

import asyncio
import datetime
import logging
from dataclasses import dataclass, field
from typing import Protocol

import folium

from busmap.config import Settings, settings
from busmap.core.graphhopper_client import (
    GraphHopperClient,
    RouteResult,
    split_into_batches,
    style_for_option,
)
from busmap.core.map_surface import MapSurface
from busmap.core.markers import draw_stop_markers
from busmap.core.outcomes import settle_all
from busmap.core.payload import PayloadError, RouteOption, flatten_option, parse_route_options

logger = logging.getLogger(__name__)


class CompletionSink(Protocol):
    """Host listener told once per render cycle that the map is done."""

    async def notify_map_finished(self) -> None: ...


@dataclass
class RenderReport:
    started_at: datetime.datetime
    finished_at: datetime.datetime | None = None
    options: int = 0
    markers: int = 0
    batches: int = 0
    routes_drawn: int = 0
    failures: list[str] = field(default_factory=list)
    problem: str | None = None  # input or precondition issue that skipped rendering


class BusRouteRenderer:
    """A rendering session: one map surface, one routing client, one optional sink.

    Render cycles on the same session are serialized so a cycle never clears
    or draws over another one still in flight.
    """

    def __init__(
        self,
        surface: MapSurface,
        client: GraphHopperClient,
        sink: CompletionSink | None = None,
        config: Settings | None = None,
    ) -> None:
        self.surface = surface
        self.client = client
        self.sink = sink
        self._config = config or settings
        self._lock = asyncio.Lock()
        self.last_report: RenderReport | None = None

    async def clear(self) -> None:
        """Remove every marker and route from the map."""
        async with self._lock:
            self.surface.clear()
        logger.info("Map overlay cleared")

    async def draw_bus_routes(self, payload: str) -> None:
        """Render the JSON-encoded route options. Never raises."""
        async with self._lock:
            report = RenderReport(started_at=datetime.datetime.now(datetime.timezone.utc))
            try:
                self.surface.show_loader()
                # Let the loader paint before the overlay goes blank
                await asyncio.sleep(self._config.loader_delay_seconds)
                self.surface.clear()

                options = parse_route_options(payload)
                report.options = len(options)
                api_key = self._config.gh_api_key

                if api_key and options:
                    await self._render(options, api_key, report)
                else:
                    if not api_key:
                        logger.error("No GH_API_KEY configured, skipping route rendering")
                        report.problem = "missing GH_API_KEY"
                    if not options:
                        logger.warning("No valid route options found in payload")
                        report.problem = report.problem or "no route options"
            except PayloadError as e:
                logger.error("Failed to parse bus route payload: %s", e)
                report.problem = str(e)
            except Exception:
                logger.exception("Unexpected error while rendering bus routes")
                report.problem = "unexpected error"
            finally:
                self.surface.hide_loader()
                report.finished_at = datetime.datetime.now(datetime.timezone.utc)
                self.last_report = report
                await self._notify_finished()

    async def _render(self, options: list[RouteOption], api_key: str, report: RenderReport) -> None:
        # 1. Markers and viewport first
        all_bounds = draw_stop_markers(self.surface, options)
        report.markers = len(all_bounds)
        if all_bounds:
            self.surface.fit_bounds(all_bounds)

        # 2. One fetch per batch across every option
        fetches = self._build_fetches(options, api_key)
        report.batches = len(fetches)
        if not fetches:
            logger.warning("No route batches to fetch")
            return

        # 3. Wait for all batches, failed or not
        outcomes = await settle_all(fetches)

        # 4. Draw whatever succeeded
        for outcome in outcomes:
            if not outcome.ok:
                reason = str(outcome.error) or "Unknown error"
                logger.error("Route batch failed: %s", reason)
                report.failures.append(reason)
                continue
            result: RouteResult = outcome.value
            try:
                line = folium.PolyLine(result.coords, **result.style.as_path_options())
            except ValueError as e:
                logger.error("Route batch could not be drawn: %s", e)
                report.failures.append(str(e))
                continue
            self.surface.add(line)
            report.routes_drawn += 1

        logger.info(
            "Rendered %d options: %d markers, %d/%d route batches drawn",
            report.options, report.markers, report.routes_drawn, report.batches,
        )

    def _build_fetches(self, options: list[RouteOption], api_key: str) -> list:
        max_points = self._config.max_points_per_batch
        fetches = []
        for op_index, option in enumerate(options):
            style = style_for_option(op_index)
            stops = flatten_option(option)
            if len(stops) < 2:
                continue
            for batch in split_into_batches(stops, max_points):
                fetches.append(self.client.fetch_batch(batch, style, api_key))
        return fetches

    async def _notify_finished(self) -> None:
        if self.sink is None:
            return
        try:
            await self.sink.notify_map_finished()
        except Exception:
            logger.exception("Completion sink failed")
