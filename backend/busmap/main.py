"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from busmap.api import diagnostics, maps, ws
from busmap.config import settings
from busmap.core.broadcaster import Broadcaster
from busmap.core.graphhopper_client import GraphHopperClient
from busmap.core.map_surface import MapSurface
from busmap.core.route_renderer import BusRouteRenderer

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    client = GraphHopperClient()
    broadcaster = Broadcaster()
    renderer = BusRouteRenderer(MapSurface(), client, sink=broadcaster)

    # Wire up API modules
    maps.renderer = renderer
    ws.broadcaster = broadcaster
    diagnostics.renderer = renderer
    diagnostics.broadcaster = broadcaster

    if not settings.gh_api_key:
        logger.warning("GH_API_KEY is not set - routes will not be drawn")
    logger.info("Bus route map started - routing via %s", settings.graphhopper_base_url)

    yield

    # Shutdown
    await client.close()
    logger.info("Bus route map shut down")


app = FastAPI(
    title="Bus Route Map",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(maps.router)
app.include_router(diagnostics.router)
app.include_router(ws.router)


@app.get("/api/health")
async def health():
    return {"status": "ok"}
