"""Map page and route drawing endpoints."""

from fastapi import APIRouter, BackgroundTasks, HTTPException, Request
from fastapi.responses import HTMLResponse

from busmap.schemas.map import MapCleared, RenderAccepted

router = APIRouter(tags=["map"])

# Will be set by main.py
renderer = None


def _require_renderer():
    if renderer is None:
        raise HTTPException(status_code=503, detail="Map renderer not ready")
    return renderer


@router.get("/map", response_class=HTMLResponse)
async def get_map_page():
    """Current map with the markers and routes of the last render."""
    return HTMLResponse(_require_renderer().surface.render_html())


@router.post("/api/map/routes", response_model=RenderAccepted, status_code=202)
async def draw_routes(request: Request, background_tasks: BackgroundTasks):
    """Draw bus route options. The body is the JSON-encoded options list.

    Rendering runs in the background; listen on /ws/map for completion.
    """
    active = _require_renderer()
    payload = (await request.body()).decode("utf-8", errors="replace")
    background_tasks.add_task(active.draw_bus_routes, payload)
    return RenderAccepted()


@router.delete("/api/map/routes", response_model=MapCleared)
async def clear_routes():
    """Remove every marker and route from the map."""
    await _require_renderer().clear()
    return MapCleared()
