"""Diagnostics API for inspecting the last render cycle."""

from dataclasses import asdict

from fastapi import APIRouter

from busmap.schemas.map import MapDiagnostics, RenderReportInfo

router = APIRouter(prefix="/api/diagnostics", tags=["diagnostics"])

# Will be set by main.py
renderer = None
broadcaster = None


@router.get("")
async def get_diagnostics():
    """Overlay state and the outcome of the last render."""
    if renderer is None:
        return {"error": "Renderer not initialized"}

    report = renderer.last_report
    return MapDiagnostics(
        loading=renderer.surface.loading,
        overlay_elements=len(renderer.surface.elements()),
        bounds=renderer.surface.bounds,
        subscribers=broadcaster.subscriber_count if broadcaster else 0,
        last_render=RenderReportInfo(**asdict(report)) if report else None,
    )
