import datetime

from pydantic import BaseModel


class RenderAccepted(BaseModel):
    status: str = "accepted"


class MapCleared(BaseModel):
    status: str = "cleared"


class RenderReportInfo(BaseModel):
    started_at: datetime.datetime
    finished_at: datetime.datetime | None = None
    options: int
    markers: int
    batches: int
    routes_drawn: int
    failures: list[str] = []
    problem: str | None = None


class MapDiagnostics(BaseModel):
    loading: bool
    overlay_elements: int
    bounds: list[list[float]] | None = None
    subscribers: int = 0
    last_render: RenderReportInfo | None = None
