from datetime import datetime

from pydantic import BaseModel

from src.reviews.models import Review, SortMode


class SelectionRequest(BaseModel):
    app_id: str | None = None
    time_window: int | None = None


class SortRequest(BaseModel):
    sort_mode: SortMode


class PollIntervalRequest(BaseModel):
    poll_interval: str


class ViewResponse(BaseModel):
    app_id: str
    time_window: int
    sort_mode: SortMode
    poll_interval: str
    loading: bool
    error: str | None
    count: int
    reviews: list[Review]
    last_updated: datetime | None


class ConfigureResponse(BaseModel):
    ok: bool
    message: str
