from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

POLL_INTERVALS = ("1m", "5m", "15m", "30m", "1h")

TIME_WINDOWS = {
    1: "Last 1 hour",
    6: "Last 6 hours",
    24: "Last 24 hours",
    48: "Last 48 hours",
    168: "Last week",
}


class SortMode(str, Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    RATING_HIGH = "rating-high"
    RATING_LOW = "rating-low"


class Review(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    author: str
    rating: int
    title: str | None = None
    content: str
    submitted_date: str

    def submitted_at(self) -> datetime | None:
        """Parsed submitted_date as an aware UTC datetime, or None if unparsable."""
        try:
            parsed = datetime.fromisoformat(self.submitted_date.replace("Z", "+00:00"))
            if parsed.tzinfo is None:
                return parsed.replace(tzinfo=timezone.utc)
            # offsets at the edges of the datetime range overflow on conversion
            return parsed.astimezone(timezone.utc)
        except (ValueError, OverflowError):
            return None


@dataclass(frozen=True)
class FeedQuery:
    """One fetch request. Equivalence ignores the result limit."""

    app_id: str
    hours: int
    limit: int = field(default=100, compare=False)

    def __post_init__(self):
        if not isinstance(self.app_id, str) or not self.app_id.strip():
            raise ValueError("app_id must be a non-empty string")
        if not _is_positive_int(self.hours):
            raise ValueError(f"time window must be a positive integer: {self.hours!r}")
        if not _is_positive_int(self.limit):
            raise ValueError(f"limit must be a positive integer: {self.limit!r}")


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class PollConfig(BaseModel):
    poll_interval: str
    is_active: bool = True

    @field_validator("poll_interval")
    @classmethod
    def known_interval(cls, value: str) -> str:
        if value not in POLL_INTERVALS:
            raise ValueError(
                f"poll_interval must be one of {', '.join(POLL_INTERVALS)}"
            )
        return value


class FetchError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
