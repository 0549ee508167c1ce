"""Session view state: the single owner of selection, flags and reviews."""

from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timezone

import structlog

from src.reviews.models import POLL_INTERVALS, FeedQuery, Review, SortMode
from src.reviews.sorting import sort_reviews

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ViewSnapshot:
    app_id: str
    time_window: int
    sort_mode: SortMode
    poll_interval: str
    loading: bool
    error: str | None
    reviews: list[Review]
    last_updated: datetime | None

    @property
    def count(self) -> int:
        return len(self.reviews)


class ViewState:
    """Mutable state for one client session.

    Only ever touched from the event loop thread. Fetch results are tagged
    with the FeedQuery they were issued for and are dropped by
    ``apply_reviews``/``apply_error`` when that query is no longer current.
    """

    def __init__(
        self,
        app_id: str,
        time_window: int,
        sort_mode: SortMode | str = SortMode.NEWEST,
        poll_interval: str = "5m",
        result_limit: int = 100,
    ):
        self._query = FeedQuery(app_id, time_window, result_limit)
        self._sort_mode = SortMode(sort_mode)
        self._poll_interval = _check_interval(poll_interval)
        self._reviews: list[Review] = []
        self._sorted: list[Review] = []
        self._error: str | None = None
        self._in_flight: Counter[FeedQuery] = Counter()
        self._last_updated: datetime | None = None

    @property
    def current_query(self) -> FeedQuery:
        return self._query

    @property
    def app_id(self) -> str:
        return self._query.app_id

    @property
    def time_window(self) -> int:
        return self._query.hours

    @property
    def result_limit(self) -> int:
        return self._query.limit

    @property
    def sort_mode(self) -> SortMode:
        return self._sort_mode

    @property
    def poll_interval(self) -> str:
        return self._poll_interval

    @property
    def reviews(self) -> list[Review]:
        return list(self._reviews)

    @property
    def sorted_reviews(self) -> list[Review]:
        return list(self._sorted)

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def loading(self) -> bool:
        return self._in_flight[self._query] > 0

    @property
    def last_updated(self) -> datetime | None:
        return self._last_updated

    def select(self, app_id: str | None = None, time_window: int | None = None) -> bool:
        """Change the selected app and/or time window.

        Returns False when the resulting query is equivalent to the current
        one. Raises ValueError for an invalid selection, leaving state as is.
        """
        query = FeedQuery(
            self._query.app_id if app_id is None else app_id,
            self._query.hours if time_window is None else time_window,
            self._query.limit,
        )
        if query == self._query:
            return False

        logger.info(
            "selection_changed",
            app_id=query.app_id,
            hours=query.hours,
            previous_app_id=self._query.app_id,
            previous_hours=self._query.hours,
        )
        self._query = query
        self._error = None
        self._last_updated = None
        self._set_reviews([])
        return True

    def set_sort_mode(self, mode: SortMode | str) -> None:
        mode = SortMode(mode)
        if mode is not self._sort_mode:
            self._sort_mode = mode
            self._sorted = sort_reviews(self._reviews, mode)

    def set_poll_interval(self, token: str) -> None:
        self._poll_interval = _check_interval(token)

    def begin_fetch(self, query: FeedQuery) -> None:
        self._in_flight[query] += 1
        if query == self._query:
            self._error = None

    def apply_reviews(self, query: FeedQuery, reviews: list[Review]) -> bool:
        self._finish(query)
        if query != self._query:
            logger.debug("fetch_discarded", app_id=query.app_id, hours=query.hours)
            return False
        self._error = None
        self._last_updated = datetime.now(tz=timezone.utc)
        self._set_reviews(reviews)
        return True

    def apply_error(self, query: FeedQuery, message: str) -> bool:
        self._finish(query)
        if query != self._query:
            logger.debug("fetch_error_discarded", app_id=query.app_id, error=message)
            return False
        self._error = message
        return True

    def abandon_fetch(self, query: FeedQuery) -> None:
        """End an in-flight fetch that will never produce a result."""
        self._finish(query)

    def snapshot(self) -> ViewSnapshot:
        return ViewSnapshot(
            app_id=self.app_id,
            time_window=self.time_window,
            sort_mode=self._sort_mode,
            poll_interval=self._poll_interval,
            loading=self.loading,
            error=self._error,
            reviews=self.sorted_reviews,
            last_updated=self._last_updated,
        )

    def _finish(self, query: FeedQuery) -> None:
        self._in_flight[query] -= 1
        if self._in_flight[query] <= 0:
            del self._in_flight[query]

    def _set_reviews(self, reviews: list[Review]) -> None:
        ordered = sort_reviews(reviews, self._sort_mode)
        self._reviews = list(reviews)
        self._sorted = ordered


def _check_interval(token: str) -> str:
    if token not in POLL_INTERVALS:
        raise ValueError(
            f"poll interval must be one of {', '.join(POLL_INTERVALS)}: {token!r}"
        )
    return token
