"""Client-side refresh loop for the selected review feed."""

import asyncio

import structlog

from src.ports import ReviewFetcher
from src.reviews.models import FeedQuery, FetchError
from src.reviews.state import ViewState

logger = structlog.get_logger(__name__)

DEFAULT_REFRESH_INTERVAL = 60.0


class PollScheduler:
    """Owns the single repeating refresh timer of a session.

    The timer is bound to the FeedQuery that was current when it was
    started. Changing the selection cancels it, fetches the new query
    immediately and starts a replacement, so at most one timer exists.
    In-flight fetches are never cancelled by a selection change; their
    results are discarded by the view state instead.
    """

    def __init__(
        self,
        state: ViewState,
        fetcher: ReviewFetcher,
        refresh_interval: float = DEFAULT_REFRESH_INTERVAL,
    ):
        if refresh_interval <= 0:
            raise ValueError("refresh_interval must be positive")
        self._state = state
        self._fetcher = fetcher
        self._refresh_interval = refresh_interval
        self._timer: asyncio.Task | None = None
        self._timer_query: FeedQuery | None = None
        self._fetches: set[asyncio.Task] = set()
        self.timers_started = 0
        self.timers_cancelled = 0

    @property
    def refresh_interval(self) -> float:
        return self._refresh_interval

    @property
    def running(self) -> bool:
        return self._timer is not None

    @property
    def in_flight(self) -> int:
        return len(self._fetches)

    def start(self) -> None:
        """Fetch the current query now and start its repeating timer."""
        if self._timer is not None:
            return
        self._establish()

    def change_selection(
        self, app_id: str | None = None, time_window: int | None = None
    ) -> bool:
        """Apply a selection change and re-arm the timer if the query changed."""
        if not self._state.select(app_id=app_id, time_window=time_window):
            return False
        if self._timer is not None:
            self._cancel_timer()
            self._establish()
        return True

    def refresh_now(self) -> None:
        self._issue(self._state.current_query)

    async def stop(self) -> None:
        """Release the timer and any outstanding fetch tasks."""
        tasks = list(self._fetches)
        if self._timer is not None:
            tasks.append(self._timer)
            self._cancel_timer()
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._fetches.clear()

    def status(self) -> dict:
        query = self._timer_query or self._state.current_query
        return {
            "app_id": query.app_id,
            "hours": query.hours,
            "refresh_interval_seconds": self._refresh_interval,
            "active": self.running,
            "in_flight": self.in_flight,
        }

    def _establish(self) -> None:
        query = self._state.current_query
        self._issue(query)
        self._timer_query = query
        self._timer = asyncio.get_running_loop().create_task(self._tick(query))
        self.timers_started += 1
        logger.info(
            "poll_timer_started",
            app_id=query.app_id,
            hours=query.hours,
            interval=self._refresh_interval,
        )

    def _cancel_timer(self) -> None:
        self._timer.cancel()
        self.timers_cancelled += 1
        logger.info(
            "poll_timer_cancelled",
            app_id=self._timer_query.app_id,
            hours=self._timer_query.hours,
        )
        self._timer = None
        self._timer_query = None

    async def _tick(self, query: FeedQuery) -> None:
        while True:
            await asyncio.sleep(self._refresh_interval)
            self._issue(query)

    def _issue(self, query: FeedQuery) -> None:
        self._state.begin_fetch(query)
        task = asyncio.get_running_loop().create_task(self._fetch(query))
        self._fetches.add(task)
        task.add_done_callback(lambda t: self._on_fetch_done(query, t))

    def _on_fetch_done(self, query: FeedQuery, task: asyncio.Task) -> None:
        self._fetches.discard(task)
        if task.cancelled():
            self._state.abandon_fetch(query)

    async def _fetch(self, query: FeedQuery) -> None:
        try:
            reviews = await self._fetcher.fetch_reviews(query)
        except FetchError as exc:
            self._state.apply_error(query, exc.message)
        except Exception as exc:
            logger.exception("reviews_fetch_crashed", app_id=query.app_id)
            self._state.apply_error(query, str(exc) or type(exc).__name__)
        else:
            self._state.apply_reviews(query, reviews)
