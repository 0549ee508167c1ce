"""ReviewSession application layer: orchestrates state, scheduler and pusher."""

from dataclasses import dataclass

import structlog

from src.ports import ConfigPusher
from src.reviews.models import ConfigError, PollConfig, SortMode
from src.reviews.scheduler import PollScheduler
from src.reviews.state import ViewSnapshot, ViewState

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ConfigNotice:
    ok: bool
    message: str


class ReviewSession:
    def __init__(
        self,
        state: ViewState,
        scheduler: PollScheduler,
        pusher: ConfigPusher,
    ):
        self._state = state
        self._scheduler = scheduler
        self._pusher = pusher

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def scheduler(self) -> PollScheduler:
        return self._scheduler

    def view(self) -> ViewSnapshot:
        return self._state.snapshot()

    def select(self, app_id: str | None = None, time_window: int | None = None) -> bool:
        return self._scheduler.change_selection(app_id=app_id, time_window=time_window)

    def set_sort_mode(self, mode: SortMode | str) -> None:
        self._state.set_sort_mode(mode)

    def set_poll_interval(self, token: str) -> None:
        self._state.set_poll_interval(token)

    def refresh(self) -> None:
        self._scheduler.refresh_now()

    def polling_status(self) -> dict:
        return self._scheduler.status()

    async def configure(self) -> ConfigNotice:
        """Push the selected poll interval for the selected app.

        The outcome is returned once and not kept in the view state.
        """
        app_id = self._state.app_id
        config = PollConfig(poll_interval=self._state.poll_interval, is_active=True)
        logger.info("config_requested", app_id=app_id, poll_interval=config.poll_interval)
        try:
            message = await self._pusher.push_config(app_id, config)
        except ConfigError as exc:
            return ConfigNotice(ok=False, message=f"Configuration failed: {exc.message}")
        return ConfigNotice(ok=True, message=message)
