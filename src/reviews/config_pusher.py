"""Pushes per-app polling configuration to the reviews backend."""

from urllib.parse import quote

import httpx
import structlog

from src.reviews.fetcher import backend_error, transport_message
from src.reviews.models import ConfigError, PollConfig

logger = structlog.get_logger(__name__)

CONFIGURE_FAILED = "failed to configure app"
CONFIGURE_OK = "App configuration updated successfully!"


class HttpConfigPusher:
    def __init__(
        self,
        base_url: str,
        api_base: str = "/api",
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ):
        self._base_url = base_url
        self._api_base = api_base.rstrip("/")
        self._transport = transport
        self._timeout = timeout

    async def push_config(self, app_id: str, config: PollConfig) -> str:
        """Persist ``config`` for ``app_id`` and return the backend's message.

        The pushed interval only drives the backend's own polling; it has no
        effect on the client's refresh cadence.
        """
        if not app_id or not app_id.strip():
            raise ValueError("app_id must be a non-empty string")

        url = f"{self._api_base}/apps/{quote(app_id, safe='')}/configure"
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                transport=self._transport,
                timeout=self._timeout,
            ) as client:
                response = await client.post(url, json=config.model_dump())
        except httpx.HTTPError as exc:
            logger.warning("config_push_failed", app_id=app_id, error=str(exc))
            raise ConfigError(transport_message(exc)) from exc

        if not response.is_success:
            message = backend_error(response) or CONFIGURE_FAILED
            logger.warning(
                "config_push_failed",
                app_id=app_id,
                status=response.status_code,
                error=message,
            )
            raise ConfigError(message)

        logger.info(
            "config_pushed",
            app_id=app_id,
            poll_interval=config.poll_interval,
            is_active=config.is_active,
        )
        try:
            body = response.json()
        except ValueError:
            return CONFIGURE_OK
        if isinstance(body, dict) and isinstance(body.get("message"), str):
            return body["message"]
        return CONFIGURE_OK
