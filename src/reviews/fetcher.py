"""Review feed fetcher for the backend reviews API using httpx."""

from urllib.parse import quote

import httpx
import structlog
from pydantic import ValidationError

from src.reviews.models import FeedQuery, FetchError, Review

logger = structlog.get_logger(__name__)

FETCH_FAILED = "failed to fetch reviews"


def backend_error(response: httpx.Response) -> str | None:
    """Return the backend's reported ``error`` message, if the body carries one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, str) and error:
            return error
    return None


def transport_message(exc: httpx.HTTPError) -> str:
    return str(exc) or type(exc).__name__


class HttpReviewFetcher:
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

    def _reviews_url(self, app_id: str) -> str:
        return f"{self._api_base}/reviews/{quote(app_id, safe='')}"

    async def fetch_reviews(self, query: FeedQuery) -> list[Review]:
        """Fetch one page of reviews for ``query``.

        Performs exactly one round trip and never touches view state, so the
        caller can decide whether the result is still relevant.

        Raises:
            FetchError: On a transport failure, a non-2xx response or an
                unreadable body.
        """
        params = {"hours": query.hours, "limit": query.limit}
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                transport=self._transport,
                timeout=self._timeout,
            ) as client:
                response = await client.get(self._reviews_url(query.app_id), params=params)
        except httpx.HTTPError as exc:
            logger.warning("reviews_fetch_failed", app_id=query.app_id, error=str(exc))
            raise FetchError(transport_message(exc)) from exc

        if not response.is_success:
            message = backend_error(response) or FETCH_FAILED
            logger.warning(
                "reviews_fetch_failed",
                app_id=query.app_id,
                status=response.status_code,
                error=message,
            )
            raise FetchError(message)

        try:
            body = response.json()
        except ValueError as exc:
            raise FetchError(f"invalid response body: {exc}") from exc

        raw_reviews = body.get("reviews") if isinstance(body, dict) else None
        if raw_reviews is None:
            raw_reviews = []
        if not isinstance(raw_reviews, list):
            raise FetchError(
                f"invalid review payload: expected a list, got {type(raw_reviews).__name__}"
            )
        try:
            reviews = [Review.model_validate(item) for item in raw_reviews]
        except ValidationError as exc:
            raise FetchError(f"invalid review payload: {exc.error_count()} error(s)") from exc

        logger.info(
            "reviews_fetched",
            app_id=query.app_id,
            hours=query.hours,
            count=len(reviews),
        )
        return reviews
