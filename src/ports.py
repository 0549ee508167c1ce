from typing import Protocol

from src.reviews.models import FeedQuery, PollConfig, Review


class ReviewFetcher(Protocol):
    async def fetch_reviews(self, query: FeedQuery) -> list[Review]: ...


class ConfigPusher(Protocol):
    async def push_config(self, app_id: str, config: PollConfig) -> str: ...
