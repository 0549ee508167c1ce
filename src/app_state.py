from typing import NamedTuple

from src.reviews.session import ReviewSession


class AppState(NamedTuple):
    session: ReviewSession
