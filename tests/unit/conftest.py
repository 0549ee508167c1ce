"""Shared fixtures for review client unit tests."""

import pytest

from src.reviews.models import Review
from tests.helpers.reviews import make_review


@pytest.fixture
def sample_reviews() -> list[Review]:
    """Four reviews with mixed ratings and dates, in backend order."""
    return [
        make_review("r1", rating=3, submitted_date="2026-02-18T08:00:00Z"),
        make_review("r2", rating=5, submitted_date="2026-02-20T09:30:00Z"),
        make_review("r3", rating=1, submitted_date="2026-02-19T12:00:00Z"),
        make_review("r4", rating=5, submitted_date="2026-02-17T23:15:00Z"),
    ]
