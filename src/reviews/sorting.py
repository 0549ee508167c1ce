"""Display ordering for review lists."""

from collections.abc import Iterable

from src.reviews.models import EPOCH, Review, SortMode


def _timestamp(review: Review):
    return review.submitted_at() or EPOCH


def sort_reviews(reviews: Iterable[Review], mode: SortMode | str) -> list[Review]:
    """Return a new list of ``reviews`` ordered for ``mode``.

    ``sorted`` is stable, including with ``reverse=True``, so reviews with
    equal keys keep their input order and re-sorting is a no-op.
    """
    mode = SortMode(mode)
    if mode is SortMode.NEWEST:
        return sorted(reviews, key=_timestamp, reverse=True)
    if mode is SortMode.OLDEST:
        return sorted(reviews, key=_timestamp)
    if mode is SortMode.RATING_HIGH:
        return sorted(reviews, key=lambda r: r.rating, reverse=True)
    return sorted(reviews, key=lambda r: r.rating)
