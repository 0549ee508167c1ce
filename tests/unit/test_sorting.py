"""Tests for review display ordering."""

import pytest

from src.reviews.models import SortMode
from src.reviews.sorting import sort_reviews
from tests.helpers.reviews import make_review


def ids(reviews) -> list[str]:
    return [r.id for r in reviews]


class TestSortReviews:
    def test_newest_first(self, sample_reviews):
        """newest orders by submitted_date descending."""
        assert ids(sort_reviews(sample_reviews, SortMode.NEWEST)) == ["r2", "r3", "r1", "r4"]

    def test_oldest_first(self, sample_reviews):
        """oldest orders by submitted_date ascending."""
        assert ids(sort_reviews(sample_reviews, SortMode.OLDEST)) == ["r4", "r1", "r3", "r2"]

    def test_rating_high_keeps_tie_order(self, sample_reviews):
        """rating-high sorts descending and keeps equal ratings in input order."""
        assert ids(sort_reviews(sample_reviews, "rating-high")) == ["r2", "r4", "r1", "r3"]

    def test_rating_low_keeps_tie_order(self, sample_reviews):
        """rating-low sorts ascending and keeps equal ratings in input order."""
        assert ids(sort_reviews(sample_reviews, "rating-low")) == ["r3", "r1", "r2", "r4"]

    def test_out_of_range_dates_sort_as_oldest(self):
        """Dates that overflow on UTC conversion fall back to the epoch."""
        reviews = [
            make_review("overflow", submitted_date="0001-01-01T00:00:00+01:00"),
            make_review("good", submitted_date="2020-01-01T00:00:00Z"),
            make_review("ancient", submitted_date="1900-01-01T00:00:00Z"),
        ]
        assert ids(sort_reviews(reviews, SortMode.NEWEST)) == ["good", "overflow", "ancient"]
        assert ids(sort_reviews(reviews, SortMode.OLDEST)) == ["ancient", "overflow", "good"]

    def test_unparsable_dates_sort_as_oldest(self):
        """Unparsable dates fall back to the epoch under date modes."""
        reviews = [
            make_review("bad", submitted_date="not a date"),
            make_review("good", submitted_date="2020-01-01T00:00:00Z"),
        ]
        assert ids(sort_reviews(reviews, SortMode.NEWEST)) == ["good", "bad"]
        assert ids(sort_reviews(reviews, SortMode.OLDEST)) == ["bad", "good"]

    def test_equal_dates_keep_input_order(self):
        """Reviews submitted at the same instant keep their input order."""
        reviews = [
            make_review("a", submitted_date="2026-01-01T00:00:00Z"),
            make_review("b", submitted_date="2026-01-01T00:00:00+00:00"),
            make_review("c", submitted_date="garbage"),
            make_review("d", submitted_date="also garbage"),
        ]
        assert ids(sort_reviews(reviews, SortMode.NEWEST)) == ["a", "b", "c", "d"]
        assert ids(sort_reviews(reviews, SortMode.OLDEST)) == ["c", "d", "a", "b"]

    def test_mixed_offsets_compare_by_instant(self):
        """Dates with different offsets are compared as instants."""
        reviews = [
            make_review("utc", submitted_date="2026-01-01T10:00:00Z"),
            make_review("plus2", submitted_date="2026-01-01T11:00:00+02:00"),
        ]
        assert ids(sort_reviews(reviews, SortMode.NEWEST)) == ["utc", "plus2"]

    @pytest.mark.parametrize("mode", list(SortMode))
    def test_idempotent(self, sample_reviews, mode):
        """Sorting an already sorted list under the same mode is a no-op."""
        once = sort_reviews(sample_reviews, mode)
        assert sort_reviews(once, mode) == once

    @pytest.mark.parametrize("mode", list(SortMode))
    def test_does_not_mutate_input(self, sample_reviews, mode):
        """The input list is left untouched and a new list is returned."""
        before = list(sample_reviews)
        result = sort_reviews(sample_reviews, mode)
        assert sample_reviews == before
        assert result is not sample_reviews

    def test_empty_list(self):
        """An empty list sorts to an empty list."""
        assert sort_reviews([], SortMode.NEWEST) == []

    def test_unknown_mode_raises(self, sample_reviews):
        """Unknown mode strings are rejected."""
        with pytest.raises(ValueError):
            sort_reviews(sample_reviews, "by-author")
