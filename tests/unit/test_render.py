"""Tests for the operator page renderer."""

from src.reviews.models import SortMode
from src.reviews.render import (
    CONTROLS_SCRIPT,
    NO_REVIEWS,
    format_date,
    render_controls,
    render_page,
    render_stars,
)
from src.reviews.state import ViewSnapshot
from tests.helpers.reviews import make_review


def make_snapshot(**kwargs) -> ViewSnapshot:
    params = {
        "app_id": "595068606",
        "time_window": 48,
        "sort_mode": SortMode.NEWEST,
        "poll_interval": "5m",
        "loading": False,
        "error": None,
        "reviews": [],
        "last_updated": None,
    }
    params.update(kwargs)
    return ViewSnapshot(**params)


class TestFormatDate:
    def test_formats_parsed_date(self):
        """Dates render as abbreviated month, day, year and 12-hour time."""
        review = make_review("a", submitted_date="2026-02-05T15:04:00Z")
        assert format_date(review) == "Feb 5, 2026, 03:04 PM"

    def test_unparsable_date_rendered_raw(self):
        """Unparsable dates are shown as received."""
        review = make_review("a", submitted_date="sometime")
        assert format_date(review) == "sometime"

    def test_out_of_range_date_rendered_raw(self):
        """Dates that overflow on UTC conversion are shown as received."""
        review = make_review("a", submitted_date="0001-01-01T00:00:00+01:00")
        assert format_date(review) == "0001-01-01T00:00:00+01:00"


class TestRenderStars:
    def test_fills_rating_stars(self):
        """The first `rating` stars are filled out of five."""
        html = render_stars(3)
        assert html.count('class="star filled"') == 3
        assert html.count('class="star"') == 2


class TestRenderPage:
    def test_stats_line(self):
        """The stats line reports count, window and app id."""
        snapshot = make_snapshot(reviews=[make_review("a"), make_review("b")])
        html = render_page(snapshot)
        assert "Showing 2 reviews from the last 48 hours for App ID: 595068606" in html

    def test_empty_and_idle_shows_placeholder(self):
        """With no reviews and no fetch running, the placeholder is shown."""
        html = render_page(make_snapshot())
        assert NO_REVIEWS in html
        assert "Loading reviews..." not in html

    def test_loading_hides_placeholder(self):
        """While loading, the loading notice replaces the placeholder."""
        html = render_page(make_snapshot(loading=True))
        assert "Loading reviews..." in html
        assert NO_REVIEWS not in html

    def test_error_banner(self):
        """An error is shown in a banner."""
        html = render_page(make_snapshot(error="rate limited"))
        assert '<div class="error">Error: rate limited</div>' in html

    def test_user_text_is_escaped(self):
        """Review text cannot inject markup."""
        review = make_review("a", title="<script>x</script>", author="<b>eve</b>")
        html = render_page(make_snapshot(reviews=[review]))
        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "&lt;b&gt;eve&lt;/b&gt;" in html

    def test_title_omitted_when_absent(self):
        """Reviews without a title render no title element."""
        html = render_page(make_snapshot(reviews=[make_review("a", title=None)]))
        assert "review-title" not in html

    def test_reviews_rendered_in_snapshot_order(self):
        """Cards follow the already-sorted snapshot order."""
        reviews = [make_review("a", author="first"), make_review("b", author="second")]
        html = render_page(make_snapshot(reviews=reviews))
        assert html.index("first") < html.index("second")

    def test_custom_time_window_is_selectable(self):
        """A window outside the presets still appears as the selected option."""
        html = render_page(make_snapshot(time_window=72))
        assert '<option value="72" selected>Last 72 hours</option>' in html


class TestRenderControls:
    def test_controls_target_api_endpoints(self):
        """Each control is bound to the endpoint that applies it."""
        html = render_controls(make_snapshot())
        assert 'name="app_id" value="595068606" data-endpoint="/api/v1/selection"' in html
        assert 'name="time_window" data-endpoint="/api/v1/selection" data-type="int"' in html
        assert 'name="sort_mode" data-endpoint="/api/v1/sort"' in html
        assert 'name="poll_interval" data-endpoint="/api/v1/poll-interval"' in html

    def test_configure_button_rendered(self):
        """The page offers a Configure App trigger."""
        html = render_controls(make_snapshot())
        assert '<button class="btn" id="configure" type="button">Configure App</button>' in html

    def test_page_includes_control_script(self):
        """The page script sends control changes and the configure action."""
        html = render_page(make_snapshot())
        assert CONTROLS_SCRIPT in html
        assert '"/api/v1/configure"' in CONTROLS_SCRIPT
        assert 'send("PUT", control.dataset.endpoint' in CONTROLS_SCRIPT

    def test_current_selection_is_preselected(self):
        """The selects show the current sort mode and poll interval."""
        html = render_controls(make_snapshot(sort_mode=SortMode.RATING_LOW, poll_interval="1h"))
        assert '<option value="rating-low" selected>Lowest Rating</option>' in html
        assert '<option value="1h" selected>1h</option>' in html
