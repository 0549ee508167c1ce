"""HTML rendering of the review view for the operator page."""

from html import escape

from src.reviews.models import POLL_INTERVALS, TIME_WINDOWS, Review, SortMode
from src.reviews.state import ViewSnapshot

PAGE_TITLE = "App Store Reviews Viewer"
NO_REVIEWS = "No reviews found for the selected criteria."

SORT_LABELS = {
    SortMode.NEWEST: "Newest First",
    SortMode.OLDEST: "Oldest First",
    SortMode.RATING_HIGH: "Highest Rating",
    SortMode.RATING_LOW: "Lowest Rating",
}


def format_date(review: Review) -> str:
    """Format the submission date like ``Jan 5, 2026, 03:04 PM``.

    Falls back to the raw string when it cannot be parsed.
    """
    parsed = review.submitted_at()
    if parsed is None:
        return review.submitted_date
    return f"{parsed:%b} {parsed.day}, {parsed:%Y, %I:%M %p}"


def render_stars(rating: int) -> str:
    stars = []
    for i in range(5):
        css = "star filled" if i < rating else "star"
        stars.append(f'<span class="{css}">&#9733;</span>')
    return "".join(stars)


def render_review(review: Review) -> str:
    parts = [
        '<div class="review-card">',
        '<div class="review-header">',
        '<div class="review-info">',
        f'<div class="rating">{render_stars(review.rating)}</div>',
        f'<div class="author">{escape(review.author)}</div>',
        "</div>",
        f'<div class="date">{escape(format_date(review))}</div>',
        "</div>",
    ]
    if review.title:
        parts.append(f'<h4 class="review-title">{escape(review.title)}</h4>')
    parts.append(f'<p class="review-content">{escape(review.content)}</p>')
    parts.append("</div>")
    return "\n".join(parts)


def _options(choices: dict, selected) -> str:
    return "".join(
        f'<option value="{escape(str(value))}"'
        f'{" selected" if value == selected else ""}>{escape(label)}</option>'
        for value, label in choices.items()
    )


CONTROLS_SCRIPT = """<script>
async function send(method, url, body) {
  const response = await fetch(url, {
    method: method,
    headers: {"Content-Type": "application/json"},
    body: body === undefined ? undefined : JSON.stringify(body),
  });
  const data = await response.json().catch(() => ({}));
  return {ok: response.ok, data: data};
}

document.querySelectorAll("[data-endpoint]").forEach((control) => {
  control.addEventListener("change", async () => {
    const value = control.dataset.type === "int" ? parseInt(control.value, 10) : control.value;
    const result = await send("PUT", control.dataset.endpoint, {[control.name]: value});
    if (!result.ok) {
      alert(`Update failed: ${JSON.stringify(result.data.detail || result.data)}`);
    }
    window.location.reload();
  });
});

document.getElementById("configure").addEventListener("click", async () => {
  const result = await send("POST", "/api/v1/configure");
  alert(result.data.message || (result.ok ? "Configured" : "Configuration failed"));
});
</script>"""


def render_controls(snapshot: ViewSnapshot) -> str:
    """Operator controls; each change is sent to its /api/v1 endpoint."""
    windows = dict(TIME_WINDOWS)
    if snapshot.time_window not in windows:
        windows[snapshot.time_window] = f"Last {snapshot.time_window} hours"
    sort_modes = {mode.value: label for mode, label in SORT_LABELS.items()}
    intervals = {token: token for token in POLL_INTERVALS}
    return "\n".join(
        [
            '<div class="controls">',
            f'<label>App ID: <input name="app_id" value="{escape(snapshot.app_id)}"'
            ' data-endpoint="/api/v1/selection"></label>',
            '<label>Time Window: <select name="time_window"'
            ' data-endpoint="/api/v1/selection" data-type="int">'
            f"{_options(windows, snapshot.time_window)}</select></label>",
            '<label>Sort By: <select name="sort_mode" data-endpoint="/api/v1/sort">'
            f"{_options(sort_modes, snapshot.sort_mode.value)}</select></label>",
            '<label>Poll Interval: <select name="poll_interval"'
            ' data-endpoint="/api/v1/poll-interval">'
            f"{_options(intervals, snapshot.poll_interval)}</select></label>",
            '<button class="btn" id="configure" type="button">Configure App</button>',
            "</div>",
        ]
    )


def render_page(snapshot: ViewSnapshot) -> str:
    body = [
        '<div class="container">',
        '<div class="header">',
        f"<h1>{PAGE_TITLE}</h1>",
        render_controls(snapshot),
        "</div>",
        '<div class="reviews-container">',
    ]
    if snapshot.error:
        body.append(f'<div class="error">Error: {escape(snapshot.error)}</div>')
    body.append(
        f'<div class="stats">Showing {snapshot.count} reviews from the last '
        f"{snapshot.time_window} hours for App ID: {escape(snapshot.app_id)}</div>"
    )
    if snapshot.loading:
        body.append('<div class="loading">Loading reviews...</div>')
    body.append('<div class="reviews-list">')
    body.extend(render_review(review) for review in snapshot.reviews)
    if not snapshot.loading and not snapshot.reviews:
        body.append(f'<div class="no-reviews">{NO_REVIEWS}</div>')
    body.extend(["</div>", "</div>", "</div>"])

    return "\n".join(
        [
            "<!DOCTYPE html>",
            "<html>",
            f"<head><meta charset=\"utf-8\"><title>{PAGE_TITLE}</title></head>",
            "<body>",
            *body,
            CONTROLS_SCRIPT,
            "</body>",
            "</html>",
        ]
    )
