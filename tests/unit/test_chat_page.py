"""Unit tests for the chat page's pure rendering helpers."""

from datetime import UTC, datetime, timedelta

import pytest

from yuno.models.schemas import ChatMessage
from yuno.ui.chat_page import format_relative_date, message_to_html

NOW = datetime(2026, 3, 14, 12, 0, tzinfo=UTC)


class TestFormatRelativeDate:
    """Sidebar date labels."""

    @pytest.mark.parametrize(
        ("delta", "expected"),
        [
            (timedelta(hours=3), "Today"),
            (timedelta(days=1, hours=2), "Yesterday"),
            (timedelta(days=3), "3 days ago"),
            (timedelta(days=6, hours=23), "6 days ago"),
        ],
    )
    def test_recent_dates(self, delta: timedelta, expected: str) -> None:
        assert format_relative_date(NOW - delta, now=NOW) == expected

    def test_older_dates_show_calendar_date(self) -> None:
        assert format_relative_date(NOW - timedelta(days=30), now=NOW) == "Feb 12, 2026"

    def test_naive_values_treated_as_utc(self) -> None:
        naive = datetime(2026, 3, 13, 11, 0)

        assert format_relative_date(naive, now=NOW) == "Yesterday"


class TestMessageToHtml:
    """Transcript rendering."""

    def test_content_is_escaped(self) -> None:
        html = message_to_html(ChatMessage(role="user", content="<b>hi</b> & bye"))

        assert "&lt;b&gt;hi&lt;/b&gt; &amp; bye" in html
        assert "<b>" not in html

    def test_image_rendered_above_text(self) -> None:
        image = "data:image/png;base64,iVBORw0KGgo="
        html = message_to_html(ChatMessage(role="user", content="look", image=image))

        assert html.index("<img") < html.index("look")
        assert f'src="{image}"' in html
