"""Unit tests for item content helpers."""

from datetime import datetime, timezone

from unifeed.content import clean_html_content, parse_date
from unifeed.models import FeedItem


class TestContentUnit:
    """Unit tests for date parsing and HTML cleaning."""

    def test_rfc822_date(self):
        result = parse_date("Mon, 01 Jan 2024 10:00:00 GMT")

        assert result == datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)

    def test_rfc3339_date(self):
        result = parse_date("2024-01-01T10:00:00+02:00")

        assert result.utcoffset().total_seconds() == 7200
        assert (result.year, result.month, result.day, result.hour) == (2024, 1, 1, 10)

    def test_naive_date_gets_timezone(self):
        result = parse_date("2024-01-01 10:00:00")

        assert result.tzinfo is not None

    def test_absent_or_invalid_date(self):
        assert parse_date(None) is None
        assert parse_date("") is None
        assert parse_date("not a date at all") is None

    def test_html_cleaning_specific_cases(self):
        """Test HTML cleaning with specific problematic cases."""
        test_cases = [
            ("<p>Simple paragraph</p>", "Simple paragraph"),
            ("<div><h1>Title</h1><p>Content</p></div>", "Title Content"),
            ("<script>alert('xss')</script><p>Safe content</p>", "Safe content"),
            ("<style>body{color:red}</style><p>Styled content</p>", "Styled content"),
            ("Plain text without HTML", "Plain text without HTML"),
            ("<p>Multiple  \n\n  spaces   and\tlines</p>", "Multiple spaces and lines"),
        ]

        for html_input, expected_output in test_cases:
            result = clean_html_content(html_input)
            assert result == expected_output, f"Failed for input: {html_input}"

    def test_empty_and_none_content_handling(self):
        assert clean_html_content("") == ""
        assert clean_html_content(None) == ""
        assert clean_html_content("   ") == ""
        assert clean_html_content("<div></div>") == ""

    def test_escaped_markup_is_kept_as_text(self):
        assert clean_html_content("<p>1 &lt; 2 &amp;&amp; 3 &gt; 2</p>") == "1 < 2 && 3 > 2"
        assert clean_html_content("AT&amp;T") == "AT&T"
        assert clean_html_content("<ul><li>one</li><li>two</li></ul>") == "one two"


class TestFeedItemContent:
    """Convenience accessors on FeedItem."""

    def test_plain_text_prefers_content_text(self):
        item = FeedItem(
            content_text="Text body", content_html="<p>Html</p>", summary="Summary"
        )

        assert item.plain_text() == "Text body"

    def test_plain_text_falls_back_to_html_then_summary(self):
        assert FeedItem(content_html="<p>Html <b>body</b></p>").plain_text() == "Html body"
        assert FeedItem(summary="<p>Only summary</p>").plain_text() == "Only summary"
        assert FeedItem().plain_text() == ""

    def test_dates(self):
        item = FeedItem(
            date_published="Mon, 01 Jan 2024 10:00:00 GMT",
            date_modified="garbage",
        )

        assert item.published_at == datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
        assert item.modified_at is None
        assert FeedItem().published_at is None
