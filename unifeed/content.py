"""Date and HTML helpers for normalized feed items."""

from datetime import datetime

from bs4 import BeautifulSoup
from dateutil import parser as date_parser


def parse_date(value: str | None) -> datetime | None:
    """Parse a feed timestamp into a timezone-aware datetime.

    Handles RFC 822 dates used by RSS as well as the RFC 3339 dates used
    by Atom and JSON Feed.

    Args:
        value: Raw date string from the feed, or None

    Returns:
        Parsed datetime, or None if the value is absent or unparseable
    """
    if not value:
        return None

    try:
        parsed = date_parser.parse(value)
    except (ValueError, TypeError, OverflowError):
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=datetime.now().astimezone().tzinfo)
    return parsed


def _normalize_whitespace(text: str) -> str:
    return " ".join(text.split())


def clean_html_content(content: str | None) -> str:
    """Render HTML content as one line of plain text.

    Script and style bodies are dropped. Entities are decoded, so an escaped
    ``&lt;`` in the source comes back as a literal ``<``.

    Args:
        content: Raw content that may contain HTML

    Returns:
        Text with tags removed and whitespace collapsed
    """
    if not content:
        return ""

    if "<" not in content and "&" not in content:
        return _normalize_whitespace(content)

    soup = BeautifulSoup(content, "html.parser")
    for tag in soup.find_all(["script", "style"]):
        tag.decompose()

    # Adjacent block elements must not run their words together
    return _normalize_whitespace(" ".join(soup.stripped_strings))

