"""JSON Feed 1.x extraction for unifeed."""

import json
from typing import Any

from .config import ParserConfig
from .errors import (
    InvalidJsonFeed,
    JsonFeedError,
    JsonFeedMissingRequiredField,
    ParseError,
)
from .logging_config import create_execution_logger
from .models import JsonFeed, JsonFeedAttachment, JsonFeedAuthor, JsonFeedItem

VERSION_PREFIX = "https://jsonfeed.org/version/"

FEED_STRING_FIELDS = (
    "home_page_url",
    "feed_url",
    "description",
    "icon",
    "favicon",
    "language",
)

ITEM_STRING_FIELDS = (
    "url",
    "external_url",
    "title",
    "content_html",
    "content_text",
    "summary",
    "image",
    "banner_image",
    "date_published",
    "date_modified",
)


def _get_string(obj: dict[str, Any], key: str) -> str | None:
    """Return obj[key] if it is a JSON string, None otherwise."""
    value = obj.get(key)
    return value if isinstance(value, str) else None


def _get_objects(obj: dict[str, Any], key: str) -> list[dict[str, Any]]:
    """Return the object elements of the array obj[key], skipping the rest."""
    value = obj.get(key)
    if not isinstance(value, list):
        return []
    return [element for element in value if isinstance(element, dict)]


def _require_string(obj: dict[str, Any], key: str, context: str) -> str:
    value = _get_string(obj, key)
    if value is None:
        raise JsonFeedMissingRequiredField(
            f"{context} is missing required string field '{key}'", fields=(key,)
        )
    return value


class JsonFeedParser:
    """Extracts a JsonFeed from a JSON Feed document."""

    def __init__(
        self, config: ParserConfig | None = None, execution_id: str | None = None
    ):
        """Initialize JsonFeedParser with configuration.

        Args:
            config: Parser configuration
            execution_id: Execution ID for logging context
        """
        config = config or ParserConfig()
        self.logger = create_execution_logger(
            "json_feed_parser", execution_id, config.log_level
        )

    def parse(self, data: bytes | str) -> JsonFeed:
        """Parse a JSON Feed document.

        Args:
            data: Raw document

        Returns:
            The extracted JsonFeed

        Raises:
            JsonFeedError: If the input is not JSON or not a valid JSON Feed
        """
        try:
            feed = self.parse_value(self._load(data))
        except JsonFeedError as e:
            self.logger.log_parse_failure(e)
            raise

        self.logger.debug(
            "Parsed JSON Feed",
            feed_version=feed.version,
            items_count=len(feed.items),
        )
        return feed

    def _load(self, data: bytes | str) -> Any:
        try:
            return json.loads(data)
        except (ValueError, TypeError) as e:
            raise ParseError(f"Invalid JSON: {e}") from e
        except RecursionError:
            raise ParseError("JSON nesting is too deep") from None

    def parse_value(self, root: Any) -> JsonFeed:
        """Extract a JsonFeed from an already decoded JSON value."""
        if not isinstance(root, dict):
            raise ParseError(
                f"JSON Feed root must be an object, not {type(root).__name__}"
            )

        version = _require_string(root, "version", "feed")
        title = _require_string(root, "title", "feed")

        if not version.startswith(VERSION_PREFIX):
            raise InvalidJsonFeed(f"Unsupported JSON Feed version: {version}")

        return JsonFeed(
            version=version,
            title=title,
            authors=self._parse_authors(root),
            items=[self._parse_item(item) for item in _get_objects(root, "items")],
            **{key: _get_string(root, key) for key in FEED_STRING_FIELDS},
        )

    def _parse_item(self, obj: dict[str, Any]) -> JsonFeedItem:
        item_id = _require_string(obj, "id", "item")

        tags = obj.get("tags")
        if isinstance(tags, list):
            tags = [tag for tag in tags if isinstance(tag, str)]
        else:
            tags = []

        return JsonFeedItem(
            id=item_id,
            authors=self._parse_authors(obj),
            tags=tags,
            attachments=[
                self._parse_attachment(attachment)
                for attachment in _get_objects(obj, "attachments")
            ],
            **{key: _get_string(obj, key) for key in ITEM_STRING_FIELDS},
        )

    def _parse_authors(self, obj: dict[str, Any]) -> list[JsonFeedAuthor]:
        """Read the ``authors`` array, falling back to the 1.0 ``author`` object."""
        if "authors" in obj:
            objects = _get_objects(obj, "authors")
        elif isinstance(obj.get("author"), dict):
            objects = [obj["author"]]
        else:
            objects = []

        return [
            JsonFeedAuthor(
                name=_get_string(author, "name"),
                url=_get_string(author, "url"),
                avatar=_get_string(author, "avatar"),
            )
            for author in objects
        ]

    def _parse_attachment(self, obj: dict[str, Any]) -> JsonFeedAttachment:
        url = _require_string(obj, "url", "attachment")
        mime_type = _require_string(obj, "mime_type", "attachment")

        size = obj.get("size_in_bytes")
        # bool is an int subclass but not a JSON integer
        if not isinstance(size, int) or isinstance(size, bool) or size < 0:
            size = None

        return JsonFeedAttachment(
            url=url,
            mime_type=mime_type,
            title=_get_string(obj, "title"),
            size_in_bytes=size,
        )


def parse_json_feed(
    data: bytes | str,
    config: ParserConfig | None = None,
    execution_id: str | None = None,
) -> JsonFeed:
    """Parse a JSON Feed document into a JsonFeed."""
    return JsonFeedParser(config, execution_id).parse(data)
