"""Format detection and normalization into the unified feed model."""

from .atom import AtomParser
from .config import ParserConfig
from .errors import FeedParseError, InvalidFeed, UnknownFeedFormat
from .json_feed import JsonFeedParser
from .logging_config import create_execution_logger
from .models import (
    AtomEntry,
    AtomFeed,
    AtomLink,
    Feed,
    FeedItem,
    FeedType,
    JsonFeed,
    JsonFeedItem,
    RssFeed,
    RssItem,
)
from .rss import RssParser
from .xml_parser import ASCII_WHITESPACE, decode_input

XML_DECLARATION = "<?xml"
# A declaration further in than this is not treated as leading
XML_DECLARATION_WINDOW = 10


def detect_feed_type(data: bytes | str) -> FeedType:
    """Guess the feed format from the start of the input.

    Only the prefix is inspected; the document is not validated.

    Args:
        data: Raw feed document

    Returns:
        The detected FeedType

    Raises:
        UnknownFeedFormat: If the input looks like none of the supported formats
    """
    text = decode_input(data)
    length = len(text)

    position = 0
    while position < length and text[position] in ASCII_WHITESPACE:
        position += 1
    if position >= length:
        raise UnknownFeedFormat("Input is empty")

    if text[position] == "{":
        return FeedType.JSON_FEED

    declaration = text.find(XML_DECLARATION, position)
    if declaration != -1 and declaration - position < XML_DECLARATION_WINDOW:
        declaration_end = text.find("?>", position)
        if declaration_end != -1:
            position = declaration_end + 2

    while position < length and text[position] in ASCII_WHITESPACE:
        position += 1
    if position >= length:
        raise UnknownFeedFormat("Input holds no root element")

    rss_at = text.find("<rss", position)
    feed_at = text.find("<feed", position)
    if rss_at != -1 and (feed_at == -1 or rss_at < feed_at):
        return FeedType.RSS
    if feed_at != -1:
        return FeedType.ATOM

    raise UnknownFeedFormat("Input is not an RSS, Atom or JSON Feed document")


def _atom_item_url(links: list[AtomLink]) -> str | None:
    """First rel="alternate" link, else the first link without a rel."""
    for link in links:
        if link.rel == "alternate":
            return link.href
    for link in links:
        if link.rel is None:
            return link.href
    return None


def _atom_feed_url(links: list[AtomLink]) -> str | None:
    for link in links:
        if link.rel == "alternate":
            return link.href
    return None


def normalize_rss_item(item: RssItem) -> FeedItem:
    return FeedItem(
        id=item.guid,
        title=item.title,
        url=item.link,
        content_html=None,
        content_text=None,
        summary=item.description,
        date_published=item.pub_date,
        date_modified=None,
        author=item.author,
        tags=[item.category] if item.category is not None else [],
    )


def normalize_atom_entry(entry: AtomEntry) -> FeedItem:
    return FeedItem(
        id=entry.id,
        title=entry.title,
        url=_atom_item_url(entry.links),
        content_html=entry.content,
        content_text=None,
        summary=entry.summary,
        date_published=entry.published,
        date_modified=entry.updated,
        author=entry.authors[0].name if entry.authors else None,
        tags=list(entry.categories),
    )


def normalize_json_feed_item(item: JsonFeedItem) -> FeedItem:
    return FeedItem(
        id=item.id,
        title=item.title,
        url=item.url,
        content_html=item.content_html,
        content_text=item.content_text,
        summary=item.summary,
        date_published=item.date_published,
        date_modified=item.date_modified,
        author=item.authors[0].name if item.authors else None,
        tags=list(item.tags),
    )


def normalize(source: RssFeed | AtomFeed | JsonFeed) -> Feed:
    """Map a format-specific model onto the unified Feed.

    The returned Feed keeps ``source`` so the format-specific view stays
    reachable.

    Raises:
        InvalidFeed: If ``source`` is not one of the supported models
    """
    if isinstance(source, RssFeed):
        channel = source.channel
        return Feed(
            feed_type=FeedType.RSS,
            title=channel.title,
            url=channel.link,
            description=channel.description,
            items=[normalize_rss_item(item) for item in channel.items],
            source=source,
        )

    if isinstance(source, AtomFeed):
        return Feed(
            feed_type=FeedType.ATOM,
            title=source.title,
            url=_atom_feed_url(source.links),
            description=source.subtitle,
            items=[normalize_atom_entry(entry) for entry in source.entries],
            source=source,
        )

    if isinstance(source, JsonFeed):
        return Feed(
            feed_type=FeedType.JSON_FEED,
            title=source.title,
            url=source.home_page_url,
            description=source.description,
            items=[normalize_json_feed_item(item) for item in source.items],
            source=source,
        )

    raise InvalidFeed(f"Cannot normalize a {type(source).__name__}")


class FeedParser:
    """Detects the format of a feed document and parses it into a Feed."""

    def __init__(
        self, config: ParserConfig | None = None, execution_id: str | None = None
    ):
        """Initialize FeedParser with configuration.

        Args:
            config: Parser configuration shared with the format parsers
            execution_id: Execution ID for logging context
        """
        self.config = config or ParserConfig()
        self.execution_id = execution_id
        self.logger = create_execution_logger(
            "feed_parser", execution_id, self.config.log_level
        )

    def parse(self, data: bytes | str) -> Feed:
        """Parse a feed document of any supported format.

        Args:
            data: Raw feed document

        Returns:
            The unified Feed

        Raises:
            FeedError: If the format cannot be detected
            XmlError, RssError, AtomError, JsonFeedError: Raised unchanged by
                the format-specific layer
        """
        text = decode_input(data)
        try:
            feed_type = detect_feed_type(text)
            self.logger.info("Detected feed format", feed_type=feed_type.value)
            feed = normalize(self._parse_source(feed_type, text))
        except FeedParseError as e:
            self.logger.log_parse_failure(e)
            raise

        self.logger.info(
            f"Parsed {feed_type.value} feed: {len(feed.items)} items found",
            feed_type=feed_type.value,
            items_count=len(feed.items),
        )
        return feed

    def _parse_source(
        self, feed_type: FeedType, text: str
    ) -> RssFeed | AtomFeed | JsonFeed:
        if feed_type is FeedType.RSS:
            return RssParser(self.config, self.execution_id).parse(text)
        if feed_type is FeedType.ATOM:
            return AtomParser(self.config, self.execution_id).parse(text)
        return JsonFeedParser(self.config, self.execution_id).parse(text)


def parse(
    data: bytes | str,
    config: ParserConfig | None = None,
    execution_id: str | None = None,
) -> Feed:
    """Parse a feed document of any supported format into a Feed."""
    return FeedParser(config, execution_id).parse(data)
