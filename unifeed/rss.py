"""RSS 2.0 feed extraction for unifeed."""

from .config import ParserConfig
from .errors import InvalidRssFeed, InvalidVersion, RssError, RssMissingRequiredField
from .logging_config import create_execution_logger
from .models import Element, Node, RssChannel, RssFeed, RssItem
from .xml_parser import parse_xml

# Channel element name -> RssChannel field
CHANNEL_FIELDS = {
    "title": "title",
    "link": "link",
    "description": "description",
    "language": "language",
    "copyright": "copyright",
    "managingEditor": "managing_editor",
    "webMaster": "web_master",
    "pubDate": "pub_date",
    "lastBuildDate": "last_build_date",
    "category": "category",
    "generator": "generator",
    "ttl": "ttl",
}

REQUIRED_CHANNEL_FIELDS = ("title", "link", "description")

# Item element name -> RssItem field
ITEM_FIELDS = {
    "title": "title",
    "link": "link",
    "description": "description",
    "author": "author",
    "category": "category",
    "comments": "comments",
    "guid": "guid",
    "pubDate": "pub_date",
    "source": "source",
}


class RssParser:
    """Extracts an RssFeed from an RSS 2.0 document."""

    def __init__(
        self, config: ParserConfig | None = None, execution_id: str | None = None
    ):
        """Initialize RssParser with configuration.

        Args:
            config: Parser configuration
            execution_id: Execution ID for logging context
        """
        self.config = config or ParserConfig()
        self.execution_id = execution_id
        self.logger = create_execution_logger(
            "rss_parser", execution_id, self.config.log_level
        )

    def parse(self, data: bytes | str) -> RssFeed:
        """Parse an RSS 2.0 document.

        Args:
            data: Raw document

        Returns:
            The extracted RssFeed

        Raises:
            XmlError: If the document is not well-formed
            RssError: If the document is not a valid RSS feed
        """
        root = parse_xml(data, self.config, self.execution_id)
        try:
            feed = self.parse_tree(root)
        except RssError as e:
            self.logger.log_parse_failure(e)
            raise

        self.logger.debug(
            "Parsed RSS feed",
            rss_version=feed.version,
            items_count=len(feed.channel.items),
        )
        return feed

    def parse_tree(self, root: Node) -> RssFeed:
        """Extract an RssFeed from an already parsed XML tree."""
        if not isinstance(root, Element) or root.name != "rss":
            raise InvalidRssFeed("Root element is not <rss>")

        version = root.get_attribute("version")
        if version is None:
            raise InvalidVersion("<rss> has no version attribute")

        channel_node = root.find("channel")
        if channel_node is None:
            raise InvalidRssFeed("<rss> has no <channel> element")

        return RssFeed(version=version, channel=self._parse_channel(channel_node))

    def _parse_channel(self, node: Element) -> RssChannel:
        values: dict[str, str | None] = {}
        items = []

        for child in node.elements():
            if child.name == "item":
                items.append(self._parse_item(child))
            elif child.name in CHANNEL_FIELDS:
                # Repeated elements overwrite, the last one wins
                values[CHANNEL_FIELDS[child.name]] = child.text

        missing = tuple(
            name for name in REQUIRED_CHANNEL_FIELDS if values.get(name) is None
        )
        if missing:
            raise RssMissingRequiredField(
                f"<channel> is missing required element(s): {', '.join(missing)}",
                fields=missing,
            )

        return RssChannel(items=items, **values)

    def _parse_item(self, node: Element) -> RssItem:
        item = RssItem()

        for child in node.elements():
            if child.name in ITEM_FIELDS:
                setattr(item, ITEM_FIELDS[child.name], child.text)
            elif child.name == "enclosure":
                url = child.get_attribute("url")
                if url is not None:
                    item.enclosure_url = url
                enclosure_type = child.get_attribute("type")
                if enclosure_type is not None:
                    item.enclosure_type = enclosure_type

        return item


def parse_rss(
    data: bytes | str,
    config: ParserConfig | None = None,
    execution_id: str | None = None,
) -> RssFeed:
    """Parse an RSS 2.0 document into an RssFeed."""
    return RssParser(config, execution_id).parse(data)
