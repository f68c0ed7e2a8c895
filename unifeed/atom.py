"""Atom 1.0 feed extraction for unifeed."""

from .config import ParserConfig
from .errors import AtomError, AtomMissingRequiredField, InvalidAtomFeed
from .logging_config import create_execution_logger
from .models import AtomEntry, AtomFeed, AtomLink, AtomPerson, Element, Node
from .xml_parser import parse_xml

REQUIRED_FIELDS = ("id", "title", "updated")
FEED_TEXT_FIELDS = REQUIRED_FIELDS + ("subtitle",)
ENTRY_TEXT_FIELDS = REQUIRED_FIELDS + ("published", "summary", "content")
PERSON_FIELDS = ("name", "email", "uri")


def _require(values: dict[str, str | None], element: str) -> None:
    missing = tuple(name for name in REQUIRED_FIELDS if values.get(name) is None)
    if missing:
        raise AtomMissingRequiredField(
            f"<{element}> is missing required element(s): {', '.join(missing)}",
            fields=missing,
        )


class AtomParser:
    """Extracts an AtomFeed from an Atom 1.0 document.

    Namespaces are not interpreted: elements are matched by their literal
    tag name, so ``<feed>`` is accepted with or without an xmlns declaration.
    """

    def __init__(
        self, config: ParserConfig | None = None, execution_id: str | None = None
    ):
        """Initialize AtomParser with configuration.

        Args:
            config: Parser configuration
            execution_id: Execution ID for logging context
        """
        self.config = config or ParserConfig()
        self.execution_id = execution_id
        self.logger = create_execution_logger(
            "atom_parser", execution_id, self.config.log_level
        )

    def parse(self, data: bytes | str) -> AtomFeed:
        """Parse an Atom 1.0 document.

        Args:
            data: Raw document

        Returns:
            The extracted AtomFeed

        Raises:
            XmlError: If the document is not well-formed
            AtomError: If the document is not a valid Atom feed
        """
        root = parse_xml(data, self.config, self.execution_id)
        try:
            feed = self.parse_tree(root)
        except AtomError as e:
            self.logger.log_parse_failure(e)
            raise

        self.logger.debug(
            "Parsed Atom feed", feed_id=feed.id, entries_count=len(feed.entries)
        )
        return feed

    def parse_tree(self, root: Node) -> AtomFeed:
        """Extract an AtomFeed from an already parsed XML tree."""
        if not isinstance(root, Element) or root.name != "feed":
            raise InvalidAtomFeed("Root element is not <feed>")

        values: dict[str, str | None] = {}
        links = []
        authors = []
        entries = []

        for child in root.elements():
            if child.name in FEED_TEXT_FIELDS:
                values[child.name] = child.text
            elif child.name == "link":
                links.append(self._parse_link(child))
            elif child.name == "author":
                authors.append(self._parse_person(child))
            elif child.name == "entry":
                entries.append(self._parse_entry(child))

        _require(values, "feed")
        return AtomFeed(links=links, authors=authors, entries=entries, **values)

    def _parse_entry(self, node: Element) -> AtomEntry:
        values: dict[str, str | None] = {}
        links = []
        authors = []
        categories = []

        for child in node.elements():
            if child.name in ENTRY_TEXT_FIELDS:
                values[child.name] = child.text
            elif child.name == "link":
                links.append(self._parse_link(child))
            elif child.name == "author":
                authors.append(self._parse_person(child))
            elif child.name == "category":
                term = child.get_attribute("term")
                if term is not None:
                    categories.append(term)

        _require(values, "entry")
        return AtomEntry(links=links, authors=authors, categories=categories, **values)

    def _parse_link(self, node: Element) -> AtomLink:
        href = node.get_attribute("href")
        if href is None:
            raise AtomMissingRequiredField(
                "<link> has no href attribute", fields=("href",)
            )
        return AtomLink(
            href=href, rel=node.get_attribute("rel"), type=node.get_attribute("type")
        )

    def _parse_person(self, node: Element) -> AtomPerson:
        values: dict[str, str | None] = {}
        for child in node.elements():
            if child.name in PERSON_FIELDS:
                values[child.name] = child.text

        if values.get("name") is None:
            raise AtomMissingRequiredField(
                f"<{node.name}> has no <name>", fields=("name",)
            )
        return AtomPerson(**values)


def parse_atom(
    data: bytes | str,
    config: ParserConfig | None = None,
    execution_id: str | None = None,
) -> AtomFeed:
    """Parse an Atom 1.0 document into an AtomFeed."""
    return AtomParser(config, execution_id).parse(data)
