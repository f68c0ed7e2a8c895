"""Data models for unifeed."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from .content import clean_html_content, parse_date

# XML tree


@dataclass
class Attribute:
    """A single name="value" pair on an element."""

    name: str
    value: str


@dataclass
class Element:
    """An XML element owning its attributes and children in document order."""

    name: str
    attributes: list[Attribute] = field(default_factory=list)
    children: list["Node"] = field(default_factory=list)

    def get_attribute(self, name: str) -> str | None:
        """Return the value of the first attribute called ``name``."""
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute.value
        return None

    @property
    def text(self) -> str | None:
        """Value of the first text or CDATA child, skipping comments."""
        for child in self.children:
            if isinstance(child, (Text, CData)):
                return child.value
        return None

    def elements(self) -> list["Element"]:
        return [child for child in self.children if isinstance(child, Element)]

    def find(self, name: str) -> "Element | None":
        for child in self.children:
            if isinstance(child, Element) and child.name == name:
                return child
        return None


@dataclass
class Text:
    value: str


@dataclass
class Comment:
    value: str


@dataclass
class CData:
    value: str


Node = Element | Text | Comment | CData


# RSS 2.0


@dataclass
class RssItem:
    """Represents a single <item> of an RSS channel. Every field is optional."""

    title: str | None = None
    link: str | None = None
    description: str | None = None
    author: str | None = None
    category: str | None = None
    comments: str | None = None
    enclosure_url: str | None = None
    enclosure_type: str | None = None
    guid: str | None = None
    pub_date: str | None = None
    source: str | None = None


@dataclass
class RssChannel:
    """Represents the <channel> element of an RSS document."""

    title: str
    link: str
    description: str
    language: str | None = None
    copyright: str | None = None
    managing_editor: str | None = None
    web_master: str | None = None
    pub_date: str | None = None
    last_build_date: str | None = None
    category: str | None = None
    generator: str | None = None
    ttl: str | None = None
    items: list[RssItem] = field(default_factory=list)


@dataclass
class RssFeed:
    version: str
    channel: RssChannel


# Atom 1.0


@dataclass
class AtomLink:
    href: str
    rel: str | None = None
    type: str | None = None


@dataclass
class AtomPerson:
    name: str
    email: str | None = None
    uri: str | None = None


@dataclass
class AtomEntry:
    """Represents a single <entry> of an Atom feed."""

    id: str
    title: str
    updated: str
    published: str | None = None
    summary: str | None = None
    content: str | None = None
    links: list[AtomLink] = field(default_factory=list)
    authors: list[AtomPerson] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)


@dataclass
class AtomFeed:
    """Represents an Atom <feed> document."""

    id: str
    title: str
    updated: str
    subtitle: str | None = None
    links: list[AtomLink] = field(default_factory=list)
    authors: list[AtomPerson] = field(default_factory=list)
    entries: list[AtomEntry] = field(default_factory=list)


# JSON Feed 1.x


@dataclass
class JsonFeedAuthor:
    name: str | None = None
    url: str | None = None
    avatar: str | None = None


@dataclass
class JsonFeedAttachment:
    url: str
    mime_type: str
    title: str | None = None
    size_in_bytes: int | None = None


@dataclass
class JsonFeedItem:
    """Represents one object of a JSON Feed ``items`` array."""

    id: str
    url: str | None = None
    external_url: str | None = None
    title: str | None = None
    content_html: str | None = None
    content_text: str | None = None
    summary: str | None = None
    image: str | None = None
    banner_image: str | None = None
    date_published: str | None = None
    date_modified: str | None = None
    authors: list[JsonFeedAuthor] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    attachments: list[JsonFeedAttachment] = field(default_factory=list)


@dataclass
class JsonFeed:
    """Represents a JSON Feed document."""

    version: str
    title: str
    home_page_url: str | None = None
    feed_url: str | None = None
    description: str | None = None
    icon: str | None = None
    favicon: str | None = None
    language: str | None = None
    authors: list[JsonFeedAuthor] = field(default_factory=list)
    items: list[JsonFeedItem] = field(default_factory=list)


# Unified model


class FeedType(Enum):
    RSS = "rss"
    ATOM = "atom"
    JSON_FEED = "json_feed"


@dataclass
class FeedItem:
    """Represents a single item of any feed format after normalization."""

    id: str | None = None
    title: str | None = None
    url: str | None = None
    content_html: str | None = None
    content_text: str | None = None
    summary: str | None = None
    date_published: str | None = None
    date_modified: str | None = None
    author: str | None = None
    tags: list[str] = field(default_factory=list)

    @property
    def published_at(self) -> datetime | None:
        return parse_date(self.date_published)

    @property
    def modified_at(self) -> datetime | None:
        return parse_date(self.date_modified)

    def plain_text(self) -> str:
        """Return the item body as plain text.

        Prefers ``content_text``, then ``content_html`` and finally
        ``summary``, stripping markup from the latter two.
        """
        if self.content_text:
            return self.content_text
        if self.content_html:
            return clean_html_content(self.content_html)
        if self.summary:
            return clean_html_content(self.summary)
        return ""


@dataclass
class Feed:
    """A feed of any supported format in unified shape.

    ``source`` keeps the format-specific model the feed was built from.
    """

    feed_type: FeedType
    title: str
    url: str | None = None
    description: str | None = None
    items: list[FeedItem] = field(default_factory=list)
    source: RssFeed | AtomFeed | JsonFeed | None = field(default=None, repr=False)
