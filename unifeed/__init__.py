"""unifeed: parse RSS 2.0, Atom 1.0 and JSON Feed documents into one model."""

from .atom import AtomParser, parse_atom
from .config import Config, ParserConfig
from .errors import (
    AtomError,
    AtomMissingRequiredField,
    FeedError,
    FeedParseError,
    InvalidAtomFeed,
    InvalidAttribute,
    InvalidElement,
    InvalidFeed,
    InvalidJsonFeed,
    InvalidRssFeed,
    InvalidVersion,
    InvalidXmlDeclaration,
    JsonFeedError,
    JsonFeedMissingRequiredField,
    MaxDepthExceeded,
    MissingClosingTag,
    MissingRequiredField,
    ParseError,
    RssError,
    RssMissingRequiredField,
    UnexpectedEndOfInput,
    UnknownFeedFormat,
    UnmatchedClosingTag,
    XmlError,
)
from .feeds import FeedParser, detect_feed_type, normalize, parse
from .json_feed import JsonFeedParser, parse_json_feed
from .models import (
    AtomEntry,
    AtomFeed,
    AtomLink,
    AtomPerson,
    Attribute,
    CData,
    Comment,
    Element,
    Feed,
    FeedItem,
    FeedType,
    JsonFeed,
    JsonFeedAttachment,
    JsonFeedAuthor,
    JsonFeedItem,
    Node,
    RssChannel,
    RssFeed,
    RssItem,
    Text,
)
from .rss import RssParser, parse_rss
from .xml_parser import XmlParser, parse_xml

__version__ = "0.1.0"
