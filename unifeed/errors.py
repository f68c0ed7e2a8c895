"""Exception hierarchy for unifeed parsing layers."""


class FeedParseError(Exception):
    """Base class for every error raised while parsing a feed."""


class MissingRequiredField(FeedParseError):
    """A required field is absent. Shared by every feed format."""

    def __init__(self, message: str, fields: tuple[str, ...] = ()):
        super().__init__(message)
        self.fields = fields


# XML layer


class XmlError(FeedParseError):
    """Structural or grammar error in an XML document."""

    def __init__(self, message: str, position: int | None = None):
        if position is not None:
            message = f"{message} (at offset {position})"
        super().__init__(message)
        self.position = position


class UnexpectedEndOfInput(XmlError):
    """Input ended inside a comment, CDATA section or element."""


class InvalidXmlDeclaration(XmlError):
    """A processing instruction was never terminated."""


class InvalidElement(XmlError):
    """Empty element name or malformed open tag."""


class InvalidAttribute(XmlError):
    """Attribute without '=' or with an unterminated quoted value."""


class MissingClosingTag(XmlError):
    """Input ended before an open element was closed."""


class UnmatchedClosingTag(XmlError):
    """Closing tag name differs from the element it closes."""


class MaxDepthExceeded(XmlError):
    """Element nesting is deeper than the configured limit."""


# RSS layer


class RssError(FeedParseError):
    """Error while extracting an RSS 2.0 feed."""


class InvalidRssFeed(RssError):
    """Root element is not <rss> or it has no <channel>."""


class InvalidVersion(RssError):
    """The <rss> element has no version attribute."""


class RssMissingRequiredField(RssError, MissingRequiredField):
    """A required channel element is missing."""


# Atom layer


class AtomError(FeedParseError):
    """Error while extracting an Atom 1.0 feed."""


class InvalidAtomFeed(AtomError):
    """Root element is not <feed>."""


class AtomMissingRequiredField(AtomError, MissingRequiredField):
    """A required feed, entry, link or person field is missing."""


# JSON Feed layer


class JsonFeedError(FeedParseError):
    """Error while extracting a JSON Feed document."""


class ParseError(JsonFeedError):
    """Input is not valid JSON or its root is not an object."""


class InvalidJsonFeed(JsonFeedError):
    """The version string is not a JSON Feed version URL."""


class JsonFeedMissingRequiredField(JsonFeedError, MissingRequiredField):
    """A required top-level, item or attachment field is missing."""


# Unified layer


class FeedError(FeedParseError):
    """Error raised by format detection or normalization."""


class UnknownFeedFormat(FeedError):
    """Input is neither RSS, Atom nor JSON Feed."""


class InvalidFeed(FeedError):
    """The normalizer found a structural problem in an extracted feed."""
