"""Recursive-descent XML tree parser.

Supports the subset of XML that syndication feeds rely on: processing
instructions before the root, elements with quoted attributes, text runs,
comments and CDATA sections. Namespaces, DTDs and entity references are not
interpreted; attribute values and text are returned exactly as written
(text runs are trimmed of ASCII whitespace).
"""

from .config import DEFAULT_MAX_DEPTH, ParserConfig
from .errors import (
    InvalidAttribute,
    InvalidElement,
    InvalidXmlDeclaration,
    MaxDepthExceeded,
    MissingClosingTag,
    UnexpectedEndOfInput,
    UnmatchedClosingTag,
    XmlError,
)
from .logging_config import create_execution_logger
from .models import Attribute, CData, Comment, Element, Node, Text

# Space, tab, LF, CR, VT, FF
ASCII_WHITESPACE = " \t\n\r\x0b\x0c"

_NAME_PUNCTUATION = "_:-."


def decode_input(data: bytes | bytearray | memoryview | str) -> str:
    """Return feed input as text.

    Bytes are decoded as UTF-8 without validation: a leading BOM is dropped
    and undecodable sequences are replaced.
    """
    if isinstance(data, str):
        return data
    return bytes(data).decode("utf-8-sig", errors="replace")


def _is_name_char(char: str) -> bool:
    return char.isascii() and (char.isalnum() or char in _NAME_PUNCTUATION)


class XmlParser:
    """Single-pass parser turning an XML document into an Element tree."""

    def __init__(
        self,
        data: bytes | str,
        max_depth: int = DEFAULT_MAX_DEPTH,
        execution_id: str | None = None,
        log_level: str | None = None,
    ):
        """Initialize the parser over an in-memory document.

        Args:
            data: Raw document, bytes or already-decoded text
            max_depth: Maximum element nesting depth
            execution_id: Execution ID for logging context
            log_level: Optional level applied to the unifeed loggers
        """
        self.input = decode_input(data)
        self.position = 0
        self.max_depth = max_depth
        self.logger = create_execution_logger("xml_parser", execution_id, log_level)

    def parse(self) -> Node:
        """Parse the document and return its root node.

        Raises:
            XmlError: On the first grammar violation found
        """
        self.logger.debug("Starting XML parse", input_length=len(self.input))
        try:
            self._skip_whitespace()
            while self._lookahead("<?"):
                self._skip_processing_instruction()
                self._skip_whitespace()
            root = self._parse_node(depth=1)
        except RecursionError:
            error = MaxDepthExceeded(
                "Element nesting exceeds the interpreter recursion limit",
                self.position,
            )
            self.logger.log_parse_failure(error, position=self.position)
            raise error from None
        except XmlError as e:
            self.logger.log_parse_failure(e, position=self.position)
            raise

        self.logger.debug("Finished XML parse", position=self.position)
        return root

    def _parse_node(self, depth: int) -> Node:
        start = self.position
        if not self._expect("<"):
            raise InvalidElement("Expected '<' to open an element", start)

        if self._lookahead("!--"):
            return self._parse_comment()
        if self._lookahead("![CDATA["):
            return self._parse_cdata()

        if depth > self.max_depth:
            raise MaxDepthExceeded(
                f"Element nesting deeper than {self.max_depth} levels", start
            )

        name = self._parse_name()
        element = Element(name=name)
        self._skip_whitespace()

        while True:
            char = self._current()
            if char is None:
                raise UnexpectedEndOfInput(
                    f"Input ended inside the open tag of <{name}>", self.position
                )
            if char == ">" or self._lookahead("/>"):
                break

            attribute_name = self._parse_name()
            self._skip_whitespace()
            if not self._expect("="):
                raise InvalidAttribute(
                    f"Attribute '{attribute_name}' on <{name}> has no '='",
                    self.position,
                )
            self._skip_whitespace()
            value = self._parse_attribute_value()
            element.attributes.append(Attribute(attribute_name, value))
            self._skip_whitespace()

        if self._lookahead("/>"):
            self.position += 2
            return element

        self.position += 1  # '>'

        while True:
            self._skip_whitespace()
            if self._lookahead("</"):
                break

            char = self._current()
            if char is None:
                raise MissingClosingTag(f"Input ended before </{name}>", self.position)
            if char == "<":
                element.children.append(self._parse_node(depth + 1))
            else:
                text = self._parse_text()
                if text:
                    element.children.append(Text(text))

        closing_start = self.position
        self.position += 2
        closing_name = self._parse_name()
        if closing_name != name:
            raise UnmatchedClosingTag(
                f"Expected </{name}> but found </{closing_name}>", closing_start
            )
        self._skip_whitespace()
        if not self._expect(">"):
            raise MissingClosingTag(
                f"Closing tag </{name}> is not terminated", self.position
            )

        return element

    def _parse_text(self) -> str:
        end = self.input.find("<", self.position)
        if end == -1:
            end = len(self.input)
        text = self.input[self.position : end]
        self.position = end
        return text.strip(ASCII_WHITESPACE)

    def _parse_comment(self) -> Comment:
        self.position += 3  # '!--'
        end = self.input.find("-->", self.position)
        if end == -1:
            raise UnexpectedEndOfInput("Unterminated comment", self.position)
        value = self.input[self.position : end]
        self.position = end + 3
        return Comment(value)

    def _parse_cdata(self) -> CData:
        self.position += 8  # '![CDATA['
        end = self.input.find("]]>", self.position)
        if end == -1:
            raise UnexpectedEndOfInput("Unterminated CDATA section", self.position)
        value = self.input[self.position : end]
        self.position = end + 3
        return CData(value)

    def _parse_name(self) -> str:
        start = self.position
        length = len(self.input)
        while self.position < length and _is_name_char(self.input[self.position]):
            self.position += 1
        if self.position == start:
            raise InvalidElement("Expected a name", start)
        return self.input[start : self.position]

    def _parse_attribute_value(self) -> str:
        quote = self._current()
        if quote is None or quote not in "\"'":
            raise InvalidAttribute("Attribute value must be quoted", self.position)

        start = self.position + 1
        end = self.input.find(quote, start)
        if end == -1:
            raise InvalidAttribute("Unterminated attribute value", self.position)
        self.position = end + 1
        return self.input[start:end]

    def _skip_processing_instruction(self) -> None:
        start = self.position
        end = self.input.find("?>", start + 2)
        if end == -1:
            raise InvalidXmlDeclaration("Unterminated processing instruction", start)
        self.position = end + 2

    def _skip_whitespace(self) -> None:
        length = len(self.input)
        while self.position < length and self.input[self.position] in ASCII_WHITESPACE:
            self.position += 1

    def _current(self) -> str | None:
        if self.position >= len(self.input):
            return None
        return self.input[self.position]

    def _lookahead(self, literal: str) -> bool:
        return self.input.startswith(literal, self.position)

    def _expect(self, char: str) -> bool:
        if self._current() == char:
            self.position += 1
            return True
        return False


def parse_xml(
    data: bytes | str,
    config: ParserConfig | None = None,
    execution_id: str | None = None,
) -> Node:
    """Parse an XML document into a node tree.

    Args:
        data: Raw document
        config: Parser configuration, defaults to ParserConfig()
        execution_id: Execution ID for logging context

    Returns:
        The root node, normally an Element

    Raises:
        XmlError: If the document is malformed
    """
    config = config or ParserConfig()
    parser = XmlParser(
        data,
        max_depth=config.max_depth,
        execution_id=execution_id,
        log_level=config.log_level,
    )
    return parser.parse()
