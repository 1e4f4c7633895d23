"""
HTML parser for the engine.

The markup grammar (see grammar.lark) is a deliberately small, non-standard
subset of HTML. Unlike an HTML5 tree builder it never repairs markup: a missing
or mismatched close tag, a malformed attribute or leftover input fails the
whole parse.
"""

import logging
import re
from pathlib import Path
from typing import List, Optional, Tuple, Union

from lark import Lark, Token, Transformer
from lark.exceptions import UnexpectedInput, VisitError

from ..dom import AttrMap, Document, Element, Node, Text
from ..errors import HTMLParseError

logger = logging.getLogger(__name__)

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

# Rules of the grammar that can be parsed on their own.
START_RULES = ["start", "element", "text"]

_ATTRIBUTE_RE = re.compile(r'\s*(?P<name>[^\s=]+)\s*=\s*"(?P<value>[^"]*)"')

# Tag of the element synthesized around several top-level nodes.
DOCUMENT_ELEMENT_TAG = "html"


class DOMBuilder(Transformer):
    """Transform a Lark parse tree into DOM nodes."""

    def start(self, children: List[Node]) -> List[Node]:
        return list(children)

    def text(self, children: List[Token]) -> Text:
        return Text(str(children[0]))

    def attribute(self, children: List[Token]) -> Tuple[str, str]:
        match = _ATTRIBUTE_RE.match(str(children[0]))
        return match.group("name"), match.group("value")

    def open_tag(self, children: list) -> Tuple[Token, AttrMap]:
        # Later duplicates of an attribute name win.
        return children[0], dict(children[1:])

    def close_tag(self, children: List[Token]) -> Token:
        return children[0]

    def element(self, children: list) -> Element:
        (open_name, attributes), nodes, close_name = children[0], children[1:-1], children[-1]
        if str(open_name) != str(close_name):
            raise HTMLParseError(
                f"tag name of open tag and close tag mismatched: <{open_name}> closed by </{close_name}>",
                line=close_name.line,
                column=close_name.column,
            )
        return Element(str(open_name), attributes, nodes)


class HTMLParser:
    """
    Parser turning markup into DOM nodes.

    The Lark tables are built once per instance; a module-level instance backs
    the parse functions below.
    """

    def __init__(self):
        """Initialize the HTML parser."""
        self._lark = Lark(
            GRAMMAR_PATH.read_text(encoding="utf-8"),
            parser="lalr",
            lexer="contextual",
            start=START_RULES,
        )
        logger.debug("HTML parser initialized")

    def parse_rule(self, source: str, rule: str = "start"):
        """
        Parse source with one of the grammar's start rules.

        Args:
            source: Markup to parse
            rule: One of START_RULES

        Returns:
            A list of nodes for "start", a single node otherwise

        Raises:
            HTMLParseError: If the markup does not match the grammar
        """
        try:
            tree = self._lark.parse(source, start=rule)
        except UnexpectedInput as e:
            raise HTMLParseError(
                str(e).strip(),
                line=getattr(e, "line", None),
                column=getattr(e, "column", None),
            ) from e

        try:
            return DOMBuilder().transform(tree)
        except VisitError as e:
            if isinstance(e.orig_exc, HTMLParseError):
                raise e.orig_exc from None
            raise

    def parse_nodes(self, data: Union[bytes, str]) -> List[Node]:
        """
        Parse markup into a list of top-level nodes without building a document.

        Args:
            data: UTF-8 encoded bytes or an already decoded string

        Returns:
            Top-level nodes in document order
        """
        return self.parse_rule(_decode(data), "start")

    def parse(self,
              data: Union[bytes, str],
              url: str = "about:blank",
              document_uri: Optional[str] = None) -> Document:
        """
        Parse markup into a Document.

        A single top-level node becomes the document element; otherwise the
        top-level nodes are wrapped in a synthesized <html> element.

        Args:
            data: UTF-8 encoded bytes or an already decoded string
            url: URL the markup was loaded from
            document_uri: Document URI; defaults to url

        Returns:
            The parsed Document

        Raises:
            HTMLParseError: If the markup is malformed
        """
        nodes = self.parse_nodes(data)
        if len(nodes) == 1:
            document_element = nodes[0]
        else:
            logger.debug(f"Wrapping {len(nodes)} top-level nodes in <{DOCUMENT_ELEMENT_TAG}>")
            document_element = Element(DOCUMENT_ELEMENT_TAG, {}, nodes)
        return Document(document_element, url, document_uri)


def _decode(data: Union[bytes, str]) -> str:
    if isinstance(data, str):
        return data
    try:
        return bytes(data).decode("utf-8")
    except UnicodeDecodeError as e:
        raise HTMLParseError(f"resource is not valid UTF-8: {e}") from e


_parser: Optional[HTMLParser] = None


def get_parser() -> HTMLParser:
    """Return the shared parser, building it on first use."""
    global _parser
    if _parser is None:
        _parser = HTMLParser()
    return _parser


def parse(data: Union[bytes, str], url: str = "about:blank", document_uri: Optional[str] = None) -> Document:
    """Parse markup into a Document. See HTMLParser.parse."""
    return get_parser().parse(data, url, document_uri)


def parse_nodes(data: Union[bytes, str]) -> List[Node]:
    """Parse a markup fragment into its top-level nodes. See HTMLParser.parse_nodes."""
    return get_parser().parse_nodes(data)


def parse_element(source: str) -> Element:
    """Parse exactly one element, e.g. "<p>Hello</p>"."""
    return get_parser().parse_rule(source, "element")


def parse_text(source: str) -> Text:
    """Parse a run of character data containing no "<"."""
    return get_parser().parse_rule(source, "text")
