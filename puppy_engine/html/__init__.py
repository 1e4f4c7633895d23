"""
HTML parsing for the engine.
This package turns UTF-8 markup into DOM trees using a strict, non-standard grammar.
"""

from .parser import HTMLParser, DOMBuilder, parse, parse_nodes, parse_element, parse_text
from ..errors import HTMLParseError

__all__ = [
    'HTMLParser', 'DOMBuilder', 'HTMLParseError',
    'parse', 'parse_nodes', 'parse_element', 'parse_text'
]
