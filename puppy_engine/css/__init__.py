"""
CSS implementation for the engine.
This package provides the stylesheet model, simple selectors and the CSS parser.
"""

from .selector import (Selector, UniversalSelector, TypeSelector, ClassSelector,
                       AttributeSelector, AttributeSelectorOp)
from .stylesheet import Stylesheet, Rule, Declaration, CSSValue, Keyword, Length, Unit
from .parser import CSSParser, parse, parse_or_empty
from ..errors import CSSParseError

__all__ = [
    'Selector', 'UniversalSelector', 'TypeSelector', 'ClassSelector',
    'AttributeSelector', 'AttributeSelectorOp',
    'Stylesheet', 'Rule', 'Declaration', 'CSSValue', 'Keyword', 'Length', 'Unit',
    'CSSParser', 'CSSParseError', 'parse', 'parse_or_empty'
]
