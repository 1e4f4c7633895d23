"""
puppy-engine - A small web document engine in Python.

Parses a strict HTML subset into a DOM, resolves styles from a minimal CSS
subset and builds block/inline layout box trees.
"""

# Package information
__version__ = "0.1.0"
__description__ = "A small web document engine: HTML, CSS, style and layout trees"

from .errors import PuppyError, HTMLParseError, CSSParseError, NoDocumentError
from .core import Engine

__all__ = ['Engine', 'PuppyError', 'HTMLParseError', 'CSSParseError', 'NoDocumentError', '__version__']
