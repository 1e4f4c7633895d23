"""
Style resolution for the engine.
"""

from .resolver import (DEFAULT_STYLESHEET, Display, PropertyMap, StyledNode, StyledDocument,
                       compute_properties, to_styled_node, to_styled_document,
                       build_stylesheet, resolve)

__all__ = [
    'DEFAULT_STYLESHEET', 'Display', 'PropertyMap', 'StyledNode', 'StyledDocument',
    'compute_properties', 'to_styled_node', 'to_styled_document', 'build_stylesheet', 'resolve'
]
