"""
DOM implementation for the engine.
This package provides the node tree produced by the HTML parser and mutated by
scripting collaborators.
"""

from .node import Node, NodeType
from .element import Element, AttrMap
from .text import Text
from .document import Document

__all__ = [
    'Node', 'NodeType', 'Element', 'AttrMap', 'Text', 'Document'
]
