"""
Layout for the engine.
This package builds block/inline box trees from styled trees.
"""

from .layout import BoxType, LayoutBox, LayoutDocument, to_layout_box, to_layout_document, layout

__all__ = ['BoxType', 'LayoutBox', 'LayoutDocument', 'to_layout_box', 'to_layout_document', 'layout']
