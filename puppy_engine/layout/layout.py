"""
Box tree construction.

Turns a styled tree into a tree of block, inline, none and anonymous boxes.
Inline children of a block box are always gathered into anonymous boxes, one
per contiguous run, so a block box never mixes block and inline children.
No geometry is computed here.
"""

import logging
from enum import Enum
from typing import Iterator, List, Optional

from ..style import Display, StyledDocument, StyledNode

logger = logging.getLogger(__name__)


class BoxType(Enum):
    """Kinds of layout boxes."""
    BLOCK = "block"
    INLINE = "inline"
    NONE = "none"
    ANONYMOUS = "anonymous"


_BOX_TYPES = {
    Display.BLOCK: BoxType.BLOCK,
    Display.INLINE: BoxType.INLINE,
    Display.NONE: BoxType.NONE,
}


class LayoutBox:
    """
    Layout box for a styled node.

    Anonymous boxes have no styled node; every other box keeps the node it was
    built from so renderers can inspect its tag, attributes and text.
    """

    def __init__(self,
                 box_type: BoxType,
                 styled_node: Optional[StyledNode] = None,
                 children: Optional[List['LayoutBox']] = None):
        """
        Initialize a layout box.

        Args:
            box_type: Kind of the box
            styled_node: The originating styled node, None for anonymous boxes
            children: Child boxes
        """
        self.box_type = box_type
        self.styled_node = styled_node
        self.children: List['LayoutBox'] = list(children) if children else []

    @property
    def tag_name(self) -> Optional[str]:
        return self.styled_node.tag_name if self.styled_node else None

    @property
    def is_text(self) -> bool:
        return self.styled_node is not None and self.styled_node.is_text

    def add_child(self, child: 'LayoutBox') -> None:
        self.children.append(child)

    def inline_container(self) -> 'LayoutBox':
        """
        The box inline-level children are appended to.

        Inline, none and anonymous boxes contain their inline children
        themselves. A block box reuses its trailing anonymous box, or starts a
        new one.
        """
        if self.box_type != BoxType.BLOCK:
            return self

        if not self.children or self.children[-1].box_type != BoxType.ANONYMOUS:
            self.children.append(LayoutBox(BoxType.ANONYMOUS))
        return self.children[-1]

    def inner_text(self) -> str:
        """Concatenated text of all text boxes below this box."""
        return "".join(
            child.styled_node.data if child.is_text else child.inner_text()
            for child in self.children
        )

    def walk(self) -> Iterator['LayoutBox']:
        """Yield this box and all descendant boxes depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LayoutBox):
            return NotImplemented
        return (self.box_type == other.box_type
                and self.styled_node == other.styled_node
                and self.children == other.children)

    __hash__ = None

    def __repr__(self) -> str:
        label = self.tag_name or ("#text" if self.is_text else "")
        return f"LayoutBox({self.box_type.name}, {label!r}, children={self.children!r})"


class LayoutDocument:
    """The box tree of a document."""

    def __init__(self, top_box: LayoutBox, url: str = "about:blank"):
        self.top_box = top_box
        self.url = url

    def __repr__(self) -> str:
        return f"LayoutDocument(url={self.url!r}, top_box={self.top_box!r})"


def to_layout_box(styled_node: StyledNode) -> LayoutBox:
    """
    Build the box subtree of a styled node.

    Args:
        styled_node: Root of the styled subtree

    Returns:
        The box for styled_node with its descendants
    """
    layout_box = LayoutBox(_BOX_TYPES[styled_node.display()], styled_node)
    if layout_box.box_type == BoxType.NONE:
        return layout_box

    for child in styled_node.children:
        display = child.display()
        if display == Display.BLOCK:
            layout_box.add_child(to_layout_box(child))
        elif display == Display.INLINE:
            layout_box.inline_container().add_child(to_layout_box(child))
        # display:none children generate no box at all

    return layout_box


def to_layout_document(styled_document: StyledDocument) -> LayoutDocument:
    """Build the box tree of a styled document."""
    top_box = to_layout_box(styled_document.document_element)
    logger.debug(f"Built layout tree for {styled_document.url}")
    return LayoutDocument(top_box, styled_document.url)


def layout(styled_node: StyledNode) -> LayoutBox:
    """Build the box tree of a styled tree. Alias of to_layout_box."""
    return to_layout_box(styled_node)
