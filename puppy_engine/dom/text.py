"""
Text node implementation for the DOM.
"""

from typing import Tuple

from .node import Node, NodeType


class Text(Node):
    """
    Text node implementation for the DOM.

    A text node owns a single string of character data and never has children.
    """

    def __init__(self, data: str):
        """
        Initialize a text node.

        Args:
            data: The text content
        """
        super().__init__(NodeType.TEXT_NODE)
        self.data = data if data is not None else ""

    @property
    def node_name(self) -> str:
        return "#text"

    @property
    def length(self) -> int:
        return len(self.data)

    @property
    def inner_text(self) -> str:
        return self.data

    def append_child(self, child: Node) -> Node:
        raise ValueError("Text nodes cannot have children")

    def append_data(self, data: str) -> None:
        self.data += data

    @property
    def inner_html(self) -> str:
        return ""

    @inner_html.setter
    def inner_html(self, html: str) -> None:
        raise ValueError("Text nodes cannot have children")

    def to_html(self) -> str:
        return self.data

    def clone_node(self, deep: bool = False) -> 'Text':
        return Text(self.data)

    def _identity(self) -> Tuple:
        return (self.data,)

    def __repr__(self) -> str:
        return f"Text({self.data!r})"

    appendChild = append_child
