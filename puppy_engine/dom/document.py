"""
Document implementation for the DOM.
This module implements the Document interface: the root of a parsed page,
stamped with the URL it was loaded from.
"""

import logging
from typing import List, Optional, Sequence, Tuple, Union

from .element import Element
from .node import Node, NodeType
from .text import Text

logger = logging.getLogger(__name__)


class Document(Node):
    """
    Document node implementation for the DOM.

    A document has exactly one child, the document element. The invariant is
    checked on construction and kept by the mutation methods.
    """

    def __init__(self,
                 children: Union[Node, Sequence[Node]],
                 url: str = "about:blank",
                 document_uri: Optional[str] = None):
        """
        Initialize a new Document.

        Args:
            children: The document element, or a sequence that must hold exactly one node
            url: The URL the document was loaded from
            document_uri: The document URI; defaults to url

        Raises:
            ValueError: If children does not hold exactly one node
        """
        if isinstance(children, Node):
            children = [children]
        children = list(children)
        if len(children) != 1:
            raise ValueError(
                f"A document must have exactly one child, got {len(children)}")

        super().__init__(NodeType.DOCUMENT_NODE, children)
        self.url = url
        self.document_uri = document_uri if document_uri is not None else url
        logger.debug(f"Document created for {self.url}")

    @property
    def node_name(self) -> str:
        return "#document"

    @property
    def document_element(self) -> Node:
        """The single child of the document."""
        return self.children[0]

    @property
    def title(self) -> str:
        titles = self.collect_tag_inners("title")
        return titles[0] if titles else ""

    def append_child(self, child: Node) -> Node:
        raise ValueError("A document cannot have more than one child")

    def insert_before(self, new_child: Node, reference_child: Optional[Node] = None) -> Node:
        raise ValueError("A document cannot have more than one child")

    def remove_child(self, child: Node) -> Node:
        raise ValueError("A document must keep its document element")

    def create_element(self, tag_name: str, attributes: Optional[dict] = None) -> Element:
        return Element(tag_name, attributes)

    def create_text_node(self, data: str) -> Text:
        return Text(data)

    def all(self) -> List[Node]:
        """Every element of the document in document order."""
        return self.find_all(lambda node: node.node_type == NodeType.ELEMENT_NODE)

    def collect_tag_inners(self, tag_name: str) -> List[str]:
        """
        Collect the inner text of every element with the given tag name.

        Elements nested inside a matching element are not visited separately.

        Args:
            tag_name: Tag name to look for

        Returns:
            Inner texts in document order
        """
        def collect(node: Node) -> List[str]:
            if node.node_type == NodeType.ELEMENT_NODE and node.tag_name == tag_name:
                return [node.inner_text]
            return [inner for child in node.children for inner in collect(child)]

        return collect(self.document_element)

    def get_style_inners(self) -> List[str]:
        """Contents of every <style> element."""
        return self.collect_tag_inners("style")

    def get_script_inners(self) -> List[str]:
        """Contents of every <script> element."""
        return self.collect_tag_inners("script")

    @property
    def inner_html(self) -> str:
        return self.document_element.to_html()

    @inner_html.setter
    def inner_html(self, html: str) -> None:
        raise ValueError("Replace the document element instead of setting document markup")

    def to_html(self) -> str:
        return self.document_element.to_html()

    def clone_node(self, deep: bool = False) -> 'Document':
        # A document cannot exist without its element, so the clone is always deep.
        return Document(self.document_element.clone_node(deep=True), self.url, self.document_uri)

    def _identity(self) -> Tuple:
        return (self.url, self.document_uri)

    def __repr__(self) -> str:
        return f"Document(url={self.url!r}, document_element={self.document_element!r})"

    appendChild = append_child
    insertBefore = insert_before
    removeChild = remove_child
    createElement = create_element
    createTextNode = create_text_node
