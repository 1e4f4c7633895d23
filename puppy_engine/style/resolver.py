"""
Style resolution.

Every DOM node gets a property map built from the stylesheet by pure source
order: rules are visited in file order and each matching rule's declarations
overwrite earlier values for the same property. There is no specificity.

The styled tree owns copies of the node data it needs (tag name, attributes,
text), so it stays usable after the DOM is mutated; it is simply stale until
the next resolution.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from ..css import CSSValue, Keyword, Stylesheet, parse_or_empty
from ..dom import AttrMap, Document, Node, NodeType

logger = logging.getLogger(__name__)

PropertyMap = Dict[str, CSSValue]

# User agent stylesheet, applied to every document before page styles.
DEFAULT_STYLESHEET = """
script, style {
    display: none;
}
p, div {
    display: block;
}
"""


class Display(Enum):
    """Values of the display property understood by layout."""
    INLINE = "inline"
    BLOCK = "block"
    NONE = "none"


@dataclass
class StyledNode:
    """
    A DOM node projection with its resolved properties.

    Attributes:
        node_type: Type of the originating node
        tag_name: Tag of the originating element, None for other nodes
        attributes: Copy of the element's attributes
        data: Character data of a text node, None for other nodes
        properties: Resolved property map
        children: Styled children, in document order
    """

    node_type: NodeType
    tag_name: Optional[str] = None
    attributes: AttrMap = field(default_factory=dict)
    data: Optional[str] = None
    properties: PropertyMap = field(default_factory=dict)
    children: List['StyledNode'] = field(default_factory=list)

    @property
    def is_element(self) -> bool:
        return self.node_type == NodeType.ELEMENT_NODE

    @property
    def is_text(self) -> bool:
        return self.node_type == NodeType.TEXT_NODE

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def display(self) -> Display:
        """
        The node's display value.

        Missing, non-keyword and unknown values all fall back to inline.
        """
        value = self.properties.get("display")
        if isinstance(value, Keyword):
            if value.value == "block":
                return Display.BLOCK
            if value.value == "none":
                return Display.NONE
        return Display.INLINE

    def inner_text(self) -> str:
        if self.is_text:
            return self.data
        return "".join(child.inner_text() for child in self.children)


@dataclass
class StyledDocument:
    """A document's URL together with its styled document element."""

    url: str
    document_element: StyledNode


def compute_properties(node: Node, stylesheet: Stylesheet) -> PropertyMap:
    """
    Build the property map of a single node.

    Args:
        node: DOM node to style
        stylesheet: Rules to apply, in source order

    Returns:
        Property name to value, later rules overriding earlier ones
    """
    properties: PropertyMap = {}
    for rule in stylesheet.matching_rules(node):
        for declaration in rule.declarations:
            properties[declaration.name] = declaration.value
    return properties


def to_styled_node(node: Node, stylesheet: Stylesheet) -> StyledNode:
    """
    Style a DOM node and, recursively, all its children.

    Children are styled whatever the parent's display value is; pruning
    display:none subtrees is a layout decision.

    Args:
        node: Root of the DOM subtree
        stylesheet: Rules to apply

    Returns:
        The styled subtree
    """
    styled = StyledNode(
        node_type=node.node_type,
        properties=compute_properties(node, stylesheet),
        children=[to_styled_node(child, stylesheet) for child in node.children],
    )
    if node.node_type == NodeType.ELEMENT_NODE:
        styled.tag_name = node.tag_name
        styled.attributes = dict(node.attributes)
    elif node.node_type == NodeType.TEXT_NODE:
        styled.data = node.data
    return styled


def build_stylesheet(document: Document, user_agent_stylesheet: bool = True) -> Stylesheet:
    """
    Build the stylesheet of a document.

    The user agent stylesheet comes first, followed by the contents of every
    <style> element in document order. The concatenation is parsed as one
    stylesheet; if it is malformed, the result is empty.

    Args:
        document: Document whose <style> elements are collected
        user_agent_stylesheet: Whether to prepend DEFAULT_STYLESHEET

    Returns:
        The stylesheet to resolve the document with
    """
    sources = [DEFAULT_STYLESHEET] if user_agent_stylesheet else []
    sources.extend(document.get_style_inners())
    return parse_or_empty("\n".join(sources))


def to_styled_document(document: Document,
                       stylesheet: Optional[Stylesheet] = None,
                       user_agent_stylesheet: bool = True) -> StyledDocument:
    """
    Style a whole document.

    Args:
        document: The document to style
        stylesheet: Rules to use instead of the document's own stylesheet
        user_agent_stylesheet: Whether the document's stylesheet starts with DEFAULT_STYLESHEET

    Returns:
        The styled document

    Raises:
        TypeError: If document is not a Document
    """
    if not isinstance(document, Document):
        raise TypeError(f"expected a Document, got {type(document).__name__}")

    if stylesheet is None:
        stylesheet = build_stylesheet(document, user_agent_stylesheet)
    logger.debug(f"Resolving styles for {document.url} with {len(stylesheet)} rules")
    return StyledDocument(
        url=document.url,
        document_element=to_styled_node(document.document_element, stylesheet),
    )


def resolve(document: Document, stylesheet: Stylesheet) -> StyledNode:
    """Style a document's element with an explicit stylesheet."""
    return to_styled_document(document, stylesheet).document_element
