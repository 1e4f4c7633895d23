"""
Element implementation for the DOM.
This module implements the Element interface: a tag name, an attribute map and
owned children.
"""

from typing import Dict, List, Optional, Tuple

from .node import Node, NodeType

AttrMap = Dict[str, str]


class Element(Node):
    """
    Element node implementation for the DOM.

    Tag names keep the case they were written with; selector matching on them
    is case-sensitive.
    """

    def __init__(self,
                 tag_name: str,
                 attributes: Optional[AttrMap] = None,
                 children: Optional[List[Node]] = None):
        """
        Initialize a new Element.

        Args:
            tag_name: Name of the element tag (e.g., "div", "span")
            attributes: Attribute name to value map
            children: Child nodes, in document order
        """
        super().__init__(NodeType.ELEMENT_NODE, children)
        self.tag_name = tag_name
        self.attributes: AttrMap = dict(attributes) if attributes else {}

    @property
    def node_name(self) -> str:
        return self.tag_name

    @property
    def id(self) -> Optional[str]:
        """The id attribute, or None if the element has none."""
        return self.get_attribute('id')

    @id.setter
    def id(self, value: str) -> None:
        self.set_attribute('id', value)

    @property
    def class_name(self) -> Optional[str]:
        """The raw class attribute; it is matched as a single value, not a token list."""
        return self.get_attribute('class')

    @class_name.setter
    def class_name(self, value: str) -> None:
        self.set_attribute('class', value)

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def get_attribute(self, name: str) -> Optional[str]:
        """
        Get the value of an attribute.

        Args:
            name: The attribute name

        Returns:
            The attribute value, or None if the attribute doesn't exist
        """
        return self.attributes.get(name)

    def set_attribute(self, name: str, value: str) -> None:
        """
        Set an attribute value, replacing any previous value.

        Args:
            name: The attribute name
            value: The attribute value
        """
        self.attributes[name] = value

    def remove_attribute(self, name: str) -> None:
        self.attributes.pop(name, None)

    def attribute_items(self) -> List[Tuple[str, str]]:
        """Attributes as (name, value) pairs sorted by name."""
        return sorted(self.attributes.items())

    def to_html(self) -> str:
        attrs = "".join(f' {name}="{value}"' for name, value in self.attributes.items())
        return f"<{self.tag_name}{attrs}>{self.inner_html}</{self.tag_name}>"

    def clone_node(self, deep: bool = False) -> 'Element':
        return Element(self.tag_name, self.attributes, self._cloned_children(deep))

    def _identity(self) -> Tuple:
        return (self.tag_name, self.attributes)

    def __repr__(self) -> str:
        return f"Element({self.tag_name!r}, {self.attributes!r}, children={self.children!r})"

    tagName = property(lambda self: self.tag_name)
    getAttribute = get_attribute
    setAttribute = set_attribute
    removeAttribute = remove_attribute
