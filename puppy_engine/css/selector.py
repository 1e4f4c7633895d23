"""
CSS selectors.

Only simple selectors exist: there are no combinators, so a selector never
looks at a node's ancestors or siblings.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from ..dom import Node, NodeType


class AttributeSelectorOp(Enum):
    """Operators allowed inside `[attribute op value]`."""
    EQ = "="
    CONTAIN = "~="


def _is_element(node: Node) -> bool:
    return node.node_type == NodeType.ELEMENT_NODE


@dataclass(frozen=True)
class UniversalSelector:
    """`*`: matches every node, text and document nodes included."""

    def matches(self, node: Node) -> bool:
        return True

    def __str__(self) -> str:
        return "*"


@dataclass(frozen=True)
class TypeSelector:
    """`p`: matches elements whose tag name is equal (case-sensitive)."""

    tag_name: str

    def matches(self, node: Node) -> bool:
        return _is_element(node) and node.tag_name == self.tag_name

    def __str__(self) -> str:
        return self.tag_name


@dataclass(frozen=True)
class ClassSelector:
    """
    `.note`: matches elements whose class attribute equals the class name.

    The whole attribute value is compared, so `class="note big"` is not
    matched by `.note`.
    """

    class_name: str

    def matches(self, node: Node) -> bool:
        return _is_element(node) and node.get_attribute("class") == self.class_name

    def __str__(self) -> str:
        return f".{self.class_name}"


@dataclass(frozen=True)
class AttributeSelector:
    """`a[href=x]` or `a[rel~=x]`: tag match plus an attribute test."""

    tag_name: str
    op: AttributeSelectorOp
    attribute: str
    value: str

    def matches(self, node: Node) -> bool:
        if not _is_element(node) or node.tag_name != self.tag_name:
            return False

        actual = node.get_attribute(self.attribute)
        if actual is None:
            return False
        if self.op == AttributeSelectorOp.EQ:
            return actual == self.value
        return self.value in actual.split()

    def __str__(self) -> str:
        return f"{self.tag_name}[{self.attribute}{self.op.value}{self.value}]"


Selector = Union[UniversalSelector, TypeSelector, ClassSelector, AttributeSelector]
