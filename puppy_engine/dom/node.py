"""
Node implementation for the DOM.
This module implements the Node interface shared by elements, text and documents.

Nodes form a strict tree: a parent owns its children in order and no node keeps
a reference back to its parent or siblings.
"""

from enum import IntEnum
from typing import Callable, Iterator, List, Optional, Tuple


class NodeType(IntEnum):
    """Node types, numbered as in the DOM standard."""
    ELEMENT_NODE = 1
    TEXT_NODE = 3
    DOCUMENT_NODE = 9


class Node:
    """
    Base Node implementation for the DOM.

    Holds the node type and the ordered list of owned children. Subclasses add
    their own payload (tag name and attributes, character data, document URL).
    """

    def __init__(self, node_type: NodeType, children: Optional[List['Node']] = None):
        """
        Initialize a new Node.

        Args:
            node_type: The type of this node
            children: Child nodes, in document order
        """
        self.node_type = node_type
        self.children: List['Node'] = list(children) if children else []

    @property
    def node_name(self) -> str:
        return "#node"

    @property
    def first_child(self) -> Optional['Node']:
        return self.children[0] if self.children else None

    @property
    def last_child(self) -> Optional['Node']:
        return self.children[-1] if self.children else None

    def append_child(self, child: 'Node') -> 'Node':
        """
        Append a child node to this node.

        Args:
            child: The node to append

        Returns:
            The appended node

        Raises:
            ValueError: If the child is this node or one of its ancestors
        """
        self._check_insertable(child)
        self.children.append(child)
        return child

    def insert_before(self, new_child: 'Node', reference_child: Optional['Node'] = None) -> 'Node':
        """
        Insert a node before a reference node.

        Args:
            new_child: The node to insert
            reference_child: The child to insert before, or None to append

        Returns:
            The inserted node

        Raises:
            ValueError: If the reference child is not a child of this node, or
                the new child is this node or one of its ancestors
        """
        if reference_child is None:
            return self.append_child(new_child)

        self._check_insertable(new_child)
        index = self._index_of(reference_child)
        self.children.insert(index, new_child)
        return new_child

    def remove_child(self, child: 'Node') -> 'Node':
        """
        Remove a child node from this node.

        Args:
            child: The node to remove

        Returns:
            The removed node

        Raises:
            ValueError: If the node is not a child of this node
        """
        del self.children[self._index_of(child)]
        return child

    def replace_child(self, new_child: 'Node', old_child: 'Node') -> 'Node':
        """
        Replace a child node with another node.

        Args:
            new_child: The replacement node
            old_child: The node to replace

        Returns:
            The replaced node

        Raises:
            ValueError: If the old node is not a child of this node, or the
                replacement is this node or one of its ancestors
        """
        self._check_insertable(new_child)
        self.children[self._index_of(old_child)] = new_child
        return old_child

    def _check_insertable(self, child: 'Node') -> None:
        # Without parent pointers, a cycle shows up as this node inside the child's subtree.
        if any(node is self for node in child.walk()):
            raise ValueError("A node cannot be inserted into itself or its descendants")

    def _index_of(self, child: 'Node') -> int:
        # Identity, not equality: two structurally equal children are distinct nodes.
        for index, candidate in enumerate(self.children):
            if candidate is child:
                return index
        raise ValueError("Node is not a child of this node")

    def has_child_nodes(self) -> bool:
        """Check if this node has any child nodes."""
        return len(self.children) > 0

    def walk(self) -> Iterator['Node']:
        """Yield this node and all its descendants in document order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def find_all(self, predicate: Callable[['Node'], bool]) -> List['Node']:
        """
        Collect the descendants of this node (excluding itself) matching a predicate.

        Args:
            predicate: Callable deciding whether a node is collected

        Returns:
            Matching nodes in document order
        """
        return [node for child in self.children for node in child.walk() if predicate(node)]

    def get_elements_by_tag_name(self, tag_name: str) -> List['Node']:
        """Get all descendant elements with the given tag name."""
        return self.find_all(
            lambda node: node.node_type == NodeType.ELEMENT_NODE and node.tag_name == tag_name)

    def get_element_by_id(self, element_id: str) -> Optional['Node']:
        """Get the first descendant element whose id attribute equals element_id."""
        for node in self.find_all(lambda node: node.node_type == NodeType.ELEMENT_NODE):
            if node.get_attribute("id") == element_id:
                return node
        return None

    @property
    def inner_text(self) -> str:
        """The concatenated character data of all descendant text nodes."""
        return "".join(child.inner_text for child in self.children)

    @property
    def inner_html(self) -> str:
        """Get or set the markup of this node's children."""
        return "".join(child.to_html() for child in self.children)

    @inner_html.setter
    def inner_html(self, html: str) -> None:
        # Parsed first so a malformed fragment leaves the children untouched.
        from ..html.parser import parse_nodes
        self.children = parse_nodes(html)

    def to_html(self) -> str:
        """Serialize this node and its descendants."""
        return self.inner_html

    def clone_node(self, deep: bool = False) -> 'Node':
        """
        Clone this node.

        Args:
            deep: Whether to clone child nodes as well

        Returns:
            The cloned node
        """
        return Node(self.node_type, self._cloned_children(deep))

    def _cloned_children(self, deep: bool) -> List['Node']:
        return [child.clone_node(deep=True) for child in self.children] if deep else []

    def _identity(self) -> Tuple:
        """Values, besides node type and children, that make two nodes equal."""
        return ()

    def is_equal_node(self, other: 'Node') -> bool:
        """
        Check if this node is structurally equal to another node.

        Args:
            other: The node to compare with

        Returns:
            True if type, payload and children are equal
        """
        if not isinstance(other, Node) or self.node_type != other.node_type:
            return False
        if self._identity() != other._identity():
            return False
        if len(self.children) != len(other.children):
            return False
        return all(a.is_equal_node(b) for a, b in zip(self.children, other.children))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self.is_equal_node(other)

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.node_name}, children={len(self.children)})"

    # JavaScript-style aliases for scripting collaborators
    appendChild = append_child
    insertBefore = insert_before
    removeChild = remove_child
    replaceChild = replace_child
    getElementById = get_element_by_id
    getElementsByTagName = get_elements_by_tag_name
    innerHTML = property(
        lambda self: self.inner_html,
        lambda self, html: setattr(self, "inner_html", html))
    innerText = property(lambda self: self.inner_text)
