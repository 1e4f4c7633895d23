"""
Stylesheet model: values, declarations, rules and stylesheets.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Union

from .selector import Selector


class Unit(Enum):
    """Relative length units. Only em is supported."""
    EM = "em"


@dataclass(frozen=True)
class Keyword:
    """A keyword value such as `block` or `none`."""

    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Length:
    """A non-negative integer length with a unit, such as `2em`."""

    value: int
    unit: Unit = Unit.EM

    def __str__(self) -> str:
        return f"{self.value}{self.unit.value}"


CSSValue = Union[Keyword, Length]


@dataclass(frozen=True)
class Declaration:
    """A single `name: value` pair."""

    name: str
    value: CSSValue


@dataclass
class Rule:
    """Selectors (any of which may match) paired with declarations."""

    selectors: List[Selector] = field(default_factory=list)
    declarations: List[Declaration] = field(default_factory=list)

    def matches(self, node) -> bool:
        """Check if any selector of the rule matches the node."""
        return any(selector.matches(node) for selector in self.selectors)


@dataclass
class Stylesheet:
    """
    Rules in source order.

    Order is significant: when several matching rules declare the same
    property, the one appearing last wins.
    """

    rules: List[Rule] = field(default_factory=list)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def matching_rules(self, node) -> List[Rule]:
        """Rules matching the node, in source order."""
        return [rule for rule in self.rules if rule.matches(node)]
