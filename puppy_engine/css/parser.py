"""
CSS parser for the engine.

Stylesheets are tokenized with tinycss2 and then checked against a small
grammar: simple selectors only, and declaration values that are either a
keyword or a whole number of `em`. Anything outside that grammar is a syntax
error for the whole stylesheet; there is no per-rule recovery.
"""

import logging
from typing import List, Optional, Sequence

import tinycss2

from ..errors import CSSParseError
from .selector import (AttributeSelector, AttributeSelectorOp, ClassSelector, Selector,
                       TypeSelector, UniversalSelector)
from .stylesheet import CSSValue, Declaration, Keyword, Length, Rule, Stylesheet, Unit

logger = logging.getLogger(__name__)

_ATTRIBUTE_OPS = {op.value: op for op in AttributeSelectorOp}
_UNITS = {unit.value: unit for unit in Unit}


def _error(message: str, token=None) -> CSSParseError:
    return CSSParseError(
        message,
        line=getattr(token, "source_line", None),
        column=getattr(token, "source_column", None),
    )


def _is_literal(token, value: str) -> bool:
    return token.type == "literal" and token.value == value


def _strip_whitespace(tokens: Sequence) -> List:
    """Drop comments, then leading and trailing whitespace."""
    tokens = [token for token in tokens if token.type != "comment"]
    while tokens and tokens[0].type == "whitespace":
        tokens.pop(0)
    while tokens and tokens[-1].type == "whitespace":
        tokens.pop()
    return tokens


class CSSParser:
    """
    Parser turning CSS source into a Stylesheet.

    The accepted grammar is:

        stylesheet       := (rule)*
        rule             := selector_list "{" declaration_list "}"
        selector_list    := selector ("," selector)*
        selector         := "*" | "." ident | ident ("[" ident ("=" | "~=") ident "]")?
        declaration_list := (declaration (";" declaration)*)? ";"?
        declaration      := ident ":" value
        value            := ident | integer "em"

    with whitespace and comments allowed between tokens.
    """

    def parse(self, source: str) -> Stylesheet:
        """
        Parse CSS source into a stylesheet.

        Args:
            source: CSS text

        Returns:
            The parsed stylesheet, rules in source order

        Raises:
            CSSParseError: If the source does not match the grammar
        """
        rules = []
        for node in tinycss2.parse_stylesheet(source, skip_comments=True, skip_whitespace=True):
            if node.type == "qualified-rule":
                rules.append(self._parse_rule(node))
            elif node.type == "at-rule":
                raise _error(f"at-rules are not supported: @{node.at_keyword}", node)
            elif node.type == "error":
                raise _error(node.message, node)
            else:
                raise _error(f"unexpected {node.type} in stylesheet", node)

        logger.debug(f"Parsed stylesheet with {len(rules)} rules")
        return Stylesheet(rules)

    def _parse_rule(self, rule) -> Rule:
        return Rule(
            selectors=self.parse_selectors(rule.prelude),
            declarations=self.parse_declarations(rule.content),
        )

    def parse_selectors(self, prelude: Sequence) -> List[Selector]:
        """
        Parse a comma-separated selector list.

        Args:
            prelude: Component values preceding a rule's block

        Returns:
            The selectors, in source order
        """
        groups: List[List] = [[]]
        for token in prelude:
            if _is_literal(token, ","):
                groups.append([])
            else:
                groups[-1].append(token)

        return [self._parse_selector(_strip_whitespace(group), prelude) for group in groups]

    def _parse_selector(self, tokens: List, prelude: Sequence) -> Selector:
        if not tokens:
            raise _error("empty selector", prelude[0] if prelude else None)

        first = tokens[0]
        if len(tokens) == 1 and _is_literal(first, "*"):
            return UniversalSelector()

        if len(tokens) == 2 and _is_literal(first, ".") and tokens[1].type == "ident":
            return ClassSelector(tokens[1].value)

        if first.type == "ident":
            if len(tokens) == 1:
                return TypeSelector(first.value)

            rest = [token for token in tokens[1:] if token.type != "whitespace"]
            if len(rest) == 1 and rest[0].type == "[] block":
                return self._parse_attribute_selector(first.value, rest[0])

        raise _error(
            f"unsupported selector: {tinycss2.serialize(tokens).strip()!r}", first)

    def _parse_attribute_selector(self, tag_name: str, block) -> AttributeSelector:
        content = _strip_whitespace(block.content)
        if (len(content) == 3
                and content[0].type == "ident"
                and content[1].type == "literal"
                and content[1].value in _ATTRIBUTE_OPS
                and content[2].type == "ident"):
            return AttributeSelector(
                tag_name=tag_name,
                op=_ATTRIBUTE_OPS[content[1].value],
                attribute=content[0].value,
                value=content[2].value,
            )

        raise _error(
            f"invalid attribute selector: [{tinycss2.serialize(block.content)}]", block)

    def parse_declarations(self, content: Optional[Sequence]) -> List[Declaration]:
        """
        Parse the declarations inside a rule's block.

        Args:
            content: Component values inside the braces

        Returns:
            The declarations, in source order
        """
        declarations = []
        for node in tinycss2.parse_declaration_list(
                content or [], skip_comments=True, skip_whitespace=True):
            if node.type == "error":
                raise _error(node.message, node)
            if node.type != "declaration":
                raise _error(f"unexpected {node.type} in declaration block", node)
            if node.important:
                raise _error("!important is not supported", node)
            declarations.append(Declaration(node.name, self.parse_value(node.value, node)))
        return declarations

    def parse_value(self, tokens: Sequence, declaration=None) -> CSSValue:
        """
        Parse a declaration value: a keyword or a whole number of em.

        Args:
            tokens: Component values after the colon
            declaration: The owning declaration, for error positions

        Returns:
            The parsed value
        """
        tokens = _strip_whitespace(tokens)
        if len(tokens) == 1:
            token = tokens[0]
            if token.type == "ident":
                return Keyword(token.value)
            if (token.type == "dimension"
                    and token.is_integer
                    and token.int_value >= 0
                    and token.unit in _UNITS
                    and token.representation.isdigit()):
                return Length(token.int_value, _UNITS[token.unit])

        raise _error(
            f"unsupported value: {tinycss2.serialize(tokens).strip()!r}",
            tokens[0] if tokens else declaration)


def parse(source: str) -> Stylesheet:
    """Parse CSS source into a Stylesheet. See CSSParser.parse."""
    return CSSParser().parse(source)


def parse_or_empty(source: str) -> Stylesheet:
    """
    Parse CSS source, substituting an empty stylesheet for malformed input.

    CSS errors are not fatal to a page: it renders unstyled instead.
    """
    try:
        return parse(source)
    except CSSParseError as e:
        logger.warning(f"Ignoring malformed stylesheet: {e}")
        return Stylesheet([])
