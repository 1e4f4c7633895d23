"""
Text renderers for layout trees.

Two views are provided: an outline of the box tree for debugging, and a
plain-text rendering of the page where block boxes stack vertically and
inline boxes flow on one line. Elements such as links and form controls are
drawn by tag renderers looked up by tag name.
"""

import logging
from typing import Callable, Dict, List, Optional

from ..layout import BoxType, LayoutBox
from ..style import StyledNode

logger = logging.getLogger(__name__)

TagRenderer = Callable[[LayoutBox], str]

INPUT_WIDTH = 10
TEXT_PREVIEW_LENGTH = 30

_tag_renderers: Dict[str, TagRenderer] = {}


def register_tag_renderer(tag_name: str, renderer: Optional[TagRenderer] = None):
    """
    Register how boxes of an element type are rendered as text.

    Can be called directly or used as a decorator:

        @register_tag_renderer("b")
        def render_bold(layout_box):
            return f"*{layout_box.inner_text()}*"

    Args:
        tag_name: Tag the renderer applies to
        renderer: Function from layout box to text

    Returns:
        The renderer, or a decorator when renderer is omitted
    """
    def register(func: TagRenderer) -> TagRenderer:
        _tag_renderers[tag_name] = func
        logger.debug(f"Registered tag renderer for <{tag_name}>")
        return func

    if renderer is None:
        return register
    return register(renderer)


def unregister_tag_renderer(tag_name: str) -> bool:
    return _tag_renderers.pop(tag_name, None) is not None


def get_tag_renderer(tag_name: Optional[str]) -> Optional[TagRenderer]:
    if tag_name is None:
        return None
    return _tag_renderers.get(tag_name)


def clean_text(data: str) -> str:
    """Drop newlines and surrounding whitespace from text content."""
    return data.replace("\n", "").strip()


@register_tag_renderer("a")
def render_link(layout_box: LayoutBox) -> str:
    href = layout_box.styled_node.get_attribute("href") or ""
    return f"[{clean_text(layout_box.inner_text())}]({href})"


@register_tag_renderer("i")
def render_italic(layout_box: LayoutBox) -> str:
    return f"/{clean_text(layout_box.inner_text())}/"


@register_tag_renderer("input")
def render_input(layout_box: LayoutBox) -> str:
    node = layout_box.styled_node
    value = node.get_attribute("value") or ""
    if node.get_attribute("type") in ("button", "submit"):
        return f"<{value}>"
    return f"[{value.ljust(INPUT_WIDTH, '_')}]"


@register_tag_renderer("button")
def render_button(layout_box: LayoutBox) -> str:
    return f"<{clean_text(layout_box.inner_text())}>"


def render_text(layout_box: LayoutBox) -> str:
    """
    Render a box tree as plain text.

    Args:
        layout_box: Root of the box tree

    Returns:
        str: The page text, one line per block
    """
    if layout_box.box_type == BoxType.NONE:
        return ""

    if layout_box.is_text:
        return clean_text(layout_box.styled_node.data)

    tag_renderer = get_tag_renderer(layout_box.tag_name)
    if tag_renderer is not None:
        return tag_renderer(layout_box)

    parts = [part for part in (render_text(child) for child in layout_box.children) if part]
    separator = "\n" if layout_box.box_type == BoxType.BLOCK else " "
    return separator.join(parts)


def render(layout_box: LayoutBox) -> str:
    """
    Render a box tree as an indented outline, one line per box.

    Args:
        layout_box: Root of the box tree

    Returns:
        str: The outline
    """
    lines: List[str] = []
    _outline(layout_box, 0, lines)
    return "\n".join(lines)


def _outline(layout_box: LayoutBox, depth: int, lines: List[str]) -> None:
    line = "  " * depth + layout_box.box_type.name
    if layout_box.is_text:
        text = layout_box.styled_node.data
        if len(text) > TEXT_PREVIEW_LENGTH:
            text = text[:TEXT_PREVIEW_LENGTH] + "..."
        line += f" #text {text!r}"
    elif layout_box.tag_name is not None:
        line += f" <{layout_box.tag_name}>"
    lines.append(line)

    for child in layout_box.children:
        _outline(child, depth + 1, lines)


def render_styled(styled_node: StyledNode) -> str:
    """
    Render a styled tree as an indented outline with resolved properties.

    Args:
        styled_node: Root of the styled tree

    Returns:
        str: The outline
    """
    lines: List[str] = []
    _styled_outline(styled_node, 0, lines)
    return "\n".join(lines)


def _styled_outline(styled_node: StyledNode, depth: int, lines: List[str]) -> None:
    indent = "  " * depth
    if styled_node.is_text:
        lines.append(f"{indent}#text {styled_node.data!r}")
    else:
        properties = "; ".join(f"{name}: {value}" for name, value in styled_node.properties.items())
        lines.append(f"{indent}<{styled_node.tag_name}> {{{properties}}}")

    for child in styled_node.children:
        _styled_outline(child, depth + 1, lines)
