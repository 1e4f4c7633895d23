"""Tests for the text renderers."""

import pytest

from puppy_engine.html import parse as parse_html
from puppy_engine.layout import to_layout_document
from puppy_engine.rendering import (get_tag_renderer, register_tag_renderer, render,
                                    render_styled, render_text, unregister_tag_renderer)
from puppy_engine.style import to_styled_document


def boxes(markup: bytes):
    return to_layout_document(to_styled_document(parse_html(markup))).top_box


class TestRenderText:
    def test_blocks_on_separate_lines(self):
        assert render_text(boxes(b"<div><p>one</p><p>two</p></div>")) == "one\ntwo"

    def test_inline_run_joined(self):
        assert render_text(boxes(b"<p>Hello <b>big</b> World</p>")) == "Hello big World"

    def test_text_whitespace_collapsed(self):
        markup = b"<div>\n  <p>\n    one\n  </p>\n  <p>two</p>\n</div>"
        assert render_text(boxes(markup)) == "one\ntwo"

    def test_hidden_elements_not_rendered(self):
        markup = b"<div><script>alert</script><style>p { a: b; }</style><p>shown</p></div>"
        assert render_text(boxes(markup)) == "shown"

    def test_link(self):
        assert render_text(boxes(b'<p>go <a href="/next">next page</a></p>')) == \
            "go [next page](/next)"

    def test_link_without_href(self):
        assert render_text(boxes(b"<a>x</a>")) == "[x]()"

    def test_italic(self):
        assert render_text(boxes(b"<i>slanted</i>")) == "/slanted/"

    def test_text_input(self):
        assert render_text(boxes(b'<input value="abc"></input>')) == "[abc_______]"

    def test_empty_text_input(self):
        assert render_text(boxes(b"<input></input>")) == "[__________]"

    @pytest.mark.parametrize("input_type", ["button", "submit"])
    def test_button_input(self, input_type):
        markup = f'<input type="{input_type}" value="Send"></input>'.encode()
        assert render_text(boxes(markup)) == "<Send>"

    def test_button(self):
        assert render_text(boxes(b"<button>Click</button>")) == "<Click>"


class TestTagRenderers:
    def test_defaults_registered(self):
        for tag in ("a", "i", "input", "button"):
            assert get_tag_renderer(tag) is not None
        assert get_tag_renderer("div") is None
        assert get_tag_renderer(None) is None

    def test_register_and_unregister(self):
        @register_tag_renderer("b")
        def render_bold(layout_box):
            return f"*{layout_box.inner_text()}*"

        try:
            assert render_text(boxes(b"<p>a <b>bold</b></p>")) == "a *bold*"
        finally:
            assert unregister_tag_renderer("b")
        assert render_text(boxes(b"<b>bold</b>")) == "bold"

    def test_register_directly(self):
        register_tag_renderer("em", lambda layout_box: "EM")
        try:
            assert render_text(boxes(b"<em>x</em>")) == "EM"
        finally:
            unregister_tag_renderer("em")


class TestOutline:
    def test_outline(self):
        outline = render(boxes(b"<div>Hi<p>there</p></div>"))
        assert outline.splitlines() == [
            "BLOCK <div>",
            "  ANONYMOUS",
            "    INLINE #text 'Hi'",
            "  BLOCK <p>",
            "    ANONYMOUS",
            "      INLINE #text 'there'",
        ]

    def test_long_text_is_shortened(self):
        outline = render(boxes(b"<span>" + b"x" * 50 + b"</span>"))
        assert outline.splitlines()[1] == "  INLINE #text '" + "x" * 30 + "...'"

    def test_styled_outline(self):
        styled = to_styled_document(parse_html(b"<div>Hi<b>x</b></div>")).document_element
        assert render_styled(styled).splitlines() == [
            "<div> {display: block}",
            "  #text 'Hi'",
            "  <b> {}",
            "    #text 'x'",
        ]
