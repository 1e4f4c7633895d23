"""Tests for style resolution."""

import pytest

from puppy_engine.css import Keyword, Length, Stylesheet, Unit, parse as parse_css
from puppy_engine.dom import Element, NodeType, Text
from puppy_engine.html import parse as parse_html
from puppy_engine.style import (Display, StyledNode, build_stylesheet, compute_properties,
                                resolve, to_styled_document, to_styled_node)


def all_styled(node):
    yield node
    for child in node.children:
        yield from all_styled(child)


@pytest.fixture
def document():
    return parse_html(
        b'<div class="box"><p id="first">Hello <span>World</span></p>'
        b'<script>var x;</script><a href="/next" rel="nofollow external">next</a></div>')


# ---------------------------------------------------------------------------
# Cascade
# ---------------------------------------------------------------------------


class TestCascade:
    def test_universal_display_none(self, document):
        root = resolve(document, parse_css("* { display: none; }"))
        assert all(node.display() == Display.NONE for node in all_styled(root))

    def test_later_rule_wins(self):
        sheet = parse_css("p { display: block; } p { display: inline; }")
        assert compute_properties(Element("p"), sheet) == {"display": Keyword("inline")}

    def test_source_order_beats_specificity(self):
        sheet = parse_css('p[id=x] { display: none; } p { display: block; }')
        element = Element("p", {"id": "x"})
        assert compute_properties(element, sheet)["display"] == Keyword("block")

    def test_last_declaration_in_rule_wins(self):
        sheet = parse_css("p { margin: 1em; margin: 2em; }")
        assert compute_properties(Element("p"), sheet) == {"margin": Length(2, Unit.EM)}

    def test_properties_merge_across_rules(self):
        sheet = parse_css("p { display: block; } .x { margin: 1em; }")
        properties = compute_properties(Element("p", {"class": "x"}), sheet)
        assert properties == {"display": Keyword("block"), "margin": Length(1, Unit.EM)}

    def test_no_match_gives_empty_map(self):
        assert compute_properties(Element("div"), parse_css("p { a: b; }")) == {}

    def test_resolution_is_idempotent(self, document):
        sheet = build_stylesheet(document)
        assert resolve(document, sheet) == resolve(document, sheet)


# ---------------------------------------------------------------------------
# Selector matching
# ---------------------------------------------------------------------------


class TestMatching:
    def test_class_matches_whole_attribute(self):
        sheet = parse_css(".a { display: block; }")
        assert compute_properties(Element("p", {"class": "a"}), sheet)
        assert not compute_properties(Element("p", {"class": "a b"}), sheet)

    def test_attribute_equals(self):
        sheet = parse_css("a[rel=external] { display: none; }")
        assert compute_properties(Element("a", {"rel": "external"}), sheet)
        assert not compute_properties(Element("a", {"rel": "nofollow external"}), sheet)
        assert not compute_properties(Element("b", {"rel": "external"}), sheet)

    def test_attribute_contains_word(self):
        sheet = parse_css("a[rel~=external] { display: none; }")
        assert compute_properties(Element("a", {"rel": "nofollow external"}), sheet)
        assert not compute_properties(Element("a", {"rel": "externals"}), sheet)
        assert not compute_properties(Element("a"), sheet)

    def test_type_is_case_sensitive(self):
        sheet = parse_css("p { display: block; }")
        assert not compute_properties(Element("P"), sheet)

    def test_text_only_matches_universal(self):
        sheet = parse_css("* { a: b; } p { c: d; }")
        assert compute_properties(Text("p"), sheet) == {"a": Keyword("b")}


# ---------------------------------------------------------------------------
# Styled tree
# ---------------------------------------------------------------------------


class TestStyledTree:
    def test_shape_follows_dom(self, document):
        styled = to_styled_document(document)
        assert styled.url == document.url
        root = styled.document_element
        assert root.node_type == NodeType.ELEMENT_NODE
        assert root.tag_name == "div"
        assert [child.tag_name for child in root.children] == ["p", "script", "a"]
        assert root.children[0].children[0] == StyledNode(
            node_type=NodeType.TEXT_NODE, data="Hello ", properties={})

    def test_copies_node_data(self):
        element = Element("p", {"id": "x"}, [Text("a")])
        styled = to_styled_node(element, Stylesheet([]))
        element.set_attribute("id", "y")
        element.children[0].data = "changed"
        assert styled.get_attribute("id") == "x"
        assert styled.inner_text() == "a"

    def test_display_none_subtree_is_still_styled(self, document):
        styled = to_styled_document(document).document_element
        script = styled.children[1]
        assert script.display() == Display.NONE
        assert script.children[0].data == "var x;"

    @pytest.mark.parametrize("value, expected", [
        (None, Display.INLINE),
        (Keyword("block"), Display.BLOCK),
        (Keyword("none"), Display.NONE),
        (Keyword("inline"), Display.INLINE),
        (Keyword("flex"), Display.INLINE),
        (Length(1, Unit.EM), Display.INLINE),
    ])
    def test_display(self, value, expected):
        properties = {"display": value} if value is not None else {}
        node = StyledNode(node_type=NodeType.ELEMENT_NODE, tag_name="x", properties=properties)
        assert node.display() == expected

    def test_requires_document(self):
        with pytest.raises(TypeError):
            to_styled_document(Element("p"))


# ---------------------------------------------------------------------------
# Document stylesheet
# ---------------------------------------------------------------------------


class TestDocumentStylesheet:
    def test_user_agent_stylesheet(self, document):
        root = to_styled_document(document).document_element
        p, script, a = root.children
        assert root.display() == Display.BLOCK
        assert p.display() == Display.BLOCK
        assert script.display() == Display.NONE
        assert p.children[1].tag_name == "span"
        assert p.children[1].display() == Display.INLINE
        assert a.display() == Display.INLINE

    def test_style_elements_follow_user_agent_stylesheet(self):
        document = parse_html(
            b"<div><style>p { display: inline; } span { display: block; }</style>"
            b"<p>a</p><span>b</span></div>")
        root = to_styled_document(document).document_element
        assert root.children[1].display() == Display.INLINE
        assert root.children[2].display() == Display.BLOCK

    def test_style_elements_in_document_order(self):
        document = parse_html(
            b"<div><style>p { display: none; }</style><p>a</p>"
            b"<style>p { display: block; }</style></div>")
        root = to_styled_document(document).document_element
        assert root.children[1].display() == Display.BLOCK

    def test_malformed_style_drops_whole_stylesheet(self):
        document = parse_html(
            b"<div><style>div > p { display: none; }</style><script>x</script></div>")
        sheet = build_stylesheet(document)
        assert sheet == Stylesheet([])
        root = to_styled_document(document).document_element
        assert root.children[1].display() == Display.INLINE

    def test_without_user_agent_stylesheet(self, document):
        root = to_styled_document(document, user_agent_stylesheet=False).document_element
        assert root.display() == Display.INLINE

    def test_explicit_stylesheet(self, document):
        root = to_styled_document(document, parse_css("a { display: block; }")).document_element
        assert root.children[2].display() == Display.BLOCK
        assert root.children[1].display() == Display.INLINE
