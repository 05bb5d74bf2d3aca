"""Tests for selector matching and the cascade resolver."""

import pytest

from pagemodel.cascade import Ancestry, cascade, matches, resolve, resolve_node, resolve_states
from pagemodel.model.node import ContentNode
from pagemodel.model.style import Breakpoint
from pagemodel.stylesheet import parse_selector, parse_stylesheet


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _node(tag: str, *classes: str, **attributes: str) -> ContentNode:
    return ContentNode(tag=tag, class_names=list(classes), attributes=dict(attributes))


def _match(selector: str, node: ContentNode, ancestors: Ancestry | None = None) -> bool:
    return matches(parse_selector(selector), node, ancestors)


def _styles(css: str, node: ContentNode, ancestors: Ancestry | None = None) -> dict:
    return resolve_node(node, ancestors, parse_stylesheet(css)).styles


# ---------------------------------------------------------------------------
# Ancestry
# ---------------------------------------------------------------------------


class TestAncestry:
    def test_iterates_nearest_first(self):
        html, body, main = _node("html"), _node("body"), _node("main")
        chain = Ancestry(html).push(body).push(main)
        assert [n.tag for n in chain] == ["main", "body", "html"]
        assert chain.depth == 3

    def test_siblings_share_parent_chain(self):
        body = _node("body")
        chain = Ancestry(body)
        left = chain.push(_node("div"))
        right = chain.push(_node("p"))
        assert left.parent is right.parent


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------


class TestCompoundMatching:
    def test_tag(self):
        assert _match("p", _node("p"))
        assert not _match("p", _node("div"))

    def test_universal(self):
        assert _match("*", _node("section"))

    def test_classes_all_required(self):
        node = _node("a", "btn", "primary")
        assert _match(".btn.primary", node)
        assert not _match(".btn.secondary", node)

    def test_id(self):
        assert _match("#top", _node("div", id="top"))
        assert not _match("#top", _node("div", id="bottom"))

    @pytest.mark.parametrize(
        "selector, expected",
        [
            ("[href]", True),
            ('[href="https://example.com/docs"]', True),
            ('[href^="https"]', True),
            ('[href$=".pdf"]', False),
            ('[href*="example"]', True),
            ("[rel~=noopener]", True),
            ("[lang|=en]", True),
            ("[target]", False),
        ],
    )
    def test_attributes(self, selector, expected):
        node = _node("a", href="https://example.com/docs", rel="nofollow noopener", lang="en-US")
        assert _match(selector, node) is expected

    def test_attribute_ignore_case(self):
        node = _node("input", type="EMAIL")
        assert _match('[type="email" i]', node)
        assert not _match('[type="email"]', node)

    def test_attribute_value_with_spaces_and_combinators(self):
        node = _node("div", title="a > b")
        assert _match('[title="a > b"]', node)
        assert not _match('[title="a>b"]', node)
        assert _styles('[title="a > b"] { color: red; }', node) == {"desktop": {"color": "red"}}

    def test_pseudo_element_never_matches(self):
        assert not _match("p::before", _node("p"))

    def test_unsupported_pseudo_never_matches(self):
        assert not _match("p:nth-child(2)", _node("p"))


class TestCombinatorMatching:
    def test_child_positive(self):
        card = _node("div", "card")
        header = _node("div", "card-header")
        card.children.append(header)
        assert _match(".card > .card-header", header, Ancestry(card))

    def test_child_negative_through_wrapper(self):
        card = _node("div", "card")
        wrapper = _node("div", "wrapper")
        header = _node("div", "card-header")
        card.children.append(wrapper)
        wrapper.children.append(header)
        ancestors = Ancestry(card).push(wrapper)
        assert not _match(".card > .card-header", header, ancestors)
        assert _match(".card .card-header", header, ancestors)

    def test_child_without_parent(self):
        assert not _match("div > p", _node("p"))

    def test_descendant_backtracks(self):
        # section.a > div > div > span.b: the nearest div is not a child of .a
        outer = _node("section", "a")
        mid = _node("div")
        inner = _node("div")
        target = _node("span", "b")
        ancestors = Ancestry(outer).push(mid).push(inner)
        assert _match(".a > div .b", target, ancestors)

    def test_adjacent_sibling(self):
        parent = _node("div")
        h2, p, span = _node("h2"), _node("p"), _node("span")
        parent.children.extend([h2, p, span])
        ancestors = Ancestry(parent)
        assert _match("h2 + p", p, ancestors)
        assert not _match("h2 + span", span, ancestors)
        assert _match("h2 ~ span", span, ancestors)
        assert not _match("span ~ h2", h2, ancestors)

    def test_structural_pseudo(self):
        parent = _node("ul")
        first, last = _node("li"), _node("li")
        parent.children.extend([first, last])
        ancestors = Ancestry(parent)
        assert _match("li:first-child", first, ancestors)
        assert not _match("li:first-child", last, ancestors)
        assert _match("li:last-child", last, ancestors)
        assert not _match("li:only-child", first, ancestors)

    def test_state_on_ancestor_never_matches(self):
        card = _node("div", "card")
        title = _node("h3", "title")
        assert not _match(".card:hover .title", title, Ancestry(card))

    def test_state_on_subject_matches_structurally(self):
        assert _match(".btn:hover", _node("a", "btn"))


# ---------------------------------------------------------------------------
# Cascade
# ---------------------------------------------------------------------------


class TestCascadeOrder:
    def test_specificity_beats_source_order(self):
        css = """
        #x { color: red; }
        .a.b.c.d.e { color: green; }
        div p span a em { color: blue; }
        """
        node = _node("em", "a", "b", "c", "d", "e", id="x")
        ancestors = Ancestry(_node("div")).push(_node("p")).push(_node("span")).push(_node("a"))
        assert _styles(css, node, ancestors)["desktop"]["color"] == "red"

    def test_classes_beat_tags(self):
        css = ".a.b.c.d.e { color: green; } div p span a em { color: blue; }"
        node = _node("em", "a", "b", "c", "d", "e")
        ancestors = Ancestry(_node("div")).push(_node("p")).push(_node("span")).push(_node("a"))
        assert _styles(css, node, ancestors)["desktop"]["color"] == "green"

    def test_later_rule_wins_tie(self):
        css = ".a { color: red; } .b { color: blue; }"
        assert _styles(css, _node("p", "a", "b"))["desktop"]["color"] == "blue"

    def test_per_property_merge(self):
        css = ".a { color: red; margin: 0; } .b { color: blue; }"
        styles = _styles(css, _node("p", "a", "b"))["desktop"]
        assert styles == {"color": "blue", "margin": "0"}

    def test_camel_case_keys(self):
        css = "p { font-size: 16px; background-color: #fff; -webkit-font-smoothing: auto; }"
        assert _styles(css, _node("p"))["desktop"] == {
            "fontSize": "16px",
            "backgroundColor": "#fff",
            "WebkitFontSmoothing": "auto",
        }

    def test_inline_beats_rules(self):
        css = "#x { color: red; }"
        node = _node("p", id="x", style="color: purple")
        assert _styles(css, node)["desktop"]["color"] == "purple"

    def test_important_beats_inline(self):
        css = "p { color: red !important; }"
        node = _node("p", style="color: purple")
        assert _styles(css, node)["desktop"]["color"] == "red"

    def test_cascade_function_without_rules(self):
        assert cascade([], {"font-size": "12px"}) == {"fontSize": "12px"}

    def test_no_match_gives_empty_desktop(self):
        assert _styles(".other { color: red; }", _node("p")) == {"desktop": {}}


class TestBreakpointBuckets:
    def test_mobile_is_additive(self):
        css = """
        .x { color: red; font-size: 16px; }
        @media (max-width: 768px) { .x { font-size: 14px; } }
        """
        styles = _styles(css, _node("p", "x"))
        assert styles["desktop"] == {"color": "red", "fontSize": "16px"}
        assert styles["mobile"] == {"color": "red", "fontSize": "14px"}
        assert "tablet" not in styles

    def test_tablet_bucket(self):
        css = """
        .x { padding: 32px; }
        @media (max-width: 1024px) { .x { padding: 24px; } }
        """
        styles = _styles(css, _node("div", "x"))
        assert styles["tablet"] == {"padding": "24px"}
        assert "mobile" not in styles

    def test_bucket_omitted_when_media_rule_does_not_match(self):
        css = ".x { color: red; } @media (max-width: 768px) { .y { color: blue; } }"
        assert set(_styles(css, _node("p", "x"))) == {"desktop"}

    def test_min_width_media_joins_desktop(self):
        css = ".x { color: red; } @media (min-width: 1200px) { .x { color: blue; } }"
        assert _styles(css, _node("p", "x")) == {"desktop": {"color": "blue"}}

    def test_inert_media_ignored(self):
        css = ".x { color: red; } @media print { .x { color: black; } }"
        assert _styles(css, _node("p", "x")) == {"desktop": {"color": "red"}}

    def test_resolve_single_bucket(self):
        css = ".x { color: red; } @media (max-width: 600px) { .x { color: blue; } }"
        sheet = parse_stylesheet(css)
        node = _node("p", "x")
        assert resolve(node, None, sheet) == {"color": "red"}
        assert resolve(node, None, sheet, Breakpoint.MOBILE) == {"color": "blue"}


class TestStates:
    def test_hover_routed_to_states(self):
        css = ".btn { color: white; } .btn:hover { color: black; opacity: 0.8; }"
        resolved = resolve_node(_node("a", "btn"), None, parse_stylesheet(css))
        assert resolved.styles == {"desktop": {"color": "white"}}
        assert resolved.states == {"hover": {"color": "black", "opacity": "0.8"}}

    def test_multiple_states(self):
        css = "a:hover { color: red; } a:focus { outline: none; } a:active { color: blue; }"
        states = resolve_states(_node("a"), None, parse_stylesheet(css))
        assert states == {
            "hover": {"color": "red"},
            "focus": {"outline": "none"},
            "active": {"color": "blue"},
        }

    def test_state_cascade_order(self):
        css = "a:hover { color: red; } .btn:hover { color: blue; } a:hover { background: none; }"
        states = resolve_states(_node("a", "btn"), None, parse_stylesheet(css))
        assert states["hover"] == {"color": "blue", "background": "none"}

    def test_no_states(self):
        assert resolve_states(_node("p"), None, parse_stylesheet("p { color: red; }")) == {}
