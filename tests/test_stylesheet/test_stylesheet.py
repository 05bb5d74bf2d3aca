"""Tests for the CSS stylesheet parser and breakpoint classifier."""

import pytest

from pagemodel.config import ConverterConfig
from pagemodel.model.style import Breakpoint
from pagemodel.stylesheet import (
    classify,
    is_inert,
    merge_stylesheets,
    parse_declarations,
    parse_inline_style,
    parse_stylesheet,
    width_thresholds,
)


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


class TestDeclarations:
    def test_simple_declarations(self):
        decls = parse_declarations("color: red; font-size: 16px")
        assert [(d.property, d.value) for d in decls] == [
            ("color", "red"),
            ("font-size", "16px"),
        ]

    def test_property_names_lowercased(self):
        decls = parse_declarations("COLOR: Red")
        assert decls[0].property == "color"
        assert decls[0].value == "Red"

    def test_custom_property_case_kept(self):
        decls = parse_declarations("--Brand-Color: #667eea")
        assert decls[0].property == "--Brand-Color"

    def test_important_flag(self):
        decls = parse_declarations("color: red !important; margin: 0")
        assert decls[0].important is True
        assert decls[0].value == "red"
        assert decls[1].important is False

    def test_value_with_semicolon_in_string(self):
        decls = parse_declarations('content: "a;b"; color: blue')
        assert decls[0].value == '"a;b"'
        assert decls[1].property == "color"

    def test_value_with_url_parens(self):
        decls = parse_declarations("background: url(data:image/png;base64,AAA) no-repeat")
        assert len(decls) == 1
        assert decls[0].value == "url(data:image/png;base64,AAA) no-repeat"

    def test_missing_colon_skipped(self):
        decls = parse_declarations("color red; margin: 0")
        assert [d.property for d in decls] == ["margin"]

    def test_empty_value_skipped(self):
        assert parse_declarations("color: ;") == []

    def test_invalid_name_skipped(self):
        decls = parse_declarations("12px: red; padding: 4px")
        assert [d.property for d in decls] == ["padding"]

    def test_inline_style(self):
        assert parse_inline_style("color: red; padding: 4px 8px;") == {
            "color": "red",
            "padding": "4px 8px",
        }


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


class TestStyleRules:
    def test_single_rule(self):
        sheet = parse_stylesheet(".card { padding: 16px; }")
        assert len(sheet.rules) == 1
        rule = sheet.rules[0]
        assert str(rule.selector) == ".card"
        assert rule.declarations == {"padding": "16px"}
        assert rule.source_index == 0

    def test_source_order(self):
        sheet = parse_stylesheet("a { color: red; } b { color: blue; } i { color: green; }")
        assert [r.source_index for r in sheet.rules] == [0, 1, 2]

    def test_selector_list_shares_source_index(self):
        sheet = parse_stylesheet("h1, h2 { margin: 0; } p { margin: 0; }")
        assert [str(r.selector) for r in sheet.rules] == ["h1", "h2", "p"]
        assert [r.source_index for r in sheet.rules] == [0, 0, 1]

    def test_important_declarations_split(self):
        sheet = parse_stylesheet(".a { color: red !important; margin: 0; }")
        rule = sheet.rules[0]
        assert rule.declarations == {"margin": "0"}
        assert rule.important == {"color": "red"}

    def test_comments_removed(self):
        sheet = parse_stylesheet("/* header */ .a { /* x */ color: red; }")
        assert sheet.rules[0].declarations == {"color": "red"}

    def test_text_kept_verbatim(self):
        css = ".a { color: red; }"
        assert parse_stylesheet(css).text == css

    def test_root_custom_properties(self):
        sheet = parse_stylesheet(":root { --brand: #667eea; --gap: 8px; }")
        assert sheet.custom_properties == {"--brand": "#667eea", "--gap": "8px"}
        assert sheet.rules == []


class TestMalformedInput:
    def test_bad_selector_skipped(self):
        sheet = parse_stylesheet(".a:not(:nth-child(2)) { color: red; } .b { color: blue; }")
        assert [str(r.selector) for r in sheet.rules] == [".b"]

    def test_bad_selector_in_list_keeps_siblings(self):
        sheet = parse_stylesheet(".ok, $$bad { color: red; }")
        assert [str(r.selector) for r in sheet.rules] == [".ok"]

    def test_stray_closing_brace(self):
        sheet = parse_stylesheet("} .a { color: red; }")
        assert len(sheet.rules) == 1

    def test_unterminated_block(self):
        sheet = parse_stylesheet(".a { color: red; } .b { color: blue;")
        assert [str(r.selector) for r in sheet.rules] == [".a", ".b"]
        assert sheet.rules[1].declarations == {"color": "blue"}

    def test_unterminated_comment(self):
        sheet = parse_stylesheet(".a { color: red; } /* never closed .b { color: blue; }")
        assert [str(r.selector) for r in sheet.rules] == [".a"]

    def test_empty_input(self):
        sheet = parse_stylesheet("")
        assert sheet.rules == []
        assert sheet.media_rules == []

    def test_complex_sibling_selector_parses(self):
        sheet = parse_stylesheet("h2 + p { margin-top: 0; }")
        assert len(sheet.rules) == 1


# ---------------------------------------------------------------------------
# At-rules
# ---------------------------------------------------------------------------


class TestAtRules:
    def test_media_block_recorded(self):
        sheet = parse_stylesheet("@media (max-width: 768px) { .a { color: red; } }")
        assert sheet.rules == []
        assert len(sheet.media_rules) == 1
        media = sheet.media_rules[0]
        assert media.condition == "(max-width: 768px)"
        assert media.bucket is Breakpoint.MOBILE
        assert media.inert is False
        assert media.rules[0].declarations == {"color": "red"}

    def test_media_without_space(self):
        sheet = parse_stylesheet("@media(max-width:1024px){.a{color:red}}")
        assert sheet.media_rules[0].bucket is Breakpoint.TABLET

    def test_media_rules_numbered_in_source_order(self):
        sheet = parse_stylesheet(
            ".a { color: red; } @media (max-width: 600px) { .a { color: blue; } } .b { color: green; }"
        )
        assert sheet.rules[0].source_index == 0
        assert sheet.media_rules[0].rules[0].source_index == 1
        assert sheet.rules[1].source_index == 2

    def test_print_media_is_inert(self):
        sheet = parse_stylesheet("@media print { .a { display: none; } }")
        assert sheet.media_rules[0].inert is True
        assert list(sheet.iter_media_rules(Breakpoint.DESKTOP)) == []

    def test_keyframes_skipped(self):
        css = """
        @keyframes fade { from { opacity: 0; } to { opacity: 1; } }
        .hero { animation: fade 1s ease-in; }
        """
        sheet = parse_stylesheet(css)
        assert len(sheet.rules) == 1
        assert sheet.rules[0].declarations == {"animation": "fade 1s ease-in"}

    def test_font_face_and_import_skipped(self):
        css = """
        @import url("theme.css");
        @font-face { font-family: Inter; src: url(inter.woff2); }
        body { font-family: Inter, sans-serif; }
        """
        sheet = parse_stylesheet(css)
        assert [str(r.selector) for r in sheet.rules] == ["body"]

    def test_supports_flattened(self):
        sheet = parse_stylesheet("@supports (display: grid) { .grid { display: grid; } }")
        assert [str(r.selector) for r in sheet.rules] == [".grid"]

    def test_rule_count(self):
        sheet = parse_stylesheet(
            ".a { color: red; } @media (max-width: 600px) { .a { color: blue; } .b { color: red; } }"
        )
        assert sheet.rule_count == 3


class TestMergeStylesheets:
    def test_indices_renumbered(self):
        first = parse_stylesheet(".a { color: red; } .b { color: red; }")
        second = parse_stylesheet(".c { color: red; }")
        merged = merge_stylesheets([first, second])
        assert [r.source_index for r in merged.rules] == [0, 1, 2]

    def test_media_indices_renumbered(self):
        first = parse_stylesheet(".a { color: red; }")
        second = parse_stylesheet("@media (max-width: 600px) { .a { color: blue; } }")
        merged = merge_stylesheets([first, second])
        assert merged.media_rules[0].rules[0].source_index == 1

    def test_text_joined(self):
        merged = merge_stylesheets([parse_stylesheet("a{}"), parse_stylesheet("b{}")])
        assert merged.text == "a{}\nb{}"

    def test_no_sheets(self):
        merged = merge_stylesheets([])
        assert merged.rules == []
        assert merged.text == ""


# ---------------------------------------------------------------------------
# Breakpoint classification
# ---------------------------------------------------------------------------


class TestBreakpoints:
    @pytest.mark.parametrize(
        "condition, bucket",
        [
            ("(max-width: 768px)", Breakpoint.MOBILE),
            ("(max-width: 480px)", Breakpoint.MOBILE),
            ("(max-width: 1024px)", Breakpoint.TABLET),
            ("(max-width: 900px)", Breakpoint.TABLET),
            ("(max-width: 1280px)", Breakpoint.DESKTOP),
            ("(min-width: 768px)", Breakpoint.DESKTOP),
            ("screen and (max-width: 48em)", Breakpoint.MOBILE),
            ("(width <= 600px)", Breakpoint.MOBILE),
            ("print", Breakpoint.DESKTOP),
        ],
    )
    def test_classify(self, condition, bucket):
        assert classify(condition) is bucket

    def test_narrowest_max_width_wins(self):
        assert width_thresholds("(max-width: 1024px) and (max-width: 600px)") == (None, 600.0)

    def test_min_and_max(self):
        assert width_thresholds("(min-width: 600px) and (max-width: 900px)") == (600.0, 900.0)

    def test_rem_uses_root_font_size(self):
        config = ConverterConfig(root_font_size=10)
        assert width_thresholds("(max-width: 50rem)", config) == (None, 500.0)

    def test_custom_thresholds(self):
        config = ConverterConfig(mobile_max_width=600, tablet_max_width=800)
        assert classify("(max-width: 700px)", config) is Breakpoint.TABLET
        assert classify("(max-width: 900px)", config) is Breakpoint.DESKTOP

    def test_is_inert(self):
        assert is_inert("print") is True
        assert is_inert("(prefers-color-scheme: dark)") is True
        assert is_inert("(max-width: 768px)") is False
