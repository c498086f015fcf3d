"""
Tests for the stylesheet model, codemods and comment-preserving emission.
"""

import pytest

from scalpel.exceptions import PartialInputError, TargetNotFound
from scalpel.parser import parse_css
from scalpel.stylesheet.emitter import CommentPlacer, emit_stylesheet
from scalpel.stylesheet.model import normalize_selector
from scalpel.stylesheet.rules import StylesheetEditor


BTN_RULE = (
    "/* Buttons */\n"
    ".btn {\n"
    "    color: red; /* brand */\n"
    "    padding: 4px;\n"
    "}\n"
)


class TestStylesheetParsing:
    """Test the model built from tree-sitter-css."""

    def test_items_and_comments(self, app_css):
        """Test imports, rules and comment attachment."""
        sheet = parse_css(app_css)
        assert [item.href for item in sheet.imports()] == ["tailwindcss/base", "tailwindcss/components"]

        btn, hover = sheet.rules()
        assert btn.leading == ["/* Buttons */"]
        assert [(d.name, d.value) for d in btn.declarations] == [("color", "red"), ("padding", "4px")]
        assert btn.declarations[0].trailing == ["/* brand */"]
        assert hover.selector == "a:hover"
        assert hover.selector_comments == ["/* hover state */"]

    def test_selector_normalization(self):
        """Test whitespace differences do not matter when matching selectors."""
        assert normalize_selector("a ,\n  b:is(.x,.y)") == "a, b:is(.x,.y)"

    def test_important_kept_in_value(self):
        """Test !important stays part of the value."""
        sheet = parse_css(".a { color: red !important; }\n")
        assert sheet.rules()[0].declarations[0].value == "red !important"


class TestStylesheetEmission:
    """Test regeneration with comment placement."""

    def test_regenerated_layout(self, app_css):
        """Test rules are regenerated one declaration per line with comments in place."""
        output = emit_stylesheet(parse_css(app_css))
        assert output == (
            '@import "tailwindcss/base";\n'
            '@import url("tailwindcss/components");\n'
            "\n"
            + BTN_RULE +
            "\n"
            "a:hover { /* hover state */\n"
            "    color: blue;\n"
            "}\n"
        )

    def test_rule_trailing_comment_on_selector_line(self):
        """Test a comment after a closing brace is anchored to the selector line."""
        output = emit_stylesheet(parse_css(".a { color: red; } /* legacy */\n"))
        assert output == ".a { /* legacy */\n    color: red;\n}\n"

    def test_dangling_comment_kept(self):
        """Test a comment at the end of the sheet is emitted last."""
        output = emit_stylesheet(parse_css(".a { color: red; }\n\n/* end */\n"))
        assert output.endswith("}\n\n/* end */\n")

    def test_at_rules_verbatim(self):
        """Test media queries are emitted as written."""
        source = "@media (min-width: 640px) {\n  .a { color: red; }\n}\n"
        assert emit_stylesheet(parse_css(source)) == source


class TestCommentPlacer:
    """Test anchoring comments to regenerated lines."""

    def test_place_on_anchor_line(self):
        """Test the comment is appended to the first line holding the anchor."""
        lines = [".a {", "    color: red;", "}"]
        placer = CommentPlacer(lines)
        assert placer.place("color:", "/* c */")
        assert lines[1] == "    color: red; /* c */"

    def test_never_duplicated(self):
        """Test a comment already on the line is not added again."""
        lines = [".a { /* c */"]
        CommentPlacer(lines).place(".a", "/* c */")
        assert lines == [".a { /* c */"]

    def test_missing_anchor_dropped(self):
        """Test a comment without its anchor is dropped."""
        lines = [".a {", "}"]
        placer = CommentPlacer(lines)
        assert not placer.place("margin:", "/* gone */")
        assert placer.dropped == ["/* gone */"]
        assert lines == [".a {", "}"]

    def test_search_range(self):
        """Test the search stays inside the given range."""
        lines = [".a {", "    color: red;", "}", ".b {", "    color: blue;", "}"]
        CommentPlacer(lines).place("color:", "/* b */", 3, 6)
        assert lines[1] == "    color: red;"
        assert lines[4] == "    color: blue; /* b */"


class TestStylesheetImports:
    """Test @import codemods."""

    def test_is_imported_both_forms(self, app_css):
        """Test quoted and url() imports are recognised."""
        sheet = parse_css(app_css)
        editor = StylesheetEditor()
        assert editor.is_imported(sheet, "tailwindcss/base")
        assert editor.is_imported(sheet, "tailwindcss/components")
        assert not editor.is_imported(sheet, "tailwindcss/utilities")

    def test_insert_after_last_import(self, app_css):
        """Test new imports join the import group, semicolon added."""
        sheet = parse_css(app_css)
        StylesheetEditor().insert_imports(sheet, '@import "tailwindcss/utilities"\n@import url("tailwindcss/base");')
        output = emit_stylesheet(sheet)
        assert output.startswith(
            '@import "tailwindcss/base";\n'
            '@import url("tailwindcss/components");\n'
            '@import "tailwindcss/utilities";\n'
            "\n"
            "/* Buttons */\n"
        )
        assert output.count("tailwindcss/base") == 1

    def test_insert_after_charset(self):
        """Test imports follow @charset when there are none yet."""
        sheet = parse_css('@charset "utf-8";\n.a { color: red; }\n')
        StylesheetEditor().insert_imports(sheet, '@import "x.css";')
        output = emit_stylesheet(sheet)
        assert output.index("@charset") < output.index("@import") < output.index(".a {")

    def test_insert_at_top(self):
        """Test imports go first in a sheet without imports or charset."""
        sheet = parse_css(".a { color: red; }\n")
        StylesheetEditor().insert_imports(sheet, '@import "x.css";')
        assert emit_stylesheet(sheet).startswith('@import "x.css";\n\n.a {')

    def test_bad_line_aborts(self, app_css):
        """Test a non-import line aborts the batch."""
        sheet = parse_css(app_css)
        with pytest.raises(PartialInputError):
            StylesheetEditor().insert_imports(sheet, '@import "ok.css";\n.a { color: red; }')
        assert len(sheet.imports()) == 2

    def test_remove_import(self, facade, app_css):
        """Test removal keeps the remaining items."""
        result = facade.css_remove_imports(app_css, ["tailwindcss/components"])
        assert result.ok
        assert result.value.startswith('@import "tailwindcss/base";\n\n/* Buttons */\n')

    def test_facade_probe(self, facade, app_css):
        """Test the facade probe reports ok/True and error/False."""
        assert facade.css_imported(app_css, "tailwindcss/base").value is True
        assert facade.css_imported(app_css, "nope").as_tuple() == ("error", "css_imported", False)


class TestStylesheetDeclarations:
    """Test rule and declaration codemods."""

    def test_rule_exists(self, facade, app_css):
        """Test rule lookup by selector."""
        assert facade.css_rule_exists(app_css, "a:hover").ok
        assert facade.css_rule_exists(app_css, ".btn").ok
        assert not facade.css_rule_exists(app_css, ".card").ok

    def test_add_declaration(self, facade, app_css):
        """Test a new declaration is appended to the rule."""
        result = facade.css_ensure_declaration(app_css, ".btn", "margin", "0")
        assert result.ok
        assert "    padding: 4px;\n    margin: 0;\n}\n" in result.value
        assert "    color: red; /* brand */\n" in result.value

    def test_replace_declaration_value(self, facade, app_css):
        """Test an existing property gets the new value and keeps its comment."""
        result = facade.css_ensure_declaration(app_css, ".btn", "color", "green;")
        assert "    color: green; /* brand */\n" in result.value
        assert "red" not in result.value

    def test_rule_created(self, facade, app_css):
        """Test a missing rule is appended at the end."""
        result = facade.css_ensure_declaration(app_css, ".card", "display", "flex")
        assert result.value.endswith("}\n\n.card {\n    display: flex;\n}\n")

    def test_remove_declaration(self, facade, app_css):
        """Test removal takes the declaration and its trailing comment."""
        result = facade.css_remove_declaration(app_css, ".btn", "color")
        assert ".btn {\n    padding: 4px;\n}\n" in result.value
        assert "/* brand */" not in result.value

    def test_remove_declaration_missing_rule(self):
        """Test removal from a missing rule raises TargetNotFound."""
        with pytest.raises(TargetNotFound, match="Rule '.card' not found"):
            StylesheetEditor().remove_declaration(parse_css(".a { color: red; }\n"), ".card", "color")

    def test_parse_error(self, facade):
        """Test invalid CSS is reported as an error result."""
        result = facade.css_ensure_declaration(".a { color: red; ", ".a", "color", "blue")
        assert result.status == "error"
        assert "Failed to parse css" in result.value
