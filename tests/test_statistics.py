"""
Tests for the statistics collector.
"""

from scalpel.mutation import collect_statistics
from scalpel.parser import parse_javascript
from scalpel.schemas import JsStatistics


class TestStatistics:
    """Test structural counters."""

    def test_exact_counts(self):
        """Test a module with imports, a class, a function and debuggers."""
        source = (
            'import a from "a";\n'
            'import { b } from "b";\n'
            "\n"
            "function helper() {\n"
            "  debugger;\n"
            "}\n"
            "\n"
            "class Widget {}\n"
            "\n"
            "debugger;\n"
        )
        stats = collect_statistics(parse_javascript(source))
        assert stats == JsStatistics(imports=2, classes=1, debuggers=2, functions=1, trys=0, throws=0)

    def test_nested_occurrences_count(self):
        """Test methods, function expressions, try and throw inside a class all count."""
        source = (
            "class Runner {\n"
            "  run() {\n"
            "    try {\n"
            '      throw new Error("boom");\n'
            "    } catch (e) {}\n"
            "  }\n"
            "}\n"
            "const expr = function () {};\n"
            "const gen = function* () {};\n"
        )
        stats = collect_statistics(parse_javascript(source))
        assert stats.classes == 1
        assert stats.functions == 3
        assert stats.trys == 1
        assert stats.throws == 1

    def test_arrow_functions_not_counted(self):
        """Test arrow functions are expressions, not functions."""
        stats = collect_statistics(parse_javascript("const f = () => 1;\n"))
        assert stats.functions == 0

    def test_empty_source(self):
        """Test all counters default to zero."""
        assert collect_statistics(parse_javascript("")) == JsStatistics()

    def test_facade_statistics(self, facade, app_js):
        """Test the facade wraps the record in an ok result."""
        result = facade.statistics(app_js)
        assert result.ok
        assert result.value.imports == 4
        assert result.value.functions == 0

    def test_facade_statistics_parse_error(self, facade):
        """Test invalid input yields an error result."""
        result = facade.statistics("class {")
        assert result.status == "error"
