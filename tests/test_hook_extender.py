"""
Tests for HookExtender: the `hooks` object inside `new LiveSocket(...)`.
"""

import pytest

from scalpel.exceptions import TargetNotFound, TargetShapeMismatch
from scalpel.mutation import FindStatus, HookExtender, emit
from scalpel.parser import parse_javascript


def _extend(text, names, config=None):
    tree = parse_javascript(text)
    HookExtender(config).extend(tree, names)
    return emit(tree)


def _remove(text, names):
    tree = parse_javascript(text)
    HookExtender().remove(tree, names)
    return emit(tree)


class TestLocateOptions:
    """Test the target shape search."""

    def test_found(self, app_js):
        """Test the standard app.js shape is found."""
        condition, options = HookExtender().locate_options(parse_javascript(app_js))
        assert condition.status == FindStatus.FOUND
        assert options.kind == "object"

    def test_other_variable_name(self):
        """Test a LiveSocket bound to another name is not found."""
        source = 'let other = new LiveSocket("/live", Socket, {});\n'
        condition, options = HookExtender().locate_options(parse_javascript(source))
        assert condition.status == FindStatus.NOT_FOUND
        assert condition.reason == "liveSocket not found."
        assert options is None

    def test_wrong_constructor(self):
        """Test the variable must be created with new LiveSocket."""
        source = 'let liveSocket = new Socket("/socket");\n'
        condition, _ = HookExtender().locate_options(parse_javascript(source))
        assert condition.status == FindStatus.FOUND_ERROR
        assert "new LiveSocket" in condition.reason

    def test_missing_options_object(self):
        """Test the constructor call needs a trailing object argument."""
        source = 'let liveSocket = new LiveSocket("/live", Socket);\n'
        condition, _ = HookExtender().locate_options(parse_javascript(source))
        assert condition.status == FindStatus.FOUND_ERROR
        assert "Options object not found" in condition.reason

    def test_configured_names(self):
        """Test variable and constructor names come from config."""
        source = 'const socket = new CustomSocket("/live", {});\n'
        extender = HookExtender({"hook_variable": "socket", "hook_constructor": "CustomSocket"})
        assert extender.find_marker(parse_javascript(source))

    def test_facade_probe(self, facade, app_js):
        """Test the hook target probe through the facade."""
        assert facade.hook_target_exists(app_js).as_tuple() == ("ok", "hook_target_exists", True)
        assert facade.hook_target_exists("foo();\n").as_tuple() == ("error", "hook_target_exists", False)


class TestExtendHooks:
    """Test hook registration."""

    def test_creates_hooks_multiline(self, app_js):
        """Test `hooks` is created at the end of a multiline options object."""
        output = _extend(app_js, ["Copy"])
        assert (
            'let liveSocket = new LiveSocket("/live", Socket, {\n'
            "  longPollFallbackMs: 2500,\n"
            "  params: { _csrf_token: csrfToken },\n"
            "  hooks: { Copy },\n"
            "});\n"
        ) in output

    def test_creates_hooks_inline(self):
        """Test `{x: 1}` gains `hooks` holding the entry as last property."""
        source = 'let liveSocket = new LiveSocket("/live", Socket, {x: 1});\n'
        output = _extend(source, ["A"])
        assert output == 'let liveSocket = new LiveSocket("/live", Socket, {x: 1, hooks: { A }});\n'

    def test_extends_existing_hooks(self):
        """Test existing entries are kept and only new ones appended."""
        source = 'let liveSocket = new LiveSocket("/live", Socket, {hooks: {...Hooks, A}, x: 1});\n'
        output = _extend(source, ["A", "B"])
        assert output == 'let liveSocket = new LiveSocket("/live", Socket, {hooks: {...Hooks, A, B}, x: 1});\n'

    def test_spread_entry(self):
        """Test `...Name` registers a spread entry distinct from shorthand `Name`."""
        source = 'let liveSocket = new LiveSocket("/live", Socket, {hooks: {Hooks}});\n'
        output = _extend(source, ["...Hooks"])
        assert output == 'let liveSocket = new LiveSocket("/live", Socket, {hooks: {Hooks, ...Hooks}});\n'

    def test_no_duplicates_across_calls(self, app_js):
        """Test extending twice with the same names changes nothing the second time."""
        once = _extend(app_js, ["Copy", "...Hooks"])
        twice = _extend(once, ["Copy", "...Hooks"])
        assert once == twice
        assert once.count("Copy") == 1

    def test_repeats_within_one_call_kept(self):
        """Test names repeated within one request are all appended."""
        source = 'let liveSocket = new LiveSocket("/live", Socket, {hooks: {}});\n'
        output = _extend(source, ["A", "A"])
        assert "hooks: { A, A }" in output

    def test_multiline_hooks(self):
        """Test entries follow the layout of a multiline hooks object."""
        source = (
            'let liveSocket = new LiveSocket("/live", Socket, {\n'
            "  hooks: {\n"
            "    ...colocatedHooks,\n"
            "  },\n"
            "});\n"
        )
        output = _extend(source, ["Copy"])
        assert output == (
            'let liveSocket = new LiveSocket("/live", Socket, {\n'
            "  hooks: {\n"
            "    ...colocatedHooks,\n"
            "    Copy,\n"
            "  },\n"
            "});\n"
        )

    def test_other_variable_errors(self):
        """Test a LiveSocket bound to another name raises TargetNotFound."""
        with pytest.raises(TargetNotFound, match="liveSocket not found"):
            _extend('let other = new LiveSocket("/live", Socket, {});\n', ["A"])

    def test_hooks_not_an_object(self):
        """Test `hooks: Hooks` cannot be extended in place."""
        source = 'let liveSocket = new LiveSocket("/live", Socket, {hooks: Hooks});\n'
        with pytest.raises(TargetShapeMismatch, match="not an object literal"):
            _extend(source, ["A"])

    def test_facade_error_message(self, facade):
        """Test facade errors carry the descriptive message."""
        result = facade.extend_hook_object('let liveSocket = new LiveSocket("/live", Socket);\n', ["A"])
        assert result.status == "error"
        assert "Options object not found" in result.value


class TestRemoveHooks:
    """Test hook removal."""

    def test_remove_shorthand_and_spread(self):
        """Test shorthand and spread entries are removed by key."""
        source = 'let liveSocket = new LiveSocket("/live", Socket, {hooks: {...Hooks, Copy, Tooltip}});\n'
        output = _remove(source, ["Copy", "...Hooks"])
        assert output == 'let liveSocket = new LiveSocket("/live", Socket, {hooks: {Tooltip}});\n'

    def test_key_value_entries_untouched(self):
        """Test key-value hooks are not removed."""
        source = 'let liveSocket = new LiveSocket("/live", Socket, {hooks: {Copy: CopyHook, Tooltip}});\n'
        output = _remove(source, ["Copy"])
        assert output == source

    def test_missing_hooks_is_noop(self, app_js):
        """Test removal without a hooks object leaves the source unchanged."""
        assert _remove(app_js, ["Copy"]) == app_js

    def test_remove_then_extend_roundtrip(self, app_js):
        """Test a hook added then removed leaves an empty hooks object."""
        added = _extend(app_js, ["Copy"])
        removed = _remove(added, ["Copy"])
        assert "  hooks: { },\n" in removed

    def test_remove_missing_variable(self, facade):
        """Test removal also reports a missing variable."""
        result = facade.remove_objects_from_hooks("foo();\n", ["A"])
        assert result.as_tuple() == ("error", "remove_objects_from_hooks", "liveSocket not found.")
