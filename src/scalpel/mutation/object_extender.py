"""
ObjectExtender: add or remove entries of an object literal bound to a name.

Entries are written the way they appear in source: `Name` is a shorthand
property, `...Name` (or `...a.b`) is a spread element.
"""

import re
from typing import Iterable, Optional, Set

from scalpel.exceptions import InvalidEntryError
from scalpel.logging_config import logger
from scalpel.parser.tree import Node, SyntaxTree
from .config import CODEMOD_CONFIG
from .editor import append_child, make_shorthand, make_spread, remove_with_trailing_comments
from .locator import locate_object_variable, object_entries, property_key

_IDENTIFIER = r"[A-Za-z_$][A-Za-z0-9_$]*"
_SHORTHAND_RE = re.compile(rf"^{_IDENTIFIER}$")
_SPREAD_RE = re.compile(rf"^{_IDENTIFIER}(?:\.{_IDENTIFIER})*$")


def build_entry(entry: str, spread_marker: str = "...") -> Node:
    """
    Build the node for one requested entry.

    Raises:
        InvalidEntryError: If the entry would not be a valid property
    """
    name = entry.strip()
    if name.startswith(spread_marker):
        argument = name[len(spread_marker):].strip()
        if not _SPREAD_RE.match(argument):
            raise InvalidEntryError(entry)
        return make_spread("..." + argument)
    if not _SHORTHAND_RE.match(name):
        raise InvalidEntryError(entry)
    return make_shorthand(name)


def entry_keys(tree: SyntaxTree, obj: Node) -> Set[str]:
    keys = set()
    for entry in object_entries(obj):
        key = property_key(tree, entry)
        if key is not None:
            keys.add(key)
    return keys


def append_entries(tree: SyntaxTree, obj: Node, entries: Iterable[str], existing: Set[str],
                   collapse_repeats: bool = True, spread_marker: str = "...") -> int:
    """
    Append each entry whose key is not in `existing`.

    With `collapse_repeats` off, a name repeated within `entries` is appended
    every time it occurs. All entries are validated before any is appended.
    """
    nodes = [build_entry(entry, spread_marker) for entry in entries]
    seen = set(existing)
    added = 0
    for node in nodes:
        key = property_key(tree, node)
        if key in seen:
            logger.debug(f"Entry '{key}' already present, skipping")
            continue
        append_child(obj, node)
        if collapse_repeats:
            seen.add(key)
        added += 1
    return added


def remove_entries(tree: SyntaxTree, obj: Node, entries: Iterable[str], kinds: Optional[Set[str]] = None) -> int:
    """
    Remove entries whose key is in `entries`, optionally limited to node kinds.
    """
    targets = {entry.strip() for entry in entries}
    removed = 0
    for node in object_entries(obj):
        if kinds is not None and node.kind not in kinds:
            continue
        if property_key(tree, node) in targets:
            remove_with_trailing_comments(tree, obj, node)
            removed += 1
    return removed


class ObjectExtender:
    """
    Merge entries into, or remove them from, `const <name> = { ... }`.
    """

    def __init__(self, config: Optional[dict] = None):
        self.config = {**CODEMOD_CONFIG, **(config or {})}

    def extend(self, tree: SyntaxTree, variable_name: str, entries: Iterable[str]) -> SyntaxTree:
        """
        Append entries not already present, in the order given.

        Raises:
            TargetNotFound: If no variable is named `variable_name`
            TargetShapeMismatch: If its initializer is not an object literal
            InvalidEntryError: If an entry is not a valid name
        """
        condition, obj = locate_object_variable(tree, variable_name)
        condition.raise_for_status()

        entries = list(entries)
        added = append_entries(
            tree, obj, entries, entry_keys(tree, obj),
            collapse_repeats=True,
            spread_marker=self.config["spread_marker"],
        )
        logger.debug(f"Extended '{variable_name}' with {added} of {len(entries)} entries")
        return tree

    def remove(self, tree: SyntaxTree, variable_name: str, entries: Iterable[str]) -> SyntaxTree:
        """
        Remove entries (shorthand, spread or key-value) by key.

        Raises:
            TargetNotFound: If no variable is named `variable_name`
            TargetShapeMismatch: If its initializer is not an object literal
        """
        condition, obj = locate_object_variable(tree, variable_name)
        condition.raise_for_status()

        removed = remove_entries(tree, obj, entries)
        logger.debug(f"Removed {removed} entries from '{variable_name}'")
        return tree
