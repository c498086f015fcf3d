"""
HookExtender: manage the `hooks` object of a LiveSocket constructor call.

Target shape::

    let liveSocket = new LiveSocket("/live", Socket, {
      hooks: { ...Hooks, Copy },
      params: {_csrf_token: csrfToken},
    })

The variable and constructor names come from the codemod config.
"""

from typing import Iterable, Optional, Tuple

from scalpel.exceptions import TargetShapeMismatch
from scalpel.logging_config import logger
from scalpel.parser.tree import Node, SyntaxTree
from .config import CODEMOD_CONFIG
from .editor import append_child, make_object, make_pair
from .locator import (
    FindCondition,
    find_variable,
    is_new_of,
    object_entries,
    property_key,
    unwrap_parentheses,
)
from .object_extender import append_entries, entry_keys, remove_entries

# Only these entry kinds are managed inside `hooks`
_HOOK_ENTRY_KINDS = {"shorthand_property_identifier", "spread_element"}


class HookExtender:
    """
    Extend or prune the hooks registered with the LiveSocket options object.
    """

    def __init__(self, config: Optional[dict] = None):
        self.config = {**CODEMOD_CONFIG, **(config or {})}

    @property
    def variable(self) -> str:
        return self.config["hook_variable"]

    @property
    def constructor(self) -> str:
        return self.config["hook_constructor"]

    def locate_options(self, tree: SyntaxTree) -> Tuple[FindCondition, Optional[Node]]:
        """
        Find the options object passed as the last constructor argument.

        Returns:
            (condition, options object node or None)
        """
        declarator = find_variable(tree, self.variable)
        if declarator is None:
            return FindCondition.not_found(f"{self.variable} not found."), None

        value = unwrap_parentheses(declarator.child_by_field("value"))
        if not is_new_of(tree, value, self.constructor):
            return FindCondition.found_error(
                f"{self.variable} is not created with new {self.constructor}(...)."
            ), None

        arguments = value.child_by_field("arguments")
        args = object_entries(arguments) if arguments is not None else []
        last = unwrap_parentheses(args[-1]) if args else None
        if last is None or last.kind != "object":
            return FindCondition.found_error(
                f"Options object not found in the new {self.constructor}(...) arguments."
            ), None
        return FindCondition.found(), last

    def find_marker(self, tree: SyntaxTree) -> bool:
        """Read-only probe for the variable + constructor + options shape."""
        condition, _ = self.locate_options(tree)
        return condition.is_found

    def extend(self, tree: SyntaxTree, names: Iterable[str]) -> SyntaxTree:
        """
        Register hooks, creating `hooks: {}` when the options object has none.

        Names already registered before the call are skipped; repeats within
        `names` are not collapsed.

        Raises:
            TargetNotFound: If the variable does not exist
            TargetShapeMismatch: If the call or the hooks entry has the wrong shape
            InvalidEntryError: If a name is not a valid entry
        """
        condition, options = self.locate_options(tree)
        condition.raise_for_status()

        names = list(names)
        hooks = self._hooks_object(tree, options)
        if hooks is None:
            hooks = make_object()
            append_child(options, make_pair(self.config["hooks_key"], hooks))
            logger.debug(f"Created '{self.config['hooks_key']}' in the {self.variable} options")

        added = append_entries(
            tree, hooks, names, entry_keys(tree, hooks),
            collapse_repeats=False,
            spread_marker=self.config["spread_marker"],
        )
        logger.debug(f"Registered {added} of {len(names)} hooks")
        return tree

    def remove(self, tree: SyntaxTree, names: Iterable[str]) -> SyntaxTree:
        """
        Remove shorthand and spread hooks by key. A missing `hooks` entry is a no-op.

        Raises:
            TargetNotFound: If the variable does not exist
            TargetShapeMismatch: If the call or the hooks entry has the wrong shape
        """
        condition, options = self.locate_options(tree)
        condition.raise_for_status()

        hooks = self._hooks_object(tree, options)
        if hooks is None:
            logger.debug(f"No '{self.config['hooks_key']}' in the {self.variable} options, nothing to remove")
            return tree

        removed = remove_entries(tree, hooks, names, kinds=_HOOK_ENTRY_KINDS)
        logger.debug(f"Removed {removed} hooks")
        return tree

    def _hooks_object(self, tree: SyntaxTree, options: Node) -> Optional[Node]:
        key = self.config["hooks_key"]
        for entry in object_entries(options):
            if property_key(tree, entry) != key:
                continue
            value = unwrap_parentheses(entry.child_by_field("value")) if entry.kind == "pair" else None
            if value is None or value.kind != "object":
                raise TargetShapeMismatch(f"'{key}' in the {self.variable} options is not an object literal.")
            return value
        return None
