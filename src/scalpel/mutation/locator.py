"""
Pattern matchers and targeted searches over a JavaScript SyntaxTree.

Matching is purely textual: "the variable named V" is the first declarator
anywhere in the module whose identifier reads V. No scope resolution.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Tuple

from scalpel.exceptions import TargetNotFound, TargetShapeMismatch
from scalpel.parser.tree import Node, SyntaxTree, walk


class FindStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    FOUND_ERROR = "found_error"


@dataclass(frozen=True)
class FindCondition:
    """
    Outcome of a targeted search.

    NOT_FOUND means the target is absent; FOUND_ERROR means it exists but
    has the wrong shape. Both carry a human readable reason.
    """
    status: FindStatus
    reason: str = ""

    @classmethod
    def found(cls) -> "FindCondition":
        return cls(FindStatus.FOUND)

    @classmethod
    def not_found(cls, reason: str) -> "FindCondition":
        return cls(FindStatus.NOT_FOUND, reason)

    @classmethod
    def found_error(cls, reason: str) -> "FindCondition":
        return cls(FindStatus.FOUND_ERROR, reason)

    @property
    def is_found(self) -> bool:
        return self.status == FindStatus.FOUND

    def raise_for_status(self):
        if self.status == FindStatus.NOT_FOUND:
            raise TargetNotFound(self.reason)
        if self.status == FindStatus.FOUND_ERROR:
            raise TargetShapeMismatch(self.reason)


# --- Matchers ---

def import_specifier(tree: SyntaxTree, node: Node) -> Optional[str]:
    """Module specifier of an import statement, without its quotes."""
    if node.kind != "import_statement":
        return None
    source = node.child_by_field("source")
    if source is None:
        return None
    return tree.text(source)[1:-1]


def top_level_imports(tree: SyntaxTree) -> Iterator[Node]:
    return (child for child in tree.root.children if child.kind == "import_statement")


def declarator_name(tree: SyntaxTree, node: Node) -> Optional[str]:
    if node.kind != "variable_declarator":
        return None
    name = node.child_by_field("name")
    if name is None or name.kind != "identifier":
        return None
    return tree.text(name)


def find_variable(tree: SyntaxTree, name: str) -> Optional[Node]:
    """First variable declarator named `name`, at any depth."""
    for node in walk(tree.root):
        if declarator_name(tree, node) == name:
            return node
    return None


def unwrap_parentheses(node: Optional[Node]) -> Optional[Node]:
    while node is not None and node.kind == "parenthesized_expression":
        inner = [child for child in node.children if not child.is_comment]
        node = inner[0] if inner else None
    return node


def is_new_of(tree: SyntaxTree, node: Optional[Node], constructor: str) -> bool:
    """True for `new <constructor>(...)`."""
    if node is None or node.kind != "new_expression":
        return False
    callee = node.child_by_field("constructor")
    return callee is not None and callee.kind == "identifier" and tree.text(callee) == constructor


def property_key(tree: SyntaxTree, node: Node) -> Optional[str]:
    """
    Key an object entry is compared by.

    Shorthand and key-value entries use their name; spread entries use
    `...` followed by the spread expression, so `Hooks` and `...Hooks` differ.
    """
    if node.kind == "shorthand_property_identifier":
        return tree.text(node)
    if node.kind == "spread_element":
        return "..." + tree.text(node)[3:].strip()
    if node.kind in ("pair", "method_definition"):
        key = node.child_by_field("key") or node.child_by_field("name")
        if key is None:
            return None
        text = tree.text(key)
        if key.kind == "string":
            return text[1:-1]
        return text
    return None


def object_entries(node: Node):
    return [child for child in node.children if not child.is_comment]


# --- Searches ---

def var_exists(tree: SyntaxTree, name: str) -> bool:
    return find_variable(tree, name) is not None


def locate_object_variable(tree: SyntaxTree, name: str) -> Tuple[FindCondition, Optional[Node]]:
    """
    Find the object literal a variable is initialized with.

    Returns:
        (condition, object node or None)
    """
    declarator = find_variable(tree, name)
    if declarator is None:
        return FindCondition.not_found(f"Variable '{name}' not found."), None

    value = unwrap_parentheses(declarator.child_by_field("value"))
    if value is None or value.kind != "object":
        found = value.kind if value is not None else "no initializer"
        return FindCondition.found_error(
            f"Variable '{name}' is not initialized with an object literal ({found})."
        ), None
    return FindCondition.found(), value
