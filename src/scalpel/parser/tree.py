"""
Mutable syntax tree built on top of a tree-sitter parse.

tree-sitter trees are read-only, so every parse is copied into plain `Node`
objects that the codemods can rearrange. Only named children are kept; the
anonymous tokens between them (punctuation, keywords) stay in the source text
and are reproduced from the gaps when the tree is emitted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple


@dataclass(eq=False)
class Node:
    """
    One node of a SyntaxTree.

    Nodes read from the source carry byte offsets into it. Nodes created by a
    codemod are `synthetic`: leaves hold their generated `text`, composite
    ones are rendered from their children by the emitter. Grafted nodes come
    from another parse (a candidate import line) and keep that text in
    `buffer`.
    """
    kind: str
    start: int = 0
    end: int = 0
    children: List["Node"] = field(default_factory=list)
    field_name: Optional[str] = None
    text: Optional[str] = None
    synthetic: bool = False
    buffer: Optional[bytes] = None
    # children as they were parsed; compared against `children` on emit
    origin: Tuple["Node", ...] = ()
    edited: bool = False

    def child_by_field(self, name: str) -> Optional["Node"]:
        for child in self.children:
            if child.field_name == name:
                return child
        return None

    @property
    def is_comment(self) -> bool:
        return self.kind == "comment"


def walk(node: Node) -> Iterator[Node]:
    """Depth-first pre-order traversal, source order, without recursion."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def build_tree(ts_root, length: int, buffer: Optional[bytes] = None) -> Node:
    """
    Copy a tree-sitter node hierarchy into Node objects.

    The root spans the whole buffer so leading and trailing trivia belong to it.
    """
    root = Node(kind=ts_root.type, start=0, end=length, buffer=buffer)
    stack = [(ts_root, root)]
    while stack:
        ts_node, node = stack.pop()
        cursor = ts_node.walk()
        if cursor.goto_first_child():
            while True:
                child = cursor.node
                if child.is_named:
                    built = Node(
                        kind=child.type,
                        start=child.start_byte,
                        end=child.end_byte,
                        field_name=cursor.field_name,
                        buffer=buffer,
                    )
                    node.children.append(built)
                    stack.append((child, built))
                if not cursor.goto_next_sibling():
                    break
        node.origin = tuple(node.children)
    return root


def find_syntax_errors(ts_node) -> List[str]:
    """
    Describe every ERROR or MISSING node under a tree-sitter node.
    """
    errors = []
    stack = [ts_node]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            line = node.start_point[0] + 1
            col = node.start_point[1] + 1
            if node.is_missing:
                errors.append(f"Missing '{node.type}' at line {line}, column {col}")
            else:
                errors.append(f"Syntax error at line {line}, column {col}")
        elif node.has_error:
            stack.extend(reversed(node.children))
    return errors


class SyntaxTree:
    """
    A parsed source plus its mutable node tree.

    Owned by a single operation: parsed, mutated in place, emitted, discarded.
    """

    def __init__(self, language: str, source: bytes, root: Node):
        self.language = language
        self.source = source
        self.root = root

    def text(self, node: Node) -> str:
        """Source text of an original, grafted or synthetic leaf node."""
        if node.synthetic:
            if node.text is None:
                raise ValueError(f"Synthetic '{node.kind}' node has no text of its own")
            return node.text
        buffer = node.buffer if node.buffer is not None else self.source
        return buffer[node.start:node.end].decode("utf-8")

    def same_line(self, left: Node, right: Node) -> bool:
        """True if `right` starts on the line where original node `left` ends."""
        if left.synthetic or right.synthetic or left.buffer is not None or right.buffer is not None:
            return False
        if right.start < left.end:
            return False
        return b"\n" not in self.source[left.end:right.start]

    def line_indent(self, offset: int) -> str:
        """Leading whitespace of the source line containing `offset`."""
        line_start = self.source.rfind(b"\n", 0, offset) + 1
        end = line_start
        while end < len(self.source) and self.source[end:end + 1] in (b" ", b"\t"):
            end += 1
        return self.source[line_start:end].decode("utf-8")

    def starts_line(self, node: Node) -> bool:
        """True if only whitespace precedes the node on its line."""
        line_start = self.source.rfind(b"\n", 0, node.start) + 1
        return self.source[line_start:node.start].strip() == b""

    def __repr__(self):
        return f"SyntaxTree(language={self.language!r}, bytes={len(self.source)})"
