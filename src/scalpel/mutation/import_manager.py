"""
ImportManager: query, insert and remove ES module import declarations.

Imports are deduplicated by module specifier alone: an import of an already
imported module is skipped even when its bindings differ.
"""

from typing import Iterable, List, Optional, Set

from scalpel.exceptions import ParseFailure, PartialInputError
from scalpel.logging_config import logger
from scalpel.parser.javascript_parser import parse_fragment
from scalpel.parser.tree import Node, SyntaxTree
from .editor import insert_child, remove_with_trailing_comments
from .locator import import_specifier, top_level_imports


class ImportManager:
    """
    Manage the import declarations of a module.
    """

    def __init__(self, config: Optional[dict] = None):
        self.config = config or {}

    def is_module_imported(self, tree: SyntaxTree, module: str) -> bool:
        """True if a top-level import declaration names `module`."""
        return any(import_specifier(tree, node) == module for node in top_level_imports(tree))

    def insert_imports(self, tree: SyntaxTree, imports_text: str) -> SyntaxTree:
        """
        Insert import declarations, one per non-blank line of `imports_text`.

        New imports go right after the last import (or at the top of the
        module), in the order given. The whole batch is checked before the
        tree is touched.

        Raises:
            PartialInputError: If a line does not parse or is not an import
        """
        candidates: List[Node] = []
        for raw_line in imports_text.splitlines():
            line = raw_line.strip()
            if line:
                candidates.extend(self._parse_candidate(line))

        present: Set[str] = {import_specifier(tree, node) for node in top_level_imports(tree)}
        added = 0
        for node in candidates:
            specifier = import_specifier(tree, node)
            if specifier in present:
                logger.debug(f"Import of '{specifier}' already present, skipping")
                continue
            insert_child(tree.root, self._insertion_index(tree), node)
            present.add(specifier)
            added += 1

        logger.debug(f"Inserted {added} of {len(candidates)} candidate imports")
        return tree

    def remove_imports(self, tree: SyntaxTree, modules: Iterable[str]) -> SyntaxTree:
        """
        Remove every top-level import whose specifier is in `modules`.

        A comment trailing a removed import on the same line goes with it.
        """
        targets = set(modules)
        removed = 0
        for node in list(top_level_imports(tree)):
            if import_specifier(tree, node) in targets:
                remove_with_trailing_comments(tree, tree.root, node)
                removed += 1

        logger.debug(f"Removed {removed} import declaration(s)")
        return tree

    def _parse_candidate(self, line: str) -> List[Node]:
        try:
            program = parse_fragment(line)
        except ParseFailure as e:
            raise PartialInputError(line, f"Invalid import line {line!r}: {e.message}") from e

        statements = [child for child in program.children if not child.is_comment]
        if not statements or any(node.kind != "import_statement" for node in statements):
            raise PartialInputError(line, f"Line {line!r} is not an import declaration")

        return [self._terminated(node) for node in statements]

    def _terminated(self, node: Node) -> Node:
        """The import itself if it ends with a semicolon, else a re-parse with one."""
        text = node.buffer[node.start:node.end].decode("utf-8")
        if text.endswith(";"):
            return node
        return parse_fragment(text + ";").children[0]

    def _insertion_index(self, tree: SyntaxTree) -> int:
        children = tree.root.children
        last_import = None
        for index, child in enumerate(children):
            if child.kind == "import_statement":
                last_import = index
        if last_import is not None:
            return last_import + 1
        # A hashbang has to stay on the first line
        if children and children[0].kind == "hash_bang_line":
            return 1
        return 0
