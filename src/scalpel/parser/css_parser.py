"""
Parse CSS with tree-sitter-css into the Stylesheet model.

Comment placement rules: a comment on the same line as the end of the
preceding item trails it, any other comment leads the next item, and
comments with nothing after them dangle at the end of their container.
"""

import re
from typing import List, Optional

from scalpel.exceptions import ParseFailure
from scalpel.logging_config import logger
from scalpel.parser.language_manager import get_parser
from scalpel.parser.tree import Node, SyntaxTree, build_tree, find_syntax_errors
from scalpel.stylesheet.model import (
    CssDeclaration,
    CssImport,
    CssRaw,
    CssRule,
    Stylesheet,
)

_IMPORT_HREF_RE = re.compile(
    r"""@import\s+(?:url\(\s*)?(?P<quote>["']?)(?P<href>[^"')\s]+)(?P=quote)""",
    re.IGNORECASE,
)


def import_href(statement: str) -> Optional[str]:
    """Target of `@import "x";` or `@import url("x");`."""
    match = _IMPORT_HREF_RE.search(statement)
    return match.group("href") if match else None


def parse_css_tree(text: str) -> SyntaxTree:
    source = text.encode("utf-8")
    ts_tree = get_parser("css").parse(source)
    if ts_tree.root_node.has_error:
        errors = find_syntax_errors(ts_tree.root_node)
        logger.debug(f"CSS parse rejected: {errors}")
        raise ParseFailure("css", errors[0] if errors else "unknown syntax error")
    return SyntaxTree("css", source, build_tree(ts_tree.root_node, len(source)))


class _StylesheetBuilder:
    def __init__(self, tree: SyntaxTree):
        self.tree = tree

    def build(self) -> Stylesheet:
        stylesheet = Stylesheet()
        stylesheet.dangling = self._collect(self.tree.root, stylesheet.items, self._item)
        return stylesheet

    def _collect(self, container: Node, items: list, convert, opening: Optional[List[str]] = None) -> List[str]:
        """
        Convert the children of `container`, attaching comments as they go.

        Comments on the opening line of the container, before any item, go to
        `opening` when given. Returns the comments left over after the last item.
        """
        pending: List[str] = []
        previous_node = None
        previous_item = None
        for child in container.children:
            if child.is_comment:
                text = self.tree.text(child)
                if previous_item is not None and self.tree.same_line(previous_node, child):
                    previous_item.trailing.append(text)
                elif previous_item is None and opening is not None and self._on_opening_line(container, child):
                    opening.append(text)
                else:
                    pending.append(text)
                continue

            item = convert(child)
            item.leading.extend(pending)
            pending = []
            items.append(item)
            previous_node, previous_item = child, item
        return pending

    def _on_opening_line(self, container: Node, child: Node) -> bool:
        return b"\n" not in self.tree.source[container.start:child.start]

    def _item(self, node: Node):
        if node.kind == "rule_set":
            return self._rule(node)
        text = self.tree.text(node)
        if node.kind == "import_statement":
            href = import_href(text)
            if href is not None:
                return CssImport(href=href, text=text)
        return CssRaw(text=text, kind=node.kind)

    def _rule(self, node: Node) -> CssRule:
        selectors = node.child_by_field("selectors") or next(
            (child for child in node.children if child.kind == "selectors"), None
        )
        block = next((child for child in node.children if child.kind == "block"), None)

        rule = CssRule(selector=self._selector_text(selectors) if selectors else "")
        if selectors is not None:
            rule.selector_comments.extend(
                self.tree.text(child) for child in selectors.children if child.is_comment
            )
        # Comments between the selector list and the block
        rule.selector_comments.extend(
            self.tree.text(child) for child in node.children if child.is_comment
        )
        if block is not None:
            rule.dangling = self._collect(block, rule.body, self._body_item, rule.selector_comments)
        return rule

    def _selector_text(self, selectors: Node) -> str:
        parts = [
            " ".join(self.tree.text(child).split())
            for child in selectors.children
            if not child.is_comment
        ]
        return ", ".join(parts)

    def _body_item(self, node: Node):
        if node.kind != "declaration":
            return CssRaw(text=self.tree.text(node), kind=node.kind)

        name_node = node.children[0]
        values = [child for child in node.children[1:] if not child.is_comment]
        value = ""
        if values:
            value = self.tree.source[values[0].start:values[-1].end].decode("utf-8")
        return CssDeclaration(
            name=self.tree.text(name_node),
            value=value,
            trailing=[self.tree.text(child) for child in node.children if child.is_comment],
        )


def parse_css(text: str) -> Stylesheet:
    """
    Parse a stylesheet.

    Raises:
        ParseFailure: If tree-sitter-css reports a syntax error
    """
    return _StylesheetBuilder(parse_css_tree(text)).build()
