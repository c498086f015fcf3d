"""
StylesheetEditor: import and declaration codemods over the Stylesheet model.
"""

from typing import Iterable, List, Optional, Set

from scalpel.exceptions import ParseFailure, PartialInputError, TargetNotFound
from scalpel.logging_config import logger
from scalpel.parser.css_parser import parse_css
from .model import CssDeclaration, CssImport, CssRule, Stylesheet


class StylesheetEditor:
    """
    Query and edit `@import` statements and rule declarations.
    """

    def __init__(self, config: Optional[dict] = None):
        self.config = config or {}

    # --- Imports ---

    def is_imported(self, stylesheet: Stylesheet, href: str) -> bool:
        return any(item.href == href for item in stylesheet.imports())

    def insert_imports(self, stylesheet: Stylesheet, imports_text: str) -> Stylesheet:
        """
        Insert `@import` statements, one per non-blank line.

        Placement follows the last existing import, else the `@charset`
        statement, else the top of the sheet. Hrefs already imported are skipped.

        Raises:
            PartialInputError: If a line is not a valid import; nothing is inserted
        """
        candidates: List[CssImport] = []
        for raw_line in imports_text.splitlines():
            line = raw_line.strip()
            if line:
                candidates.extend(self._parse_candidate(line))

        present: Set[str] = {item.href for item in stylesheet.imports()}
        for candidate in candidates:
            if candidate.href in present:
                logger.debug(f"Stylesheet already imports '{candidate.href}', skipping")
                continue
            stylesheet.items.insert(self._insertion_index(stylesheet), candidate)
            present.add(candidate.href)
        return stylesheet

    def remove_imports(self, stylesheet: Stylesheet, hrefs: Iterable[str]) -> Stylesheet:
        """Remove imports of the given hrefs. Their leading comments move to the next item."""
        targets = set(hrefs)
        kept = []
        orphaned: List[str] = []
        for item in stylesheet.items:
            if isinstance(item, CssImport) and item.href in targets:
                orphaned.extend(item.leading)
                continue
            if orphaned:
                item.leading[:0] = orphaned
                orphaned = []
            kept.append(item)
        if orphaned:
            stylesheet.dangling[:0] = orphaned
        stylesheet.items = kept
        return stylesheet

    def _parse_candidate(self, line: str) -> List[CssImport]:
        text = line if line.endswith(";") else line + ";"
        try:
            parsed = parse_css(text)
        except ParseFailure as e:
            raise PartialInputError(line, f"Invalid import line {line!r}: {e.message}") from e

        if not parsed.items or any(not isinstance(item, CssImport) for item in parsed.items):
            raise PartialInputError(line, f"Line {line!r} is not an @import statement")
        for item in parsed.items:
            # A same-line comment in the candidate is not carried over
            item.leading, item.trailing = [], []
        return parsed.items

    def _insertion_index(self, stylesheet: Stylesheet) -> int:
        last_import = None
        charset = None
        for index, item in enumerate(stylesheet.items):
            if isinstance(item, CssImport):
                last_import = index
            elif getattr(item, "kind", None) == "charset_statement":
                charset = index
        if last_import is not None:
            return last_import + 1
        if charset is not None:
            return charset + 1
        return 0

    # --- Rules ---

    def rule_exists(self, stylesheet: Stylesheet, selector: str) -> bool:
        return stylesheet.find_rule(selector) is not None

    def ensure_declaration(self, stylesheet: Stylesheet, selector: str, name: str, value: str) -> Stylesheet:
        """
        Set `name: value` in the rule for `selector`.

        An existing declaration of the property has its value replaced; a
        missing rule is appended to the end of the sheet.
        """
        name = name.strip()
        value = value.strip().rstrip(";").strip()
        rule = stylesheet.find_rule(selector)
        if rule is None:
            logger.debug(f"Creating rule '{selector}'")
            rule = CssRule(selector=selector.strip())
            stylesheet.items.append(rule)

        for declaration in rule.declarations:
            if declaration.name == name:
                declaration.value = value
                return stylesheet

        rule.body.append(CssDeclaration(name=name, value=value))
        return stylesheet

    def remove_declaration(self, stylesheet: Stylesheet, selector: str, name: str) -> Stylesheet:
        """
        Remove every declaration of `name` from the rule for `selector`.

        Raises:
            TargetNotFound: If no rule matches the selector
        """
        rule = stylesheet.find_rule(selector)
        if rule is None:
            raise TargetNotFound(f"Rule '{selector}' not found.")

        kept = []
        orphaned: List[str] = []
        for entry in rule.body:
            if isinstance(entry, CssDeclaration) and entry.name == name.strip():
                orphaned.extend(entry.leading)
                continue
            if orphaned:
                entry.leading[:0] = orphaned
                orphaned = []
            kept.append(entry)
        if orphaned:
            rule.dangling[:0] = orphaned
        rule.body = kept
        return stylesheet
