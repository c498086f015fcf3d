"""
StylesheetEmitter: regenerate CSS text from the Stylesheet model.

Rules are written one declaration per line. Comments are laid out in two
steps: leading comments are emitted on their own lines as the text is built,
then CommentPlacer appends trailing comments to the line that carries their
anchor (the property name or the selector).
"""

from typing import List, Optional

from scalpel.logging_config import logger
from scalpel.mutation.config import CODEMOD_CONFIG
from scalpel.mutation.validator import CodeValidator
from .model import CssDeclaration, CssImport, CssRaw, CssRule, Stylesheet


class CommentPlacer:
    """
    Append comments to the first line, within a range, containing an anchor.

    A comment whose anchor is missing is dropped; a comment already present on
    the anchor line is not added twice.
    """

    def __init__(self, lines: List[str]):
        self.lines = lines
        self.dropped: List[str] = []

    def place(self, anchor: str, comment: str, start: int = 0, end: Optional[int] = None) -> bool:
        stop = len(self.lines) if end is None else end
        for index in range(start, stop):
            line = self.lines[index]
            if anchor not in line:
                continue
            if comment not in line:
                self.lines[index] = f"{line} {comment}"
            return True

        logger.debug(f"Dropping comment {comment!r}: anchor {anchor!r} not found")
        self.dropped.append(comment)
        return False


class StylesheetEmitter:
    """
    Turn a Stylesheet back into text.
    """

    def __init__(self, config: Optional[dict] = None):
        self.config = {**CODEMOD_CONFIG, **(config or {})}
        self.indent = self.config["css_indent"]

    def emit(self, stylesheet: Stylesheet) -> str:
        """
        Raises:
            EmitError: If output validation is enabled and the text does not parse
        """
        lines: List[str] = []
        placer = CommentPlacer(lines)
        previous = None
        for item in stylesheet.items:
            if previous is not None and self._needs_gap(previous, item):
                lines.append("")
            if isinstance(item, CssRule):
                self._emit_rule(item, lines, placer)
            else:
                self._emit_statement(item, lines)
            previous = item
        if stylesheet.dangling:
            if lines:
                lines.append("")
            lines.extend(stylesheet.dangling)

        text = "\n".join(lines) + "\n" if lines else ""
        if self.config["validate_output"]:
            CodeValidator().ensure_valid(text, "css")
        return text

    def _needs_gap(self, previous, item) -> bool:
        # Consecutive imports stay grouped, everything else is spaced out
        return not (isinstance(previous, CssImport) and isinstance(item, CssImport))

    def _emit_statement(self, item, lines: List[str]):
        lines.extend(item.leading)
        text = item.text
        if item.trailing:
            text = " ".join([text] + item.trailing)
        lines.append(text)

    def _emit_rule(self, rule: CssRule, lines: List[str], placer: CommentPlacer):
        lines.extend(rule.leading)
        selector_line = len(lines)
        lines.append(f"{rule.selector} {{")

        anchored = []
        for entry in rule.body:
            lines.extend(f"{self.indent}{comment}" for comment in entry.leading)
            if isinstance(entry, CssDeclaration):
                anchored.append((len(lines), entry))
                lines.append(f"{self.indent}{entry.name}: {entry.value};")
            else:
                self._emit_nested(entry, lines)
        lines.extend(f"{self.indent}{comment}" for comment in rule.dangling)
        lines.append("}")
        end = len(lines)

        for index, declaration in anchored:
            for comment in declaration.trailing:
                placer.place(f"{declaration.name}:", comment, index, end)
        for comment in rule.selector_comments + rule.trailing:
            placer.place(rule.selector, comment, selector_line, selector_line + 1)

    def _emit_nested(self, entry: CssRaw, lines: List[str]):
        text_lines = entry.text.splitlines() or [""]
        lines.append(f"{self.indent}{text_lines[0]}")
        # Continuation lines keep their original indentation
        lines.extend(text_lines[1:])
        if entry.trailing:
            lines[-1] = " ".join([lines[-1]] + entry.trailing)


def emit_stylesheet(stylesheet: Stylesheet, config: Optional[dict] = None) -> str:
    return StylesheetEmitter(config).emit(stylesheet)
