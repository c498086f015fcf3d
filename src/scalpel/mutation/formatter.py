"""
CodeFormatter: indentation detection and external formatting.

Full-file formatting is delegated to prettier over stdin; the codemods
themselves only need to know the indent unit a source already uses.
"""

import shutil
import subprocess
from typing import Optional

from scalpel.exceptions import ConfigError, FormatterError, FormatterUnavailable
from scalpel.logging_config import logger
from .config import FORMATTER_TIMEOUT, FORMATTERS, INDENT_DETECTION


def _get_indent(line: str) -> str:
    """Extract indentation from a line."""
    return line[:len(line) - len(line.lstrip())]


def detect_indentation(text: str) -> str:
    """
    Detect the indent unit used by a source text.

    Args:
        text: Source text

    Returns:
        Indent unit string (e.g., "  ", "    " or "\\t")
    """
    sample_lines = text.splitlines()[:INDENT_DETECTION["max_sample_lines"]]

    tab_count = 0
    space_count = 0
    smallest_width = None

    for line in sample_lines:
        if not line.strip():
            continue

        indent = _get_indent(line)
        if "\t" in indent:
            tab_count += 1
        elif len(indent) > 0:
            space_count += 1
            # The shallowest indented line is one unit deep
            width = len(indent)
            if smallest_width is None or width < smallest_width:
                smallest_width = width

    if tab_count > space_count:
        return "\t"
    if smallest_width:
        return " " * min(smallest_width, 8)
    return INDENT_DETECTION["default_indent"]


class CodeFormatter:
    """
    Shell out to prettier for whole-text formatting.
    """

    def __init__(self, config: Optional[dict] = None):
        self.config = config or {}

    def _command(self, language: str):
        formatter_config = FORMATTERS.get(language)
        if not formatter_config:
            raise ConfigError(f"No formatter configured for {language}")

        command = formatter_config["command"]
        if not shutil.which(command):
            raise FormatterUnavailable(command)
        return [command] + formatter_config["args"]

    def format(self, code: str, language: str) -> str:
        """
        Format source text with the configured formatter.

        Args:
            code: Source text
            language: "javascript" or "css"

        Returns:
            Formatted text

        Raises:
            FormatterUnavailable: If the formatter is not installed
            FormatterError: If the formatter rejects the input or times out
        """
        full_command = self._command(language)

        try:
            result = subprocess.run(
                full_command,
                input=code,
                capture_output=True,
                text=True,
                timeout=FORMATTER_TIMEOUT
            )
        except subprocess.TimeoutExpired as e:
            raise FormatterError(f"Formatter timeout after {FORMATTER_TIMEOUT}s") from e

        if result.returncode != 0:
            error_msg = (result.stderr or result.stdout).strip()
            logger.warning(f"Formatter failed: {error_msg}")
            raise FormatterError(error_msg or f"Formatter exited with status {result.returncode}")

        logger.debug(f"Formatted {len(code)} chars of {language} with {full_command[0]}")
        return result.stdout

    def is_formatted(self, code: str, language: str) -> bool:
        """True if formatting would leave the text unchanged."""
        return self.format(code, language) == code
