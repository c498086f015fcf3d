"""
CodeValidator: syntax verification of regenerated output.
"""

from typing import List, Tuple

from scalpel.exceptions import EmitError
from scalpel.logging_config import logger
from scalpel.parser.language_manager import get_parser
from scalpel.parser.tree import find_syntax_errors


class CodeValidator:
    """
    Re-parse emitted text and reject it if tree-sitter finds ERROR nodes.
    """

    def validate_syntax(self, code: str, language: str) -> Tuple[bool, List[str]]:
        """
        Validate syntax by parsing and checking for ERROR nodes.

        Args:
            code: Code to validate
            language: Language name

        Returns:
            (is_valid, error_messages)
        """
        tree = get_parser(language).parse(bytes(code, "utf8"))
        if not tree.root_node.has_error:
            return True, []
        return False, find_syntax_errors(tree.root_node)

    def ensure_valid(self, code: str, language: str) -> str:
        """
        Return `code` unchanged if it parses cleanly.

        Raises:
            EmitError: If the text has syntax errors
        """
        is_valid, errors = self.validate_syntax(code, language)
        if not is_valid:
            logger.warning(f"Rejecting regenerated {language} output: {errors}")
            raise EmitError(language, errors)
        return code
