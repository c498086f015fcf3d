# Custom exceptions for Scalpel

from typing import List, Optional


class ScalpelError(Exception):
    """Base exception for all application-specific errors."""
    pass


class ParseFailure(ScalpelError):
    """Raised when source text cannot be parsed by tree-sitter."""
    def __init__(self, language: str, message: str):
        self.language = language
        self.message = message
        super().__init__(f"Failed to parse {language} content: {message}")


class TargetNotFound(ScalpelError):
    """Raised when the named variable, rule or import does not exist."""
    pass


class TargetShapeMismatch(ScalpelError):
    """Raised when the target exists but is not of the expected shape."""
    pass


class PartialInputError(ScalpelError):
    """Raised when one line of a batch insert cannot be used; the whole batch is aborted."""
    def __init__(self, line: str, message: str):
        self.line = line
        self.message = message
        super().__init__(message)


class InvalidEntryError(ScalpelError):
    """Raised when a requested object entry name would not produce valid source."""
    def __init__(self, entry: str):
        self.entry = entry
        super().__init__(f"Invalid object entry name: {entry!r}")


class EmitError(ScalpelError):
    """Raised if regenerated output no longer parses."""
    def __init__(self, language: str, errors: Optional[List[str]] = None):
        self.language = language
        self.errors = errors or []
        detail = "; ".join(self.errors[:3])
        message = f"Regenerated {language} output is not valid"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class FormatterError(ScalpelError):
    """Raised when the external formatter exits with an error."""
    pass


class FormatterUnavailable(FormatterError):
    """Raised when the configured formatter command is not installed."""
    def __init__(self, command: str):
        self.command = command
        super().__init__(f"Formatter '{command}' not found in PATH")


class ConfigError(ScalpelError):
    """Raised for configuration-related problems."""
    pass
