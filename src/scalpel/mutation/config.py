"""
Configuration for the codemods.

Contains the LiveSocket naming conventions, output validation switch,
formatter commands and indentation defaults.
"""

import os

from scalpel.exceptions import ConfigError


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def get_codemod_config():
    """
    Get codemod configuration, honouring environment overrides.

    Resolved at call time so tests and the CLI can change the environment.
    """
    return {
        "hook_variable": os.getenv("SCALPEL_HOOK_VARIABLE", "liveSocket"),
        "hook_constructor": os.getenv("SCALPEL_HOOK_CONSTRUCTOR", "LiveSocket"),
        "hooks_key": "hooks",
        "spread_marker": "...",
        "validate_output": _env_bool("SCALPEL_VALIDATE_OUTPUT", True),
        "css_indent": "    ",
    }


CODEMOD_CONFIG = get_codemod_config()

FORMATTERS = {
    "javascript": {
        "command": "prettier",
        "args": ["--parser", "babel"],
        "extensions": [".js", ".jsx", ".mjs"],
    },
    "css": {
        "command": "prettier",
        "args": ["--parser", "css"],
        "extensions": [".css"],
    },
}

FORMATTER_TIMEOUT = 30  # seconds

INDENT_DETECTION = {
    "default_indent": "  ",  # 2 spaces, the usual JS house style
    "max_sample_lines": 100,  # Lines to sample for indent detection
}
