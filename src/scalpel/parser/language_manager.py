from typing import Dict

import tree_sitter_css as tscss
import tree_sitter_javascript as tsjavascript
from tree_sitter import Language, Parser

from scalpel.exceptions import ConfigError
from scalpel.logging_config import logger

# Grammar entry points, keyed by the language names used across scalpel
_GRAMMARS = {
    "javascript": tsjavascript.language,
    "css": tscss.language,
}

# Global cache for loaded languages to avoid repeated loading
_language_cache: Dict[str, Language] = {}


def supported_languages():
    return sorted(_GRAMMARS)


def get_language(language_name: str) -> Language:
    """
    Loads a tree-sitter language from its grammar package.

    Caches the loaded language object for efficiency.
    """
    if language_name in _language_cache:
        return _language_cache[language_name]

    grammar = _GRAMMARS.get(language_name)
    if grammar is None:
        supported = ", ".join(supported_languages())
        raise ConfigError(
            f"Language '{language_name}' is not supported. Supported languages: {supported}"
        )

    lang = Language(grammar())
    _language_cache[language_name] = lang
    logger.debug(f"Successfully loaded language '{language_name}'")
    return lang


def get_parser(language_name: str) -> Parser:
    """
    Build a parser for the language.

    Parsers carry per-parse state, so each call gets a fresh one; only the
    compiled Language is shared.
    """
    parser = Parser()
    parser.language = get_language(language_name)
    return parser
