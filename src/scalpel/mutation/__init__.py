"""
Codemods over JavaScript syntax trees, plus the facade that also fronts the
stylesheet codemods.
"""

from .config import (
    CODEMOD_CONFIG,
    FORMATTERS,
    INDENT_DETECTION,
    get_codemod_config,
)
from .validator import CodeValidator
from .formatter import CodeFormatter, detect_indentation
from .editor import TreeEmitter, emit
from .locator import FindCondition, FindStatus
from .import_manager import ImportManager
from .object_extender import ObjectExtender
from .hook_extender import HookExtender
from .statistics import collect_statistics
from .facade import CodemodFacade

__all__ = [
    # Main facade
    "CodemodFacade",

    # Components
    "TreeEmitter",
    "emit",
    "FindCondition",
    "FindStatus",
    "ImportManager",
    "ObjectExtender",
    "HookExtender",
    "collect_statistics",
    "CodeFormatter",
    "CodeValidator",
    "detect_indentation",

    # Configuration
    "CODEMOD_CONFIG",
    "FORMATTERS",
    "INDENT_DETECTION",
    "get_codemod_config",
]
