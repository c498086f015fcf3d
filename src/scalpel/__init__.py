"""
Scalpel - structural codemods for JavaScript modules and CSS stylesheets.

Parses source with tree-sitter, edits the tree and re-emits text that only
differs from the input where the codemod changed something.
"""

__version__ = "0.4.0"

# Core exports
from scalpel.mutation import CodemodFacade
from scalpel.schemas import JsStatistics, Operation, OperationResult

__all__ = [
    "__version__",
    "CodemodFacade",
    "JsStatistics",
    "Operation",
    "OperationResult",
]
