from collections import Counter

from scalpel.parser.tree import SyntaxTree, walk
from scalpel.schemas import JsStatistics

# Node kinds counted under each statistic. Arrow functions are expressions,
# not functions in this sense; class methods are.
_COUNTED_KINDS = {
    "function_declaration": "functions",
    "generator_function_declaration": "functions",
    "function_expression": "functions",
    "function": "functions",
    "generator_function": "functions",
    "method_definition": "functions",
    "class_declaration": "classes",
    "class": "classes",
    "debugger_statement": "debuggers",
    "import_statement": "imports",
    "try_statement": "trys",
    "throw_statement": "throws",
}


def collect_statistics(tree: SyntaxTree) -> JsStatistics:
    """
    Count structural constructs in a single read-only pass.

    Nested occurrences all count: a method inside a class adds to both
    `classes` and `functions`.
    """
    counts = Counter(
        _COUNTED_KINDS[node.kind] for node in walk(tree.root) if node.kind in _COUNTED_KINDS
    )
    return JsStatistics(**counts)
