from scalpel.exceptions import ParseFailure
from scalpel.logging_config import logger
from scalpel.parser.language_manager import get_parser
from scalpel.parser.tree import Node, SyntaxTree, build_tree, find_syntax_errors


def parse_javascript(text: str) -> SyntaxTree:
    """
    Parse a JavaScript module into a mutable SyntaxTree.

    Raises:
        ParseFailure: If the text contains any syntax error.
    """
    source = text.encode("utf-8")
    ts_tree = get_parser("javascript").parse(source)
    if ts_tree.root_node.has_error:
        errors = find_syntax_errors(ts_tree.root_node)
        logger.debug(f"JavaScript parse rejected: {errors}")
        raise ParseFailure("javascript", errors[0] if errors else "unknown syntax error")
    return SyntaxTree("javascript", source, build_tree(ts_tree.root_node, len(source)))


def parse_fragment(text: str) -> Node:
    """
    Parse a standalone snippet (one import line) into a detached program node.

    The returned nodes carry their own buffer, so they can be grafted into
    another tree and still emit their original text.
    """
    source = text.encode("utf-8")
    ts_tree = get_parser("javascript").parse(source)
    if ts_tree.root_node.has_error:
        errors = find_syntax_errors(ts_tree.root_node)
        raise ParseFailure("javascript", errors[0] if errors else "unknown syntax error")
    return build_tree(ts_tree.root_node, len(source), buffer=source)
