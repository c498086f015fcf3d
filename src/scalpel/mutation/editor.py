"""
TreeEmitter: turn a mutated SyntaxTree back into source text.

Untouched nodes are copied byte for byte from the source, so the diff against
the input only covers what a codemod actually changed. Edited containers
(the program body and object literals) are re-spliced: removed children are
cut out together with their line or separator, and new children are rendered
in the layout the container already uses (inline or one entry per line,
existing indentation, trailing comma).

Comments are nodes of their container. They stay where they were unless the
codemod removes them, which it does for the same-line trailing comment of a
removed node.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from scalpel.logging_config import logger
from scalpel.parser.tree import Node, SyntaxTree, walk
from .config import CODEMOD_CONFIG
from .formatter import detect_indentation
from .validator import CodeValidator

Edit = Tuple[int, int, bytes]

_INLINE_SPACE = (b" ", b"\t")


# --- Tree editing helpers ---

def make_leaf(kind: str, text: str) -> Node:
    return Node(kind=kind, text=text, synthetic=True)


def make_shorthand(name: str) -> Node:
    return make_leaf("shorthand_property_identifier", name)


def make_spread(entry: str) -> Node:
    """`entry` includes the leading `...`."""
    return make_leaf("spread_element", entry)


def make_object(entries: Sequence[Node] = ()) -> Node:
    return Node(kind="object", children=list(entries), synthetic=True)


def make_pair(key: str, value: Node) -> Node:
    key_node = make_leaf("property_identifier", key)
    key_node.field_name = "key"
    value.field_name = "value"
    return Node(kind="pair", children=[key_node, value], synthetic=True)


def insert_child(parent: Node, index: int, node: Node):
    parent.children.insert(index, node)
    parent.edited = True


def append_child(parent: Node, node: Node):
    parent.children.append(node)
    parent.edited = True


def remove_child(parent: Node, node: Node):
    parent.children.remove(node)
    parent.edited = True


def trailing_comments(tree: SyntaxTree, parent: Node, node: Node) -> List[Node]:
    """Comments that follow `node` on the same line inside `parent`."""
    index = parent.children.index(node)
    comments = []
    for sibling in parent.children[index + 1:]:
        if not sibling.is_comment or not tree.same_line(node, sibling):
            break
        comments.append(sibling)
    return comments


def remove_with_trailing_comments(tree: SyntaxTree, parent: Node, node: Node):
    for comment in trailing_comments(tree, parent, node):
        remove_child(parent, comment)
    remove_child(parent, node)


def _apply_edits(buffer: bytes, start: int, end: int, edits: List[Edit]) -> bytes:
    """
    Apply (start, end, replacement) edits to buffer[start:end].

    Pure deletions may overlap and are merged. An insertion that falls inside
    a deleted range is moved to the start of that range.
    """
    merged: List[List[int]] = []
    for s, e in sorted((s, e) for s, e, text in edits if not text and e > s):
        if merged and s <= merged[-1][1]:
            merged[-1][1] = max(merged[-1][1], e)
        else:
            merged.append([s, e])

    pieces = []
    for s, e, text in edits:
        if not text:
            continue
        if s == e:
            for ds, de in merged:
                if ds < s < de:
                    s = e = ds
                    break
        pieces.append((s, e, text))
    pieces.extend((s, e, b"") for s, e in merged)
    # Stable sort: insertions precede replacements at the same offset
    pieces.sort(key=lambda piece: (piece[0], piece[1] > piece[0]))

    out = bytearray()
    cursor = start
    for s, e, text in pieces:
        s = max(s, cursor)
        out += buffer[cursor:s]
        out += text
        cursor = max(cursor, e)
    out += buffer[cursor:end]
    return bytes(out)


class TreeEmitter:
    """
    Emit a SyntaxTree as text, splicing only the edited regions.
    """

    def __init__(self, tree: SyntaxTree, config: Optional[dict] = None):
        self.tree = tree
        self.config = {**CODEMOD_CONFIG, **(config or {})}
        self.source = tree.source
        self.newline = b"\r\n" if b"\r\n" in tree.source else b"\n"
        self._indent_unit: Optional[bytes] = None
        self._dirty: Dict[int, bool] = {}

    @property
    def indent_unit(self) -> bytes:
        if self._indent_unit is None:
            self._indent_unit = detect_indentation(self.source.decode("utf-8")).encode("utf-8")
        return self._indent_unit

    def emit(self) -> str:
        """
        Render the whole tree.

        Raises:
            EmitError: If output validation is enabled and the text does not parse
        """
        self._dirty = self._collect_dirty(self.tree.root)
        output = self.render(self.tree.root)
        if output and not output.endswith(b"\n"):
            output += self.newline

        text = output.decode("utf-8")
        if self.config["validate_output"]:
            CodeValidator().ensure_valid(text, self.tree.language)
        logger.debug(f"Emitted {len(output)} bytes ({len(output) - len(self.source):+d})")
        return text

    def render(self, node: Node) -> bytes:
        if node.synthetic:
            return self._render_synthetic(node)

        buffer = node.buffer if node.buffer is not None else self.source
        if not self._dirty.get(id(node)):
            return buffer[node.start:node.end]

        origin_ids = {id(child) for child in node.origin}
        edits = [
            (child.start, child.end, self.render(child))
            for child in node.children
            if id(child) in origin_ids and self._dirty.get(id(child))
        ]
        if node.edited:
            if node.kind == "program":
                edits.extend(self._program_edits(node))
            elif node.kind == "object":
                edits.extend(self._object_edits(node))
            else:
                raise ValueError(f"Cannot re-emit edited '{node.kind}' node")
        return _apply_edits(buffer, node.start, node.end, edits)

    def _collect_dirty(self, root: Node) -> Dict[int, bool]:
        dirty: Dict[int, bool] = {}
        # Reversed pre-order visits children before their parents
        for node in reversed(list(walk(root))):
            dirty[id(node)] = (
                node.edited
                or node.synthetic
                or any(dirty[id(child)] for child in node.children)
            )
        return dirty

    def _render_synthetic(self, node: Node) -> bytes:
        if node.text is not None:
            return node.text.encode("utf-8")
        if node.kind == "pair":
            key = node.child_by_field("key")
            value = node.child_by_field("value")
            return self.render(key) + b": " + self.render(value)
        if node.kind == "object":
            entries = [self.render(child) for child in node.children]
            if not entries:
                return b"{}"
            return b"{ " + b", ".join(entries) + b" }"
        raise ValueError(f"No template for synthetic '{node.kind}' node")

    # --- Source scanning ---

    def _skip_back(self, offset: int) -> int:
        while offset > 0 and self.source[offset - 1:offset] in _INLINE_SPACE:
            offset -= 1
        return offset

    def _skip_forward(self, offset: int) -> int:
        while offset < len(self.source) and self.source[offset:offset + 1] in _INLINE_SPACE:
            offset += 1
        return offset

    def _skip_space(self, offset: int) -> int:
        while offset < len(self.source) and self.source[offset:offset + 1].isspace():
            offset += 1
        return offset

    def _line_span(self, start: int, end: int) -> Tuple[int, int]:
        """
        Widen [start, end) to what must go when that text is deleted.

        A span alone on its line(s) takes the whole line and its newline;
        otherwise only the adjacent blanks go.
        """
        src = self.source
        line_start = src.rfind(b"\n", 0, start) + 1
        line_end = src.find(b"\n", end)
        if line_end == -1:
            line_end = len(src)

        lead_blank = not src[line_start:start].strip()
        tail_blank = not src[end:line_end].strip()
        if lead_blank and tail_blank:
            return line_start, min(line_end + 1, len(src))
        if tail_blank:
            if line_end > end and src[line_end - 1:line_end] == b"\r":
                line_end -= 1
            return self._skip_back(start), line_end
        return start, self._skip_forward(end)

    def _removed_runs(self, node: Node) -> List[List[Node]]:
        """Maximal groups of consecutive original children that were removed."""
        kept = {id(child) for child in node.children}
        runs: List[List[Node]] = []
        current: List[Node] = []
        for child in node.origin:
            if id(child) in kept:
                if current:
                    runs.append(current)
                    current = []
            else:
                current.append(child)
        if current:
            runs.append(current)
        return runs

    def _after_trailing_comments(self, parent: Node, node: Node) -> int:
        """End offset of `node` including same-line comments that follow it."""
        kept = {id(child) for child in parent.children}
        index = parent.origin.index(node)
        end = node.end
        for sibling in parent.origin[index + 1:]:
            if not sibling.is_comment or not self.tree.same_line(node, sibling):
                break
            if id(sibling) in kept:
                end = sibling.end
        return end

    # --- Program ---

    def _program_edits(self, node: Node) -> List[Edit]:
        edits: List[Edit] = []
        for run in self._removed_runs(node):
            start, end = self._line_span(run[0].start, run[-1].end)
            edits.append((start, end, b""))

        origin_ids = {id(child) for child in node.origin}
        groups: List[Tuple[Optional[Node], List[Node]]] = []
        anchor: Optional[Node] = None
        pending: List[Node] = []
        for child in node.children:
            if id(child) in origin_ids:
                if pending:
                    groups.append((anchor, pending))
                    pending = []
                anchor = child
            else:
                pending.append(child)
        if pending:
            groups.append((anchor, pending))

        for anchor, nodes in groups:
            rendered = [self.render(child) for child in nodes]
            if anchor is None:
                text = b"".join(chunk + self.newline for chunk in rendered)
                edits.append((node.start, node.start, text))
            else:
                position = self._after_trailing_comments(node, anchor)
                indent = self.tree.line_indent(anchor.start).encode("utf-8")
                text = b"".join(self.newline + indent + chunk for chunk in rendered)
                edits.append((position, position, text))
        return edits

    # --- Object literals ---

    def _is_multiline(self, node: Node) -> bool:
        bounds = [node.start]
        for child in node.origin:
            bounds.extend((child.start, child.end))
        bounds.append(node.end)
        return any(
            b"\n" in self.source[bounds[i]:bounds[i + 1]]
            for i in range(0, len(bounds), 2)
        )

    def _find_separator(self, node: Node, start: int, end: int) -> int:
        """Offset of the first comma in [start, end) outside comments, or -1."""
        position = start
        for child in node.origin:
            if child.is_comment and start <= child.start and child.end <= end:
                comma = self.source.find(b",", position, child.start)
                if comma != -1:
                    return comma
                position = child.end
        return self.source.find(b",", position, end)

    def _object_edits(self, node: Node) -> List[Edit]:
        # Entries are either appended or removed within one codemod pass
        edits: List[Edit] = []
        kept = {id(child) for child in node.children}
        for run in self._removed_runs(node):
            edits.extend(self._object_removal(node, run, kept))

        origin_ids = {id(child) for child in node.origin}
        appended = [child for child in node.children if id(child) not in origin_ids]
        if appended:
            edits.extend(self._object_append(node, appended))
        return edits

    def _object_removal(self, node: Node, run: List[Node], kept) -> List[Edit]:
        edits: List[Edit] = []
        start, end = run[0].start, run[-1].end

        after = self._skip_space(end)
        if self.source[after:after + 1] == b",":
            end = after + 1
        else:
            # The run held the last entry, so the separator before it goes
            index = node.origin.index(run[0])
            previous = [
                child for child in node.origin[:index]
                if not child.is_comment and id(child) in kept
            ]
            if previous:
                comma = self._find_separator(node, previous[-1].end, start)
                if comma != -1:
                    edits.append((comma, comma + 1, b""))

        span_start, span_end = self._line_span(start, end)
        edits.append((span_start, span_end, b""))
        return edits

    def _object_append(self, node: Node, appended: List[Node]) -> List[Edit]:
        src = self.source
        rendered = [self.render(child) for child in appended]
        origin_ids = {id(child) for child in node.origin}
        kept = [child for child in node.children if id(child) in origin_ids]
        entries = [child for child in kept if not child.is_comment]
        comments = [child for child in kept if child.is_comment]
        multiline = self._is_multiline(node)
        base_indent = self.tree.line_indent(node.start).encode("utf-8")

        if entries:
            last = entries[-1]
            after = self._skip_space(last.end)
            has_comma = src[after:after + 1] == b","
            position = after + 1 if has_comma else last.end
            position = max(position, self._after_trailing_comments(node, last))

            edits: List[Edit] = []
            if not has_comma:
                edits.append((last.end, last.end, b","))
            tail = b"," if has_comma else b""
            if multiline:
                if self.tree.starts_line(last):
                    indent = self.tree.line_indent(last.start).encode("utf-8")
                else:
                    indent = base_indent + self.indent_unit
                text = b",".join(self.newline + indent + chunk for chunk in rendered) + tail
            else:
                text = b" " + b", ".join(rendered) + tail
            edits.append((position, position, text))
            return edits

        if multiline:
            if comments and self.tree.starts_line(comments[-1]):
                indent = self.tree.line_indent(comments[-1].start).encode("utf-8")
            else:
                indent = base_indent + self.indent_unit
            position = comments[-1].end if comments else node.start + 1
            text = b",".join(self.newline + indent + chunk for chunk in rendered)
            return [(position, position, text)]

        if not comments:
            return [(node.start + 1, node.end - 1, b" " + b", ".join(rendered) + b" ")]
        position = comments[-1].end
        return [(position, position, b" " + b", ".join(rendered))]


def emit(tree: SyntaxTree, config: Optional[dict] = None) -> str:
    return TreeEmitter(tree, config).emit()
