"""
Stylesheet model used by the CSS codemods.

Rules and their declarations are kept structurally so they can be edited and
regenerated; everything else (charset, media queries, keyframes, ...) is kept
as raw text. Comments are stored on the item they annotate:

- `leading`: whole-line comments right before the item
- `trailing`: comments after the item on the same line
- `selector_comments` (rules only): comments inside or right after the selector
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass
class CssDeclaration:
    name: str
    value: str
    leading: List[str] = field(default_factory=list)
    trailing: List[str] = field(default_factory=list)


@dataclass
class CssRaw:
    """An item emitted verbatim (at-rules, nested rules)."""
    text: str
    kind: str = "raw"
    leading: List[str] = field(default_factory=list)
    trailing: List[str] = field(default_factory=list)


@dataclass
class CssRule:
    selector: str
    body: List[Union[CssDeclaration, CssRaw]] = field(default_factory=list)
    leading: List[str] = field(default_factory=list)
    trailing: List[str] = field(default_factory=list)
    selector_comments: List[str] = field(default_factory=list)
    # comments after the last declaration, before the closing brace
    dangling: List[str] = field(default_factory=list)

    @property
    def declarations(self) -> List[CssDeclaration]:
        return [item for item in self.body if isinstance(item, CssDeclaration)]


@dataclass
class CssImport:
    href: str
    text: str
    leading: List[str] = field(default_factory=list)
    trailing: List[str] = field(default_factory=list)


StylesheetItem = Union[CssImport, CssRule, CssRaw]


@dataclass
class Stylesheet:
    items: List[StylesheetItem] = field(default_factory=list)
    # comments after the last item
    dangling: List[str] = field(default_factory=list)

    def imports(self) -> List[CssImport]:
        return [item for item in self.items if isinstance(item, CssImport)]

    def rules(self) -> List[CssRule]:
        return [item for item in self.items if isinstance(item, CssRule)]

    def find_rule(self, selector: str) -> Optional[CssRule]:
        wanted = normalize_selector(selector)
        for rule in self.rules():
            if normalize_selector(rule.selector) == wanted:
                return rule
        return None


def normalize_selector(selector: str) -> str:
    """Collapse whitespace so `a,b` and `a ,\\n b` compare equal."""
    collapsed = " ".join(selector.split())
    return ", ".join(part.strip() for part in _split_top_level(collapsed))


def _split_top_level(selector: str) -> List[str]:
    # Commas inside :is(...) or [attr="a,b"] do not separate selectors
    parts, depth, quote, current = [], 0, None, []
    for char in selector:
        if quote:
            if char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char in "([":
            depth += 1
        elif char in ")]":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)
    parts.append("".join(current))
    return parts
