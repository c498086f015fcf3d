"""
Stylesheet model, regeneration and codemods for CSS.

Only the model is exported here; the emitter and editor depend on the
parser and mutation packages and are imported from their modules.
"""
from .model import CssDeclaration, CssImport, CssRaw, CssRule, Stylesheet

__all__ = ["CssDeclaration", "CssImport", "CssRaw", "CssRule", "Stylesheet"]
