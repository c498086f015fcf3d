"""
This facade exposes the public API for the parser module.
"""
from .javascript_parser import parse_javascript
from .css_parser import parse_css

__all__ = ["parse_javascript", "parse_css"]
