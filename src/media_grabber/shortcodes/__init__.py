"""Shortcode module - known media shortcodes and token scanning."""

from .catalog import DEFAULT_SHORTCODES, ShortcodeCatalog
from .parser import (
    ShortcodeMatch,
    find_shortcodes,
    parse_shortcode_attributes,
)

__all__ = [
    "DEFAULT_SHORTCODES",
    "ShortcodeCatalog",
    "ShortcodeMatch",
    "find_shortcodes",
    "parse_shortcode_attributes",
]
