"""Attribute extraction module - read media tag attributes from markup."""

from .attributes import (
    MEDIA_TAGS,
    extract_attributes,
    parse_attribute_string,
)

__all__ = [
    "MEDIA_TAGS",
    "extract_attributes",
    "parse_attribute_string",
]
