"""Shortcode token scanning."""

import re
from dataclasses import dataclass
from typing import Iterator, Optional


# [tag attrs], [tag attrs /], [tag attrs]content[/tag] and the escaped [[tag]] form.
# Groups: 1 opening escape, 2 tag, 3 attributes, 4 self-closing slash,
# 5 enclosed content, 6 closing escape.
SHORTCODE_PATTERN = re.compile(
    r"\[(\[?)"
    r"([\w.\-]+)"
    r"(?![\w-])"
    r"([^\]/]*(?:/(?!\])[^\]/]*)*?)"
    r"(?:(/)\]|\](?:([^\[]*(?:\[(?!/\2\])[^\[]*)*)\[/\2\])?)"
    r"(\]?)",
    re.DOTALL,
)

# name="value", name='value', name=value, "value" or value
SHORTCODE_ATTRIBUTE_PATTERN = re.compile(
    r"""([\w-]+)\s*=\s*"([^"]*)"(?:\s|$)"""
    r"""|([\w-]+)\s*=\s*'([^']*)'(?:\s|$)"""
    r"""|([\w-]+)\s*=\s*([^\s'"]+)(?:\s|$)"""
    r"""|"([^"]*)"(?:\s|$)"""
    r"""|'([^']*)'(?:\s|$)"""
    r"""|(\S+)(?:\s|$)"""
)


@dataclass
class ShortcodeMatch:
    """A shortcode token found in a document."""

    tag: str
    text: str
    attrs: str
    content: Optional[str]
    start: int
    end: int
    escaped: bool = False

    def attributes(self) -> dict:
        """Parsed attributes of the token."""
        return parse_shortcode_attributes(self.attrs)


def find_shortcodes(content: str) -> Iterator[ShortcodeMatch]:
    """Yield every shortcode token in ``content`` in document order."""
    if not content or "[" not in content:
        return

    for match in SHORTCODE_PATTERN.finditer(content):
        yield ShortcodeMatch(
            tag=match.group(2),
            text=match.group(0),
            attrs=match.group(3) or "",
            content=match.group(5),
            start=match.start(),
            end=match.end(),
            escaped=match.group(1) == "[" and match.group(6) == "]",
        )


def parse_shortcode_attributes(text: str) -> dict:
    """
    Parse a shortcode attribute string.

    Named attributes are keyed by their lowercased name; positional values are
    keyed by their index (0, 1, ...).
    """
    attributes: dict = {}
    positional = 0
    text = re.sub("[\u00a0\u200b]", " ", text or "")

    for match in SHORTCODE_ATTRIBUTE_PATTERN.finditer(text):
        groups = match.groups()
        if groups[0]:
            attributes[groups[0].lower()] = groups[1]
        elif groups[2]:
            attributes[groups[2].lower()] = groups[3]
        elif groups[4]:
            attributes[groups[4].lower()] = groups[5]
        else:
            value = next((g for g in groups[6:] if g is not None), None)
            if value is None or value == "/":
                continue
            attributes[positional] = value
            positional += 1

    return attributes
