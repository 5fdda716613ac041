"""Attribute extraction for media markup fragments."""

import re
from typing import Optional

from bs4 import BeautifulSoup


# Only attributes of these tags are considered
MEDIA_TAGS = ("object", "embed", "iframe", "video")

# name="value", name='value' or name=value
ATTRIBUTE_PATTERN = re.compile(
    r'''([_a-zA-Z][-_a-zA-Z0-9:.]*)\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s"'\]>]+))'''
)


def parse_attribute_string(text: str) -> dict[str, str]:
    """Parse ``name=value`` pairs out of free text.

    Used for text left over once markup is stripped, such as the attributes of
    a ``[video width="640" height="360"]`` shortcode. The first occurrence of a
    name wins.
    """
    attributes: dict[str, str] = {}
    for match in ATTRIBUTE_PATTERN.finditer(text):
        name = match.group(1).lower()
        value = next((g for g in match.groups()[1:] if g is not None), "")
        attributes.setdefault(name, value)
    return attributes


def extract_attributes(html: Optional[str]) -> dict[str, str]:
    """
    Collect the attributes of the media tags in an HTML fragment.

    Tags other than ``object``, ``embed``, ``iframe`` and ``video`` are
    stripped first, keeping their text, so surrounding markup cannot
    contribute attributes while shortcode text still can.

    Args:
        html: Markup or shortcode text

    Returns:
        Mapping of attribute name to value; empty if nothing was found
    """
    if not html:
        return {}

    soup = BeautifulSoup(html, "html.parser", multi_valued_attributes=None)

    attributes: dict[str, str] = {}
    for tag in soup.find_all(MEDIA_TAGS):
        for name, value in tag.attrs.items():
            attributes.setdefault(name.lower(), value if value is not None else "")

    # Whatever text remains (shortcodes, mostly) can carry attributes too
    for name, value in parse_attribute_string(soup.get_text()).items():
        attributes.setdefault(name, value)

    return attributes
