"""Extension points for the media grabber.

Each hook is a plain callable that receives a value and returns it, possibly
changed. The defaults return their input untouched.
"""

from dataclasses import dataclass
from typing import Any, Callable


def _located_media(markup: str, grabber: Any) -> str:
    return markup


def _shortcode_catalog(media_type: str, tags: list[str]) -> list[str]:
    return tags


def _dimensions(dimensions: tuple[int, int], attributes: dict, grabber: Any) -> tuple[int, int]:
    return dimensions


@dataclass(frozen=True)
class GrabberHooks:
    """Callbacks invoked at fixed points of a grab."""

    # Final markup returned by render()
    filter_located_media: Callable[[str, Any], str] = _located_media
    # Known shortcode tags for a media type
    filter_shortcode_catalog: Callable[[str, list[str]], list[str]] = _shortcode_catalog
    # Computed (width, height) before markup is rewritten
    filter_dimensions: Callable[[tuple[int, int], dict, Any], tuple[int, int]] = _dimensions


DEFAULT_HOOKS = GrabberHooks()
