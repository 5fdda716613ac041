"""Host module - services the grabber reads content through."""

from .base import AttachedMedia, MediaHost
from .memory import ContentItem, InMemoryHost

__all__ = [
    "AttachedMedia",
    "MediaHost",
    "ContentItem",
    "InMemoryHost",
]
