"""Media location module - find the media for a content item."""

from .base import LocateResult, LocateStrategy
from .cascade import MediaLocator, get_default_strategies
from .strategies import (
    AttachedStrategy,
    AutoembedStrategy,
    EmbeddedStrategy,
    SelfMediaStrategy,
    ShortcodeStrategy,
)

__all__ = [
    "LocateResult",
    "LocateStrategy",
    "MediaLocator",
    "get_default_strategies",
    "SelfMediaStrategy",
    "ShortcodeStrategy",
    "AutoembedStrategy",
    "EmbeddedStrategy",
    "AttachedStrategy",
]
