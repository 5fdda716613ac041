"""Media Grabber - find the media related to a post and fit it to the page."""

from .config import GrabberConfig, MediaType
from .dimensions import DimensionResolver, expand_dimensions, resolve_and_rewrite
from .exceptions import FixtureError, HostError, MediaGrabberError
from .extractor import extract_attributes
from .grabber import GrabberState, MediaGrabber, display_media, get_media
from .hooks import GrabberHooks
from .host import AttachedMedia, ContentItem, InMemoryHost, MediaHost
from .locator import LocateResult, MediaLocator
from .shortcodes import ShortcodeCatalog

__version__ = "0.1.0"

__all__ = [
    "GrabberConfig",
    "MediaType",
    "DimensionResolver",
    "expand_dimensions",
    "resolve_and_rewrite",
    "MediaGrabberError",
    "HostError",
    "FixtureError",
    "extract_attributes",
    "GrabberState",
    "MediaGrabber",
    "get_media",
    "display_media",
    "GrabberHooks",
    "AttachedMedia",
    "ContentItem",
    "InMemoryHost",
    "MediaHost",
    "LocateResult",
    "MediaLocator",
    "ShortcodeCatalog",
]
