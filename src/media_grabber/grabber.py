"""Grabs the media related to a content item."""

import sys
from enum import Enum
from typing import Optional, TextIO

from loguru import logger

from .config import GrabberConfig
from .dimensions import DimensionResolver
from .hooks import DEFAULT_HOOKS, GrabberHooks
from .host import MediaHost
from .locator import LocateResult, MediaLocator
from .shortcodes import ShortcodeCatalog


# Runs ahead of shortcode expansion in the host's content filters
SPLIT_PRIORITY = 5


class GrabberState(str, Enum):
    """Lifecycle of a grabber."""

    UNINITIALIZED = "uninitialized"
    CONTENT_LOADED = "content_loaded"
    LOCATED = "located"
    RENDERED = "rendered"


class MediaGrabber:
    """
    Finds one piece of media for a content item and prepares it for output.

    The media is searched for in the item itself (attachments), then in the
    post content (shortcodes, autoembed URLs, embedded HTML) and finally in
    the files attached to the post. Its dimensions are fitted to the
    configured width. With ``split`` enabled, the matched text is removed from
    the post content when the host renders it, so the media can be shown
    somewhere else on the page.

    Args:
        host: Services used to read content and run shortcodes
        config: Grabber options; built from ``options`` if omitted
        hooks: Extension callbacks
        catalog: Known shortcodes per media type
        **options: GrabberConfig fields, overriding those of ``config``
    """

    def __init__(
        self,
        host: MediaHost,
        config: Optional[GrabberConfig] = None,
        hooks: Optional[GrabberHooks] = None,
        catalog: Optional[ShortcodeCatalog] = None,
        **options,
    ):
        self.state = GrabberState.UNINITIALIZED
        self.host = host
        self.hooks = hooks or DEFAULT_HOOKS

        if config is None:
            config = GrabberConfig(**options)
        elif options:
            # Keyword options override fields of the given config
            config = GrabberConfig(**{**config.model_dump(), **options})
        # Fall back to the item being rendered and the site's content width
        self.config = config.resolve(host.current_post_id() or 0, host.default_width)

        self.resolver = DimensionResolver(self.config.width, self.hooks.filter_dimensions, self)
        self.locator = MediaLocator(host, catalog, self.hooks, self.resolver)

        self._result: Optional[LocateResult] = None
        self._media: str = ""

        self.content = host.get_content_body(self.config.post_id) or ""
        self.state = GrabberState.CONTENT_LOADED

    @property
    def post_id(self) -> int:
        return self.config.post_id

    @property
    def original_media(self) -> str:
        """Text matched in the post content, if the media came from there."""
        return self.locate().original

    def locate(self) -> LocateResult:
        """Run the location cascade once and cache the result."""
        if self._result is not None:
            return self._result

        result = self.locator.locate(self.content, self.config.post_id, self.config)
        self._result = result
        self.state = GrabberState.LOCATED

        if result:
            if self.config.split and result.original:
                self.host.add_content_filter(self.split, priority=SPLIT_PRIORITY)

            self._media = (
                self.config.before
                + self.resolver.resolve_and_rewrite(result.markup)
                + self.config.after
            )

        return result

    @property
    def found(self) -> bool:
        return bool(self.locate())

    def render(self) -> str:
        """Get the media HTML, or an empty string if none was found."""
        self.locate()
        media = self.hooks.filter_located_media(self._media, self)
        self.state = GrabberState.RENDERED
        return media or ""

    def display(self, stream: Optional[TextIO] = None) -> None:
        """Write the media HTML to ``stream`` (stdout by default)."""
        (stream or sys.stdout).write(self.render())

    def split(self, content: str, post_id: Optional[int] = None) -> str:
        """
        Remove the found media from a post's content.

        Args:
            content: Post content being rendered
            post_id: Item the content belongs to; defaults to the host's
                current item

        Returns:
            The content without the media and re-sanitized, or unchanged if
            it belongs to another item or nothing is to be removed
        """
        original = self.locate().original
        if not self.config.split or not original:
            return content

        owner = post_id if post_id is not None else self.host.current_post_id()
        if owner != self.config.post_id:
            return content

        logger.debug("Removing {} media from post {}", self.config.type.value, owner)
        return self.host.sanitize_html(content.replace(original, ""))


def get_media(host: MediaHost, **options) -> str:
    """Render the media for a content item in one call."""
    return MediaGrabber(host, **options).render()


def display_media(host: MediaHost, stream: Optional[TextIO] = None, **options) -> None:
    """Display the media for a content item in one call."""
    MediaGrabber(host, **options).display(stream)
