"""Host interface: the services a grabber reads content and runs shortcodes through."""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Callable, Iterator, Optional


_embed_links_suppressed: ContextVar[bool] = ContextVar("embed_links_suppressed", default=False)


@dataclass
class AttachedMedia:
    """A media file attached to a content item."""

    id: int
    url: str
    mime_type: Optional[str] = None


class MediaHost(ABC):
    """Abstract collaborator for the grabber.

    Lookups for unknown content items return empty values rather than raising.
    """

    @property
    def embed_links_suppressed(self) -> bool:
        """Whether embeds that fail must produce nothing instead of a link."""
        return _embed_links_suppressed.get()

    @contextmanager
    def suppress_embed_links(self) -> Iterator[None]:
        """Make failed embeds return nothing for the duration of the block."""
        token = _embed_links_suppressed.set(True)
        try:
            yield
        finally:
            _embed_links_suppressed.reset(token)

    @property
    @abstractmethod
    def autoembed_enabled(self) -> bool:
        """Site-wide switch for turning bare URLs into embeds."""
        pass

    @property
    @abstractmethod
    def default_width(self) -> int:
        """Content width used when a grabber has no width of its own."""
        pass

    @abstractmethod
    def current_post_id(self) -> Optional[int]:
        """ID of the content item currently being rendered, if any."""
        pass

    @abstractmethod
    def get_content_body(self, post_id: int) -> str:
        """
        Get the rendered body of a content item.

        Args:
            post_id: Content item ID

        Returns:
            Rendered markup, or an empty string for an unknown item
        """
        pass

    @abstractmethod
    def get_post_type(self, post_id: int) -> str:
        pass

    @abstractmethod
    def get_mime_type(self, post_id: int) -> str:
        pass

    @abstractmethod
    def get_attachment_url(self, post_id: int) -> str:
        pass

    @abstractmethod
    def expand_shortcode(self, tag: str, text: str) -> str:
        """
        Run a shortcode invocation.

        Args:
            tag: Shortcode tag
            text: Full shortcode text, e.g. ``[video src="a.mp4"]``

        Returns:
            Resulting markup
        """
        pass

    @abstractmethod
    def run_embed_shortcode(self, text: str) -> str:
        """Resolve an ``[embed]URL[/embed]`` shortcode."""
        pass

    @abstractmethod
    def resolve_autoembed(self, url: str) -> str:
        """Convert a bare URL into provider markup, or an empty string."""
        pass

    @abstractmethod
    def extract_embedded_html(self, content: str) -> list[str]:
        """Find raw embed elements (iframe, object, embed, ...) in ``content``."""
        pass

    @abstractmethod
    def get_attached_media(self, media_type: str, post_id: int) -> list[AttachedMedia]:
        pass

    @abstractmethod
    def sanitize_html(self, content: str) -> str:
        pass

    @abstractmethod
    def add_content_filter(self, callback: Callable[[str], str], priority: int = 10) -> None:
        """Register a callback applied to post bodies as they are rendered."""
        pass
