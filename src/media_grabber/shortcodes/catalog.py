"""Known media shortcode tags, grouped by media type."""

from typing import Callable, Iterable, Optional, Union

from ..config import MediaType


# Registry of known shortcodes per media type
DEFAULT_SHORTCODES: dict[MediaType, list[str]] = {
    MediaType.VIDEO: [
        "playlist",
        "embed",
        "video",
        "blip.tv",
        "dailymotion",
        "flickr",
        "ted",
        "vimeo",
        "vine",
        "youtube",
        "wpvideo",
    ],
    MediaType.AUDIO: [
        "playlist",
        "embed",
        "audio",
        "bandcamp",
        "soundcloud",
    ],
    MediaType.GALLERY: [
        "gallery",
    ],
}


class ShortcodeCatalog:
    """Holds the shortcode tags known to produce each media type."""

    def __init__(self, shortcodes: Optional[dict[MediaType, Iterable[str]]] = None):
        source = shortcodes if shortcodes is not None else DEFAULT_SHORTCODES
        self._shortcodes: dict[MediaType, list[str]] = {
            MediaType(media_type): list(tags) for media_type, tags in source.items()
        }

    def tags_for(
        self,
        media_type: Union[MediaType, str],
        filter_tags: Optional[Callable[[str, list[str]], list[str]]] = None,
    ) -> list[str]:
        """
        Get the known tags for a media type.

        Args:
            media_type: Media type to look up
            filter_tags: Hook receiving the type name and tag list

        Returns:
            List of tags, empty for a type with no catalog entry
        """
        media_type = MediaType(media_type)
        tags = list(self._shortcodes.get(media_type, []))
        if filter_tags is not None:
            tags = list(filter_tags(media_type.value, tags))
        return tags

    def register(self, media_type: Union[MediaType, str], *tags: str) -> None:
        """Add tags to a media type's catalog."""
        known = self._shortcodes.setdefault(MediaType(media_type), [])
        for tag in tags:
            if tag not in known:
                known.append(tag)

    def allowed_tags(
        self,
        media_type: Union[MediaType, str],
        custom: Iterable[str] = (),
        filter_tags: Optional[Callable[[str, list[str]], list[str]]] = None,
    ) -> set[str]:
        """Custom tags plus the catalog's tags for ``media_type``."""
        return set(custom) | set(self.tags_for(media_type, filter_tags))

    def __contains__(self, media_type) -> bool:
        try:
            return MediaType(media_type) in self._shortcodes
        except ValueError:
            return False
