"""The individual media search strategies, in cascade order."""

import re

from loguru import logger

from ..config import PLAYER_TYPES, GrabberConfig, MediaType
from ..shortcodes import find_shortcodes
from .base import LocateResult, LocateStrategy

# A URL alone on its line
AUTOEMBED_URL_PATTERN = re.compile(r'^\s*(https?://[^\s"]+)\s*$', re.IGNORECASE | re.MULTILINE)


class SelfMediaStrategy(LocateStrategy):
    """The content item is itself an audio or video attachment."""

    name = "self"

    def locate(self, locator, content: str, post_id: int, config: GrabberConfig) -> LocateResult:
        if locator.host.get_post_type(post_id) != "attachment":
            return LocateResult()

        mime = locator.host.get_mime_type(post_id) or ""
        primary = mime.split("/", 1)[0]

        if primary not in [t.value for t in PLAYER_TYPES]:
            return LocateResult()

        url = locator.host.get_attachment_url(post_id)
        return self.found(locator.player_shortcode(primary, url))


class ShortcodeStrategy(LocateStrategy):
    """First known shortcode for the media type, in document order."""

    name = "shortcode"

    def is_enabled(self, locator, config: GrabberConfig) -> bool:
        return config.search_shortcodes

    def locate(self, locator, content: str, post_id: int, config: GrabberConfig) -> LocateResult:
        allowed = locator.catalog.allowed_tags(
            config.type,
            custom=config.custom_shortcodes,
            filter_tags=locator.hooks.filter_shortcode_catalog,
        )

        for match in find_shortcodes(content):
            if match.escaped or match.tag not in allowed:
                continue

            logger.debug("Matched [{}] shortcode at offset {}", match.tag, match.start)
            return self.found(locator.do_shortcode(match.tag, match.text, config), original=match.text)

        return LocateResult()


class AutoembedStrategy(LocateStrategy):
    """A bare URL on its own line that embeds as the media type's shortcode."""

    name = "autoembed"

    def is_enabled(self, locator, config: GrabberConfig) -> bool:
        return locator.host.autoembed_enabled and config.autoembeds

    def locate(self, locator, content: str, post_id: int, config: GrabberConfig) -> LocateResult:
        media_type = MediaType(config.type).value
        shortcode_start = re.compile(r"\[" + re.escape(media_type) + r"\s")

        for match in AUTOEMBED_URL_PATTERN.finditer(content):
            embed = locator.host.resolve_autoembed(match.group(1))

            if not embed:
                continue

            if shortcode_start.search(embed):
                return self.found(locator.do_shortcode(media_type, embed, config), original=match.group(1))

            logger.debug("Autoembed for {} is not a [{}] shortcode, skipping", match.group(1), media_type)

        return LocateResult()


class EmbeddedStrategy(LocateStrategy):
    """Media HTML (iframe, object, embed, ...) already in the content."""

    name = "embedded"

    def is_enabled(self, locator, config: GrabberConfig) -> bool:
        return config.embedded

    def locate(self, locator, content: str, post_id: int, config: GrabberConfig) -> LocateResult:
        embedded = locator.host.extract_embedded_html(content)
        if not embedded:
            return LocateResult()
        return self.found(embedded[0], original=embedded[0])


class AttachedStrategy(LocateStrategy):
    """Last resort: the first attached file of the media type."""

    name = "attached"

    def is_enabled(self, locator, config: GrabberConfig) -> bool:
        return config.attached

    def locate(self, locator, content: str, post_id: int, config: GrabberConfig) -> LocateResult:
        media_type = MediaType(config.type)
        attached = locator.host.get_attached_media(media_type.value, post_id)

        if not attached or media_type not in PLAYER_TYPES:
            return LocateResult()

        return self.found(locator.player_shortcode(media_type.value, attached[0].url))
