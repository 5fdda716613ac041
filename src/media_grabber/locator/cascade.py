"""The media location cascade."""

import html
from typing import Optional

from loguru import logger

from ..config import GrabberConfig
from ..dimensions import DimensionResolver
from ..hooks import DEFAULT_HOOKS, GrabberHooks
from ..host import MediaHost
from ..shortcodes import ShortcodeCatalog
from .base import LocateResult, LocateStrategy
from .strategies import (
    AttachedStrategy,
    AutoembedStrategy,
    EmbeddedStrategy,
    SelfMediaStrategy,
    ShortcodeStrategy,
)


def get_default_strategies() -> list[LocateStrategy]:
    return [
        SelfMediaStrategy(),
        ShortcodeStrategy(),
        AutoembedStrategy(),
        EmbeddedStrategy(),
        AttachedStrategy(),  # Last resort
    ]


class MediaLocator:
    """Runs the search strategies in order until one finds media.

    Args:
        host: Services used to read content and run shortcodes
        catalog: Known shortcodes per media type
        hooks: Extension callbacks
        resolver: Rewrites [video] shortcode dimensions before expansion
        strategies: Strategies to run, in priority order
    """

    def __init__(
        self,
        host: MediaHost,
        catalog: Optional[ShortcodeCatalog] = None,
        hooks: Optional[GrabberHooks] = None,
        resolver: Optional[DimensionResolver] = None,
        strategies: Optional[list[LocateStrategy]] = None,
    ):
        self.host = host
        self.catalog = catalog or ShortcodeCatalog()
        self.hooks = hooks or DEFAULT_HOOKS
        self.resolver = resolver
        self.strategies = strategies if strategies is not None else get_default_strategies()

    def locate(self, content: str, post_id: int, config: GrabberConfig) -> LocateResult:
        """
        Find the media for a content item.

        Failed embeds produce nothing rather than a link while the cascade
        runs; that override is released however the cascade ends.

        Args:
            content: Rendered post body
            post_id: Content item ID
            config: Grabber options

        Returns:
            The first non-empty result, or an empty LocateResult
        """
        with self.host.suppress_embed_links():
            for strategy in self.strategies:
                if not strategy.is_enabled(self, config):
                    continue

                result = strategy.locate(self, content or "", post_id, config)
                if result:
                    logger.debug("Found {} media for post {} via {}", config.type.value, post_id, strategy.name)
                    return result

        logger.debug("No {} media found for post {}", config.type.value, post_id)
        return LocateResult()

    def dimension_resolver(self, config: GrabberConfig) -> DimensionResolver:
        if self.resolver is not None:
            return self.resolver
        return DimensionResolver(config.width, self.hooks.filter_dimensions)

    def do_shortcode(self, tag: str, text: str, config: GrabberConfig) -> str:
        """Expand a shortcode, routing [embed] and [video] specially."""
        if tag == "embed":
            return self.host.run_embed_shortcode(text)

        if tag == "video":
            # The player wraps itself in a <div> sized from these attributes
            text = self.dimension_resolver(config).resolve_and_rewrite(text)
            return self.host.expand_shortcode(tag, text)

        return self.host.expand_shortcode(tag, text)

    def player_shortcode(self, media_type: str, url: str) -> str:
        """Expand an [audio] or [video] shortcode for a file URL."""
        if not url:
            return ""
        src = html.escape(url.strip(), quote=True)
        return self.host.expand_shortcode(media_type, f'[{media_type} src="{src}"]')
