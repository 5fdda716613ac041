"""Width/height recalculation and rewriting for media markup."""

import math
import re
from typing import Any, Callable, Optional

from loguru import logger

from .extractor import extract_attributes
from .hooks import DEFAULT_HOOKS


# Providers whose compact player only scales when its native height is 80
COMPACT_PLAYER_PATTERNS = [
    re.compile(r"https?://(embed)\.spotify\.com/.*", re.IGNORECASE),
]

COMPACT_PLAYER_HEIGHT = 80

# Sizes outside [1, MAX_DIMENSION) are treated as malformed
MAX_DIMENSION = 1000000

# Attribute values and inline-style declarations on <div> wrappers
WIDTH_ATTRIBUTE = re.compile(r"""((?<![-\w])width=['"])[^'"]*(['"])""", re.IGNORECASE)
HEIGHT_ATTRIBUTE = re.compile(r"""((?<![-\w])height=['"])[^'"]*(['"])""", re.IGNORECASE)
WIDTH_STYLE = re.compile(
    r"""(<div\b[^>]*?\bstyle=['"][^'"]*?(?<![-\w])width:\s*)\d+(?:\.\d+)?(px)""",
    re.IGNORECASE,
)
HEIGHT_STYLE = re.compile(
    r"""(<div\b[^>]*?\bstyle=['"][^'"]*?(?<![-\w])height:\s*)\d+(?:\.\d+)?(px)""",
    re.IGNORECASE,
)


def _php_round(value: float) -> int:
    # Half away from zero; Python's round() is banker's rounding.
    if value >= 0:
        return int(value + 0.5)
    return -int(-value + 0.5)


def constrain_dimensions(
    current_width: int,
    current_height: int,
    max_width: int = 0,
    max_height: int = 0,
) -> tuple[int, int]:
    """
    Scale a box down so it fits inside ``max_width`` x ``max_height``.

    A bound of 0 means unbounded. Aspect ratio is kept, the result is never
    smaller than 1x1, and a result one pixel short of a bound it was scaled
    against is rounded up to that bound.
    """
    if not max_width and not max_height:
        return current_width, current_height

    width_ratio = height_ratio = 1.0
    did_width = did_height = False

    if max_width > 0 and current_width > 0 and current_width > max_width:
        width_ratio = max_width / current_width
        did_width = True

    if max_height > 0 and current_height > 0 and current_height > max_height:
        height_ratio = max_height / current_height
        did_height = True

    smaller_ratio = min(width_ratio, height_ratio)
    larger_ratio = max(width_ratio, height_ratio)

    if (
        _php_round(current_width * larger_ratio) > max_width
        or _php_round(current_height * larger_ratio) > max_height
    ):
        # The larger ratio would overflow one of the bounds
        ratio = smaller_ratio
    else:
        ratio = larger_ratio

    width = max(1, _php_round(current_width * ratio))
    height = max(1, _php_round(current_height * ratio))

    if did_width and width == max_width - 1:
        width = max_width
    if did_height and height == max_height - 1:
        height = max_height

    return width, height


def expand_dimensions(
    example_width: int,
    example_height: int,
    max_width: int,
    max_height: int,
) -> tuple[int, int]:
    """Scale a box up or down to fill ``max_width`` x ``max_height``."""
    return constrain_dimensions(
        int(example_width) * 1000000,
        int(example_height) * 1000000,
        int(max_width),
        int(max_height),
    )


def _positive_number(value: Optional[str]) -> Optional[float]:
    try:
        number = float(str(value).strip())
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or not 1 <= number < MAX_DIMENSION:
        return None
    return number


def is_compact_player(src: Optional[str]) -> bool:
    if not src:
        return False
    return any(pattern.match(src) for pattern in COMPACT_PLAYER_PATTERNS)


def rewrite_dimensions(html: str, width: int, height: int) -> str:
    """Replace every width/height marker in ``html``, leaving the rest alone."""
    html = WIDTH_ATTRIBUTE.sub(lambda m: f"{m.group(1)}{width}{m.group(2)}", html)
    html = HEIGHT_ATTRIBUTE.sub(lambda m: f"{m.group(1)}{height}{m.group(2)}", html)
    html = WIDTH_STYLE.sub(lambda m: f"{m.group(1)}{width}{m.group(2)}", html)
    html = HEIGHT_STYLE.sub(lambda m: f"{m.group(1)}{height}{m.group(2)}", html)
    return html


class DimensionResolver:
    """Fits media markup into a maximum width.

    Args:
        max_width: Width to constrain media to
        filter_dimensions: Hook that may override the computed dimensions
        grabber: Object passed along to the hook
    """

    def __init__(
        self,
        max_width: int,
        filter_dimensions: Optional[Callable[[tuple[int, int], dict, Any], tuple[int, int]]] = None,
        grabber: Any = None,
    ):
        self.max_width = int(max_width or 0)
        self.filter_dimensions = filter_dimensions or DEFAULT_HOOKS.filter_dimensions
        self.grabber = grabber

    def compute(self, attributes: dict[str, str]) -> Optional[tuple[int, int]]:
        """Compute the final (width, height), or None if the media has no usable size."""
        original_width = _positive_number(attributes.get("width"))
        original_height = _positive_number(attributes.get("height"))

        if original_width is None or original_height is None or self.max_width <= 0:
            return None

        max_width = self.max_width
        max_height = _php_round(max_width / (original_width / original_height))

        if is_compact_player(attributes.get("src")):
            max_width, max_height = self._compact_player_bounds(
                original_width, original_height, max_height
            )

        dimensions = expand_dimensions(original_width, original_height, max_width, max_height)
        logger.debug(
            "Fitting {}x{} into {}x{} gives {}x{}",
            original_width, original_height, max_width, max_height, *dimensions,
        )

        width, height = self.filter_dimensions(dimensions, attributes, self.grabber)
        return int(width), int(height)

    def _compact_player_bounds(
        self,
        original_width: float,
        original_height: float,
        max_height: int,
    ) -> tuple[int, int]:
        # Only the compact player stretches to the full width.
        if original_height == COMPACT_PLAYER_HEIGHT:
            return self.max_width, max_height
        return int(original_width), int(original_height)

    def resolve_and_rewrite(self, html: str, max_width: Optional[int] = None) -> str:
        """
        Rewrite the dimensions of the media in ``html``.

        Args:
            html: Media markup or shortcode text
            max_width: Overrides the resolver's width for this call

        Returns:
            The markup with its width/height markers replaced, or the input
            unchanged if it carries no usable width and height
        """
        if max_width is not None and max_width != self.max_width:
            resolver = DimensionResolver(max_width, self.filter_dimensions, self.grabber)
            return resolver.resolve_and_rewrite(html)

        attributes = extract_attributes(html)
        dimensions = self.compute(attributes) if attributes else None

        if dimensions is None:
            return html

        return rewrite_dimensions(html, *dimensions)


def resolve_and_rewrite(html: str, max_width: int) -> str:
    """Rewrite the dimensions of ``html`` with the default hooks."""
    return DimensionResolver(max_width).resolve_and_rewrite(html)
