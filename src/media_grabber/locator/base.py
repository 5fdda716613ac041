from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from ..config import GrabberConfig

if TYPE_CHECKING:
    from .cascade import MediaLocator


@dataclass
class LocateResult:
    markup: str = ""
    original: str = ""  # Exact text matched in the post body, if any
    strategy: Optional[str] = None

    def __bool__(self) -> bool:
        return bool(self.markup)


class LocateStrategy(ABC):
    name: str = "unknown"

    def is_enabled(self, locator: "MediaLocator", config: GrabberConfig) -> bool:
        """Check if this strategy should run for the given config."""
        return True

    @abstractmethod
    def locate(
        self,
        locator: "MediaLocator",
        content: str,
        post_id: int,
        config: GrabberConfig,
    ) -> LocateResult:
        """Look for media; return an empty result if there is none."""
        pass

    def found(self, markup: str, original: str = "") -> LocateResult:
        if not markup:
            return LocateResult()
        return LocateResult(markup=markup, original=original, strategy=self.name)
