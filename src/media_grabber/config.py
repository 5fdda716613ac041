"""Configuration model for a single media grab."""

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MediaType(str, Enum):
    """Kinds of media the grabber can search for."""

    AUDIO = "audio"
    VIDEO = "video"
    GALLERY = "gallery"


# Media types that have a player shortcode of the same name
PLAYER_TYPES = (MediaType.AUDIO, MediaType.VIDEO)


class GrabberConfig(BaseModel):
    """Options for one grabber invocation.

    A ``post_id`` or ``width`` of 0 means "use the host's default"; see
    :meth:`resolve`.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: MediaType = Field(default=MediaType.VIDEO, description="Media type to look for")
    post_id: int = Field(default=0, ge=0, description="Content item to search")

    # Output wrapping
    before: str = Field(default="", description="HTML added before the media")
    after: str = Field(default="", description="HTML added after the media")

    split: bool = Field(default=False, description="Remove the media from the post content")
    width: int = Field(default=0, ge=0, description="Max width to constrain the media to")

    # Search strategies
    shortcodes: Union[bool, list[str]] = Field(
        default=True,
        description="Search for known shortcodes; a list adds custom tags",
    )
    autoembeds: bool = Field(default=True, description="Search for autoembed URLs")
    embedded: bool = Field(default=True, description="Search for embedded media HTML")
    attached: bool = Field(default=True, description="Fall back to attached media")

    @field_validator("type", mode="before")
    @classmethod
    def _reset_unknown_type(cls, value):
        # Unknown types fall back to video instead of failing.
        if isinstance(value, MediaType):
            return value
        try:
            return MediaType(value)
        except ValueError:
            return MediaType.VIDEO

    @property
    def custom_shortcodes(self) -> list[str]:
        """Explicitly allowed shortcode tags, if a list was given."""
        if isinstance(self.shortcodes, list):
            return list(self.shortcodes)
        return []

    @property
    def search_shortcodes(self) -> bool:
        return bool(self.shortcodes)

    def resolve(self, post_id: int, width: int) -> "GrabberConfig":
        """Return a copy with unset post ID and width filled in from defaults."""
        update = {}
        if not self.post_id:
            update["post_id"] = post_id or 0
        if not self.width:
            update["width"] = width or 0
        return self.model_copy(update=update) if update else self
