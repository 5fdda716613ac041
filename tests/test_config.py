"""Tests for the config module."""

import pytest
from pydantic import ValidationError

from media_grabber.config import GrabberConfig, MediaType


class TestMediaType:
    """Tests for MediaType enum."""

    def test_values(self):
        assert MediaType.AUDIO.value == "audio"
        assert MediaType.VIDEO.value == "video"
        assert MediaType.GALLERY.value == "gallery"


class TestGrabberConfig:
    """Tests for GrabberConfig."""

    def test_defaults(self):
        config = GrabberConfig()
        assert config.type == MediaType.VIDEO
        assert config.split is False
        assert config.shortcodes is True
        assert config.autoembeds and config.embedded and config.attached

    @pytest.mark.parametrize("value", ["image", "", None, "VIDEO "])
    def test_unknown_type_falls_back_to_video(self, value):
        assert GrabberConfig(type=value).type == MediaType.VIDEO

    def test_known_type(self):
        assert GrabberConfig(type="audio").type == MediaType.AUDIO

    def test_invalid_width_fails_fast(self):
        with pytest.raises(ValidationError):
            GrabberConfig(width="wide")

    def test_negative_width_fails_fast(self):
        with pytest.raises(ValidationError):
            GrabberConfig(width=-1)

    def test_unknown_option_fails_fast(self):
        with pytest.raises(ValidationError):
            GrabberConfig(colour="red")

    def test_immutable(self):
        config = GrabberConfig()
        with pytest.raises(ValidationError):
            config.width = 100

    def test_custom_shortcodes(self):
        assert GrabberConfig(shortcodes=["myplayer"]).custom_shortcodes == ["myplayer"]
        assert GrabberConfig(shortcodes=True).custom_shortcodes == []
        assert GrabberConfig(shortcodes=False).search_shortcodes is False

    def test_resolve_fills_unset_values(self):
        config = GrabberConfig().resolve(post_id=5, width=640)
        assert config.post_id == 5
        assert config.width == 640

    def test_resolve_keeps_explicit_values(self):
        config = GrabberConfig(post_id=2, width=300).resolve(post_id=5, width=640)
        assert config.post_id == 2
        assert config.width == 300
