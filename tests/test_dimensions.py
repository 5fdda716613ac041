"""Tests for the dimensions module."""

import pytest

from media_grabber.dimensions import (
    DimensionResolver,
    constrain_dimensions,
    expand_dimensions,
    is_compact_player,
    resolve_and_rewrite,
)


IFRAME = '<iframe src="https://player.vimeo.com/video/1" width="640" height="360"></iframe>'
SPOTIFY_COMPACT = (
    '<iframe src="https://embed.spotify.com/?uri=spotify:track:abc" width="300" height="80" '
    'frameborder="0" allowtransparency="true"></iframe>'
)
SPOTIFY_LARGE = (
    '<iframe src="https://embed.spotify.com/?uri=spotify:album:abc" width="300" height="380" '
    'frameborder="0" allowtransparency="true"></iframe>'
)


class TestConstrainDimensions:
    """Tests for constrain_dimensions and expand_dimensions."""

    def test_scales_down_to_fit(self):
        assert constrain_dimensions(1024, 768, 512, 512) == (512, 384)

    def test_no_bounds(self):
        assert constrain_dimensions(100, 50, 0, 0) == (100, 50)

    def test_smaller_box_is_not_enlarged(self):
        assert constrain_dimensions(100, 50, 640, 360) == (100, 50)

    def test_expand_scales_up(self):
        assert expand_dimensions(560, 315, 640, 360) == (640, 360)

    def test_expand_scales_down(self):
        assert expand_dimensions(1280, 720, 640, 360) == (640, 360)

    def test_expand_width_bound_only(self):
        assert expand_dimensions(16, 9, 1280, 0) == (1280, 720)


class TestResolveAndRewrite:
    """Tests for DimensionResolver.resolve_and_rewrite."""

    def test_keeps_aspect_ratio(self):
        result = resolve_and_rewrite(IFRAME, 320)
        assert 'width="320"' in result
        assert 'height="180"' in result

    def test_idempotent(self):
        once = resolve_and_rewrite(IFRAME, 320)
        assert resolve_and_rewrite(once, 320) == once

    def test_no_dimensions_is_noop(self):
        html = '<iframe src="x"></iframe>'
        assert resolve_and_rewrite(html, 320) == html

    def test_non_numeric_dimensions_is_noop(self):
        html = '<iframe src="x" width="100%" height="166"></iframe>'
        assert resolve_and_rewrite(html, 320) == html

    def test_zero_width_is_noop(self):
        assert resolve_and_rewrite(IFRAME, 0) == IFRAME

    @pytest.mark.parametrize("value", ["0", "-5", "0.5", "Infinity", "nan", "1e308"])
    def test_malformed_width_is_noop(self, value):
        html = f'<iframe src="x" width="{value}" height="360"></iframe>'
        assert resolve_and_rewrite(html, 320) == html

    @pytest.mark.parametrize("value", ["0", "-5", "Infinity", "1e308"])
    def test_malformed_height_is_noop(self, value):
        html = f'<iframe src="x" width="640" height="{value}"></iframe>'
        assert resolve_and_rewrite(html, 320) == html

    def test_unrelated_markup_preserved(self):
        html = (
            '<div style="max-width: 900px;"><iframe data-width="5" src="x" '
            'width="640" height="360"></iframe></div><p>640 wide</p>'
        )
        result = resolve_and_rewrite(html, 320)
        assert result == (
            '<div style="max-width: 900px;"><iframe data-width="5" src="x" '
            'width="320" height="180"></iframe></div><p>640 wide</p>'
        )

    def test_div_wrapper_style(self):
        html = (
            '<div style="width: 640px;" class="wp-video"><video class="wp-video-shortcode" '
            'width="640" height="360" controls="controls"></video></div>'
        )
        result = resolve_and_rewrite(html, 320)
        assert '<div style="width: 320px;" class="wp-video">' in result
        assert 'width="320" height="180"' in result

    def test_shortcode_text(self):
        result = resolve_and_rewrite('[video width="1280" height="720" mp4="a.mp4"][/video]', 640)
        assert result == '[video width="640" height="360" mp4="a.mp4"][/video]'

    def test_explicit_max_width_overrides_resolver(self):
        resolver = DimensionResolver(640)
        result = resolver.resolve_and_rewrite(IFRAME, 320)
        assert 'width="320"' in result


class TestCompactPlayer:
    """Tests for the Spotify compact player override."""

    def test_is_compact_player(self):
        assert is_compact_player("https://embed.spotify.com/?uri=spotify:track:abc")
        assert is_compact_player("HTTPS://EMBED.SPOTIFY.COM/?uri=x")
        assert not is_compact_player("https://open.spotify.com/track/abc")
        assert not is_compact_player(None)

    def test_compact_player_takes_full_width(self):
        result = resolve_and_rewrite(SPOTIFY_COMPACT, 640)
        assert 'width="640"' in result

    def test_large_player_keeps_native_size(self):
        assert resolve_and_rewrite(SPOTIFY_LARGE, 640) == SPOTIFY_LARGE


class TestDimensionsHook:
    """Tests for the filter_dimensions hook."""

    def test_hook_overrides_dimensions(self):
        calls = []

        def override(dimensions, attributes, grabber):
            calls.append((dimensions, attributes, grabber))
            return 100, 50

        owner = object()
        resolver = DimensionResolver(320, override, owner)
        result = resolver.resolve_and_rewrite(IFRAME)

        assert 'width="100"' in result
        assert 'height="50"' in result
        assert len(calls) == 1
        assert calls[0][0] == (320, 180)
        assert calls[0][1]["src"] == "https://player.vimeo.com/video/1"
        assert calls[0][2] is owner

    def test_hook_not_called_without_dimensions(self):
        calls = []
        resolver = DimensionResolver(320, lambda d, a, g: calls.append(d) or d)
        resolver.resolve_and_rewrite('<iframe src="x"></iframe>')
        assert calls == []
