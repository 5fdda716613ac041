"""Tests for the shortcodes module."""

from media_grabber.config import MediaType
from media_grabber.shortcodes import (
    DEFAULT_SHORTCODES,
    ShortcodeCatalog,
    find_shortcodes,
    parse_shortcode_attributes,
)


class TestFindShortcodes:
    """Tests for find_shortcodes."""

    def test_document_order(self):
        content = 'Intro [gallery] middle [video src="a.mp4"] end'
        tags = [match.tag for match in find_shortcodes(content)]
        assert tags == ["gallery", "video"]

    def test_full_token_text(self):
        content = 'before [video src="https://example.com/a.mp4"] after'
        match = next(find_shortcodes(content))
        assert match.text == '[video src="https://example.com/a.mp4"]'
        assert content[match.start:match.end] == match.text

    def test_enclosing_shortcode(self):
        content = "[embed width=\"400\"]https://vimeo.com/123[/embed]"
        match = next(find_shortcodes(content))
        assert match.tag == "embed"
        assert match.content == "https://vimeo.com/123"
        assert match.text == content

    def test_self_closing_shortcode(self):
        match = next(find_shortcodes('[audio src="https://example.com/a.mp3" /]'))
        assert match.tag == "audio"
        assert match.content is None
        assert match.attributes() == {"src": "https://example.com/a.mp3"}

    def test_escaped_shortcode(self):
        match = next(find_shortcodes("[[video src=a.mp4]]"))
        assert match.escaped is True

    def test_dotted_tag(self):
        match = next(find_shortcodes("[blip.tv ?posts_id=123]"))
        assert match.tag == "blip.tv"

    def test_no_shortcodes(self):
        assert list(find_shortcodes("plain text")) == []
        assert list(find_shortcodes("")) == []


class TestParseShortcodeAttributes:
    """Tests for parse_shortcode_attributes."""

    def test_named_attributes(self):
        result = parse_shortcode_attributes(' width="640" Height=\'360\' mp4=a.mp4')
        assert result == {"width": "640", "height": "360", "mp4": "a.mp4"}

    def test_positional_attributes(self):
        result = parse_shortcode_attributes(' "first" second')
        assert result == {0: "first", 1: "second"}


class TestShortcodeCatalog:
    """Tests for ShortcodeCatalog."""

    def test_default_video_tags(self):
        catalog = ShortcodeCatalog()
        tags = catalog.tags_for(MediaType.VIDEO)
        assert "video" in tags
        assert "youtube" in tags
        assert "gallery" not in tags

    def test_default_gallery_tags(self):
        assert ShortcodeCatalog().tags_for("gallery") == ["gallery"]

    def test_lookup_returns_copy(self):
        catalog = ShortcodeCatalog()
        catalog.tags_for(MediaType.AUDIO).append("mixcloud")
        assert "mixcloud" not in catalog.tags_for(MediaType.AUDIO)
        assert "mixcloud" not in DEFAULT_SHORTCODES[MediaType.AUDIO]

    def test_register(self):
        catalog = ShortcodeCatalog()
        catalog.register(MediaType.AUDIO, "mixcloud", "audio")
        tags = catalog.tags_for(MediaType.AUDIO)
        assert tags.count("audio") == 1
        assert "mixcloud" in tags

    def test_filter_hook(self):
        seen = []

        def only_native(media_type, tags):
            seen.append(media_type)
            return [tag for tag in tags if tag == media_type]

        tags = ShortcodeCatalog().tags_for(MediaType.VIDEO, only_native)
        assert tags == ["video"]
        assert seen == ["video"]

    def test_allowed_tags_include_custom(self):
        allowed = ShortcodeCatalog().allowed_tags(MediaType.GALLERY, custom=["slideshow"])
        assert allowed == {"gallery", "slideshow"}

    def test_contains(self):
        catalog = ShortcodeCatalog()
        assert MediaType.VIDEO in catalog
        assert "image" not in catalog
