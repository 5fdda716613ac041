"""Tests for the extractor module."""

from media_grabber.extractor import extract_attributes, parse_attribute_string


class TestExtractAttributes:
    """Tests for extract_attributes."""

    def test_iframe_attributes(self):
        html = '<iframe src="https://player.vimeo.com/video/1" width="640" height="360"></iframe>'
        attributes = extract_attributes(html)
        assert attributes["src"] == "https://player.vimeo.com/video/1"
        assert attributes["width"] == "640"
        assert attributes["height"] == "360"

    def test_mixed_quoting(self):
        html = "<embed src='movie.swf' width=400 height=\"300\">"
        attributes = extract_attributes(html)
        assert attributes == {"src": "movie.swf", "width": "400", "height": "300"}

    def test_surrounding_tags_are_ignored(self):
        html = '<p class="intro" width="1"><iframe src="x" width="640" height="360"></iframe></p>'
        attributes = extract_attributes(html)
        assert "class" not in attributes
        assert attributes["width"] == "640"

    def test_no_media_tags(self):
        assert extract_attributes('<p width="10">Hello</p>') == {}

    def test_empty_input(self):
        assert extract_attributes("") == {}
        assert extract_attributes(None) == {}

    def test_shortcode_text(self):
        attributes = extract_attributes('[video width="640" height="360" mp4="a.mp4"][/video]')
        assert attributes["width"] == "640"
        assert attributes["height"] == "360"
        assert attributes["mp4"] == "a.mp4"

    def test_first_occurrence_wins(self):
        html = '<video width="640" height="360"></video><iframe width="100" height="50"></iframe>'
        attributes = extract_attributes(html)
        assert attributes["width"] == "640"
        assert attributes["height"] == "360"


class TestParseAttributeString:
    """Tests for parse_attribute_string."""

    def test_quoted_and_unquoted(self):
        result = parse_attribute_string("""[x a="1" b='2' c=3]""")
        assert result == {"a": "1", "b": "2", "c": "3"}

    def test_names_are_lowercased(self):
        assert parse_attribute_string('WIDTH="10"') == {"width": "10"}
