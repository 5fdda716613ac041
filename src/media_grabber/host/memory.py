"""In-memory host backed by a dictionary of content items."""

import html
import json
import re
from contextvars import ContextVar
from pathlib import Path
from typing import Callable, Optional

from bs4 import BeautifulSoup
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter
from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from ..exceptions import FixtureError
from ..shortcodes import ShortcodeMatch, find_shortcodes, parse_shortcode_attributes
from .base import AttachedMedia, MediaHost


_current_post: ContextVar[Optional[int]] = ContextVar("current_post", default=None)

# Block delimiters left in raw post content
BLOCK_COMMENT = re.compile(r"<!--\s+/?wp:[^>]*?-->\n?")

# Named entities and unclosed void tags, as post bodies are usually written
SANITIZED_MARKUP = HTMLFormatter(
    entity_substitution=EntitySubstitution.substitute_html,
    void_element_close_prefix=None,
)

EMBEDDED_MEDIA = re.compile(
    r"<(?P<tag>video|audio|object|embed|iframe)[^<]*?(?:>[\s\S]*?</(?P=tag)>|\s*/>)"
)

VIDEO_EXTENSIONS = {
    "mp4": "video/mp4",
    "m4v": "video/x-m4v",
    "webm": "video/webm",
    "ogv": "video/ogg",
    "flv": "video/x-flv",
    "mov": "video/quicktime",
}

AUDIO_EXTENSIONS = {
    "mp3": "audio/mpeg",
    "ogg": "audio/ogg",
    "flac": "audio/flac",
    "m4a": "audio/mpeg",
    "wav": "audio/wav",
    "wma": "audio/x-ms-wma",
}

# oEmbed-style providers: URL pattern -> iframe template
EMBED_PROVIDERS = [
    (
        re.compile(r"https?://(?:www\.)?(?:youtube\.com/watch\?v=|youtu\.be/)([\w-]+)", re.IGNORECASE),
        '<iframe title="YouTube video player" width="560" height="315" '
        'src="https://www.youtube.com/embed/{0}?feature=oembed" frameborder="0" allowfullscreen></iframe>',
    ),
    (
        re.compile(r"https?://(?:www\.)?vimeo\.com/(\d+)", re.IGNORECASE),
        '<iframe src="https://player.vimeo.com/video/{0}" width="640" height="360" '
        'frameborder="0" allowfullscreen></iframe>',
    ),
    (
        re.compile(r"https?://open\.spotify\.com/track/(\w+)", re.IGNORECASE),
        '<iframe src="https://embed.spotify.com/?uri=spotify:track:{0}" width="300" height="80" '
        'frameborder="0" allowtransparency="true"></iframe>',
    ),
    (
        re.compile(r"https?://open\.spotify\.com/(album|playlist)/(\w+)", re.IGNORECASE),
        '<iframe src="https://embed.spotify.com/?uri=spotify:{0}:{1}" width="300" height="380" '
        'frameborder="0" allowtransparency="true"></iframe>',
    ),
    (
        re.compile(r"(https?://(?:www\.)?soundcloud\.com/[\w-]+/[\w-]+)", re.IGNORECASE),
        '<iframe width="100%" height="166" scrolling="no" frameborder="no" '
        'src="https://w.soundcloud.com/player/?url={0}"></iframe>',
    ),
]


class ContentItem(BaseModel):
    """A post, page or attachment stored in the host."""

    id: int = Field(..., gt=0)
    type: str = Field(default="post", description="post, page, attachment, ...")
    title: str = Field(default="")
    content: str = Field(default="", description="Raw post content")

    # Attachments only
    parent: int = Field(default=0, ge=0, description="ID of the item it is attached to")
    mime_type: str = Field(default="")
    url: str = Field(default="", description="File URL")


def _file_extension(url: str) -> str:
    path = url.split("?", 1)[0].split("#", 1)[0]
    return path.rsplit(".", 1)[-1].lower() if "." in path.rsplit("/", 1)[-1] else ""


def _escape(value: str) -> str:
    return html.escape(str(value), quote=True)


class InMemoryHost(MediaHost):
    """Reference host holding content items in memory.

    Args:
        items: Content items to start with
        content_width: Default width for media
        autoembed: Site-wide autoembed switch
    """

    def __init__(
        self,
        items: Optional[list[ContentItem]] = None,
        content_width: int = 640,
        autoembed: bool = True,
    ):
        self.items: dict[int, ContentItem] = {}
        self.content_width = content_width
        self.autoembed = autoembed

        self._filters: list[tuple[int, int, Callable[[str], str]]] = []
        self._instances: dict[str, int] = {}
        self.shortcode_handlers: dict[str, Callable[[dict, Optional[str]], str]] = {
            "audio": self._audio_shortcode,
            "video": self._video_shortcode,
            "gallery": self._gallery_shortcode,
            "embed": self._embed_shortcode,
        }

        for item in items or []:
            self.add_item(item)

        # Shortcodes are expanded after early filters such as a grabber's split
        self.add_content_filter(self.do_shortcodes, priority=11)

    @classmethod
    def from_fixture(cls, path: Path) -> "InMemoryHost":
        """
        Load a host from a JSON fixture.

        The fixture holds ``content_width``, ``autoembed`` and a list of
        ``items`` shaped like :class:`ContentItem`.

        Raises:
            FixtureError: If the file is missing or malformed
        """
        path = Path(path)
        if not path.exists():
            raise FixtureError(f"Fixture not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            items = [ContentItem(**item) for item in data.get("items", [])]
        except (json.JSONDecodeError, ValidationError, TypeError, AttributeError) as e:
            raise FixtureError(f"Invalid fixture {path}: {e}") from e

        return cls(
            items=items,
            content_width=int(data.get("content_width", 640)),
            autoembed=bool(data.get("autoembed", True)),
        )

    def add_item(self, item: ContentItem) -> ContentItem:
        self.items[item.id] = item
        return item

    # Site options

    @property
    def autoembed_enabled(self) -> bool:
        return self.autoembed

    @property
    def default_width(self) -> int:
        return self.content_width

    # Content

    def current_post_id(self) -> Optional[int]:
        return _current_post.get()

    def get_content_body(self, post_id: int) -> str:
        item = self.items.get(post_id)
        if not item:
            return ""
        return self.render_blocks(item.content)

    def render_blocks(self, content: str) -> str:
        """Render block markup by dropping the block delimiter comments."""
        return BLOCK_COMMENT.sub("", content)

    def get_post_type(self, post_id: int) -> str:
        item = self.items.get(post_id)
        return item.type if item else ""

    def get_mime_type(self, post_id: int) -> str:
        item = self.items.get(post_id)
        return item.mime_type if item else ""

    def get_attachment_url(self, post_id: int) -> str:
        item = self.items.get(post_id)
        if not item or item.type != "attachment":
            return ""
        return item.url

    def get_attached_media(self, media_type: str, post_id: int) -> list[AttachedMedia]:
        attached = []
        for item in sorted(self.items.values(), key=lambda i: i.id):
            if item.type != "attachment" or item.parent != post_id:
                continue
            if item.mime_type.split("/", 1)[0] == media_type:
                attached.append(AttachedMedia(id=item.id, url=item.url, mime_type=item.mime_type))
        return attached

    def add_content_filter(self, callback: Callable[[str], str], priority: int = 10) -> None:
        self._filters.append((priority, len(self._filters), callback))

    def render_content(self, post_id: int) -> str:
        """
        Render a post body through the registered content filters.

        Filters run in priority order, lowest first; ties keep registration
        order.
        """
        token = _current_post.set(post_id)
        try:
            content = self.get_content_body(post_id)
            for _, _, callback in sorted(self._filters, key=lambda f: (f[0], f[1])):
                content = callback(content)
            return content
        finally:
            _current_post.reset(token)

    def sanitize_html(self, content: str) -> str:
        """
        Drop scripts, styles and inline event handlers.

        The markup is re-serialized: named entities and `<br>` keep their
        spelling, but non-ASCII characters come back as named entities too
        and attribute quoting is normalized.
        """
        soup = BeautifulSoup(content, "html.parser")
        for tag in soup.find_all(["script", "style"]):
            tag.decompose()
        for tag in soup.find_all(True):
            for name in [n for n in tag.attrs if n.lower().startswith("on")]:
                del tag.attrs[name]
        return soup.decode(formatter=SANITIZED_MARKUP)

    def extract_embedded_html(self, content: str) -> list[str]:
        return [match.group(0) for match in EMBEDDED_MEDIA.finditer(content or "")]

    # Shortcodes

    def do_shortcodes(self, content: str) -> str:
        """Expand every registered shortcode in ``content``."""
        if not content or "[" not in content:
            return content

        parts = []
        position = 0
        for match in find_shortcodes(content):
            if match.tag not in self.shortcode_handlers:
                continue
            parts.append(content[position:match.start])
            parts.append(self._run_shortcode(match))
            position = match.end
        parts.append(content[position:])
        return "".join(parts)

    def _run_shortcode(self, match: ShortcodeMatch) -> str:
        if match.escaped:
            return match.text[1:-1]
        handler = self.shortcode_handlers[match.tag]
        return handler(match.attributes(), match.content)

    def expand_shortcode(self, tag: str, text: str) -> str:
        if tag not in self.shortcode_handlers:
            logger.debug("No handler for [{}], leaving it as text", tag)
            return text
        return self.do_shortcodes(text)

    def run_embed_shortcode(self, text: str) -> str:
        for match in find_shortcodes(text):
            if match.tag == "embed" and not match.escaped:
                return self._embed_shortcode(match.attributes(), match.content)
        return ""

    def _next_instance(self, kind: str) -> int:
        self._instances[kind] = self._instances.get(kind, 0) + 1
        return self._instances[kind]

    def _sources(self, atts: dict, extensions: dict[str, str]) -> list[tuple[str, str]]:
        sources = []
        if atts.get("src"):
            src = atts["src"]
            sources.append((extensions.get(_file_extension(src), next(iter(extensions.values()))), src))
        for extension, mime in extensions.items():
            if atts.get(extension):
                sources.append((mime, atts[extension]))
        return sources

    def _video_shortcode(self, atts: dict, content: Optional[str] = None) -> str:
        sources = self._sources(atts, VIDEO_EXTENSIONS)
        if not sources:
            return ""

        try:
            width = int(float(atts.get("width", 640)))
            height = int(float(atts.get("height", 360)))
        except ValueError:
            width, height = 640, 360

        # Shrink to the content width
        if self.content_width and width > self.content_width:
            height = round(height * self.content_width / width)
            width = self.content_width

        post_id = self.current_post_id() or 0
        instance = self._next_instance("video")
        source_tags = "".join(
            f'<source type="{mime}" src="{_escape(src)}" />' for mime, src in sources
        )
        fallback = _escape(sources[0][1])
        return (
            f'<div style="width: {width}px;" class="wp-video">'
            f'<video class="wp-video-shortcode" id="video-{post_id}-{instance}" '
            f'width="{width}" height="{height}" preload="{_escape(atts.get("preload", "metadata"))}" '
            f'controls="controls">{source_tags}<a href="{fallback}">{fallback}</a></video></div>'
        )

    def _audio_shortcode(self, atts: dict, content: Optional[str] = None) -> str:
        sources = self._sources(atts, AUDIO_EXTENSIONS)
        if not sources:
            return ""

        post_id = self.current_post_id() or 0
        instance = self._next_instance("audio")
        source_tags = "".join(
            f'<source type="{mime}" src="{_escape(src)}" />' for mime, src in sources
        )
        fallback = _escape(sources[0][1])
        return (
            f'<audio class="wp-audio-shortcode" id="audio-{post_id}-{instance}" '
            f'preload="{_escape(atts.get("preload", "none"))}" style="width: 100%;" '
            f'controls="controls">{source_tags}<a href="{fallback}">{fallback}</a></audio>'
        )

    def _gallery_shortcode(self, atts: dict, content: Optional[str] = None) -> str:
        try:
            post_id = int(atts.get("id", 0) or self.current_post_id() or 0)
        except ValueError:
            post_id = self.current_post_id() or 0

        if atts.get("ids"):
            ids = [int(i) for i in re.findall(r"\d+", atts["ids"])]
            images = [self.items[i] for i in ids if i in self.items]
        else:
            images = [
                item for item in sorted(self.items.values(), key=lambda i: i.id)
                if item.type == "attachment"
                and item.parent == post_id
                and item.mime_type.startswith("image/")
            ]

        if not images:
            return ""

        try:
            columns = int(atts.get("columns", 3))
        except ValueError:
            columns = 3
        instance = self._next_instance("gallery")
        figures = "".join(
            f'<figure class="gallery-item"><div class="gallery-icon">'
            f'<a href="{_escape(image.url)}"><img src="{_escape(image.url)}" alt="{_escape(image.title)}" /></a>'
            f"</div></figure>"
            for image in images
        )
        return (
            f'<div id="gallery-{instance}" class="gallery galleryid-{post_id} '
            f'gallery-columns-{columns}">{figures}</div>'
        )

    def _embed_shortcode(self, atts: dict, content: Optional[str] = None) -> str:
        url = (content or atts.get("src") or "").strip()
        if not url:
            return ""

        embed = self._embed_url(url)
        if embed.startswith("["):
            return self.do_shortcodes(embed)
        if embed:
            return embed

        if self.embed_links_suppressed:
            return ""
        return f'<a href="{_escape(url)}">{_escape(url)}</a>'

    def _embed_url(self, url: str) -> str:
        extension = _file_extension(url)
        if extension in VIDEO_EXTENSIONS:
            return f'[video src="{_escape(url)}" /]'
        if extension in AUDIO_EXTENSIONS:
            return f'[audio src="{_escape(url)}" /]'

        for pattern, template in EMBED_PROVIDERS:
            match = pattern.match(url)
            if match:
                return template.format(*match.groups())
        return ""

    def resolve_autoembed(self, url: str) -> str:
        url = url.strip()
        embed = self._embed_url(url)
        if embed or self.embed_links_suppressed:
            return embed
        return f'<a href="{_escape(url)}">{_escape(url)}</a>'
