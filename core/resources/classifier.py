# core/resources/classifier.py
"""Classify a resource URL into the content type that drives rendering."""

import posixpath
from urllib.parse import SplitResult, unquote, urljoin, urlsplit

from core.config import DEFAULT_FALLBACK_BASE_URL, Settings
from .denylist import is_blocked_host
from .types import ResourceType


AUDIO_EXTENSIONS = frozenset({"mp3", "wav", "aac", "ogg", "m4a", "flac", "wma"})
PDF_EXTENSIONS = frozenset({"pdf"})
POWERPOINT_EXTENSIONS = frozenset({"ppt", "pptx", "pps", "ppsx"})
DOCUMENT_EXTENSIONS = frozenset({"doc", "docx", "txt", "rtf"})
EXCEL_EXTENSIONS = frozenset({"xls", "xlsx", "csv"})
VIDEO_EXTENSIONS = frozenset({"mp4", "webm", "avi", "mov", "wmv", "flv", "mkv", "m4v", "3gp"})
IMAGE_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "gif", "bmp", "svg", "webp"})

# Checked in order; audio first so ambiguous containers (.ogg) play as audio.
EXTENSION_TABLE: tuple[tuple[frozenset[str], ResourceType], ...] = (
    (AUDIO_EXTENSIONS, "audio"),
    (PDF_EXTENSIONS, "pdf"),
    (POWERPOINT_EXTENSIONS, "powerpoint"),
    (DOCUMENT_EXTENSIONS, "document"),
    (EXCEL_EXTENSIONS, "excel"),
    (VIDEO_EXTENSIONS, "video"),
    (IMAGE_EXTENSIONS, "image"),
)

# Matched against the hostname only. Google Slides shares its host with
# Docs and Sheets, so it is told apart by path.
SMART_PRESENTATION_HOSTS = (
    ("gamma.app", "gamma"),
    ("canva.com", "canva"),
    ("pitch.com", "pitch"),
)
GOOGLE_SLIDES_HOST = "docs.google.com"
GOOGLE_SLIDES_SECTION = "presentation"


def _looks_like_bare_host(url: str) -> bool:
    """True for scheme-less links such as "www.youtube.com/watch?v=..."."""
    if url.startswith(("/", ".")):
        return False
    head, sep, _rest = url.partition("/")
    if head.lower().startswith("www."):
        return True
    return "." in head and bool(sep)


def parse_resource_url(url: str, fallback_base: str = DEFAULT_FALLBACK_BASE_URL) -> SplitResult | None:
    """
    Best-effort parse of a resource link.

    Scheme-less hosts get "https://" prepended; bare paths are resolved
    against fallback_base. Returns None when the link cannot be parsed at all.
    """
    raw = url.strip()
    try:
        parts = urlsplit(raw)
        if not parts.scheme and not parts.netloc:
            if _looks_like_bare_host(raw):
                parts = urlsplit(f"https://{raw}")
            else:
                parts = urlsplit(urljoin(fallback_base.rstrip("/") + "/", raw))
        # Accessing hostname validates bracketed IPv6 literals
        parts.hostname
    except ValueError:
        return None
    return parts


def presentation_provider(host: str, path: str) -> str | None:
    """Which presentation service hosts a link: gamma, canva, slides, pitch or None."""
    host = host.lower()
    segments = path.lower().split("/")
    if host == GOOGLE_SLIDES_HOST and len(segments) > 1 and segments[1] == GOOGLE_SLIDES_SECTION:
        return "slides"
    for marker, provider in SMART_PRESENTATION_HOSTS:
        if marker in host:
            return provider
    return None


def is_bare_path(url: str) -> bool:
    """True when a link has neither scheme nor host (e.g. "files/notes.pdf")."""
    raw = url.strip()
    try:
        parts = urlsplit(raw)
    except ValueError:
        return True
    if parts.scheme or parts.netloc:
        return False
    return not _looks_like_bare_host(raw)


def get_extension(path: str) -> str:
    """Lower-cased file extension of a URL path, without the dot."""
    filename = posixpath.basename(unquote(path).rstrip("/"))
    _stem, ext = posixpath.splitext(filename)
    return ext[1:].lower()


def classify(url: str | None, settings: Settings | None = None) -> ResourceType:
    """
    Classify a resource link.

    Never raises and never touches the network. Unknown hosts and extensions
    fall through to "webpage" so the viewer at least attempts an iframe.
    """
    if not url or not url.strip():
        return "text"

    fallback_base = settings.fallback_base_url if settings else DEFAULT_FALLBACK_BASE_URL
    extra_hosts = settings.extra_blocked_hosts if settings else ()

    parts = parse_resource_url(url, fallback_base)
    if parts is None:
        return "webpage"

    host = (parts.hostname or "").lower()
    if is_blocked_host(host, extra_hosts):
        return "blocked"

    if "youtube" in host or "youtu.be" in host:
        return "youtube"
    if "vimeo.com" in host:
        return "vimeo"
    if "drive.google.com" in host:
        return "gdrive"

    if presentation_provider(host, parts.path):
        return "smart_presentation"

    ext = get_extension(parts.path)
    if ext:
        for extensions, resource_type in EXTENSION_TABLE:
            if ext in extensions:
                return resource_type

    return "webpage"
