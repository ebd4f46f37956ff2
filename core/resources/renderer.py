# core/resources/renderer.py
"""Pick a rendering strategy for a classified topic resource.

Every iframe-based directive carries an external URL so the viewer can
always offer "open in new tab": frame refusals (X-Frame-Options, CSP
frame-ancestors) are invisible to the embedding page.
"""

import ipaddress
import logging
import re
from urllib.parse import quote

from core.config import DEFAULT_DOCUMENT_VIEWER_URL, DEFAULT_FALLBACK_BASE_URL, Settings
from .classifier import classify, is_bare_path, parse_resource_url
from .embed import to_embed_url
from .types import RenderDirective, ResourceType, Topic

logger = logging.getLogger(__name__)


IFRAME_SANDBOX = "allow-scripts allow-same-origin allow-popups allow-forms allow-presentation"
PLAYER_ALLOW = (
    "accelerometer; autoplay; clipboard-write; encrypted-media; "
    "gyroscope; picture-in-picture; fullscreen"
)

YOUTUBE_ID = re.compile(
    r"(?:youtube(?:-nocookie)?\.com/(?:(?:v|e(?:mbed)?|shorts|live)/|\S*?[?&]v=)|youtu\.be/)"
    r"([a-zA-Z0-9_-]{11})",
    re.IGNORECASE,
)

LOCAL_HOSTNAMES = frozenset({"localhost", "0.0.0.0"})

OFFICE_TYPES = frozenset({"document", "powerpoint", "excel"})

BLOCKED_MESSAGE = "This site doesn't allow its content to be embedded. Open it in a new tab to view it."
AUDIO_MESSAGE = "Audio can't be played inside the viewer. Open it in a new tab to listen."
LOCAL_FILE_MESSAGE = "This file is stored locally and can't be previewed online. Open it directly instead."
UNAVAILABLE_MESSAGE = "This resource can't be displayed here. Open it in a new tab to view it."


def absolute_resource_url(url: str, fallback_base: str = DEFAULT_FALLBACK_BASE_URL) -> str:
    """
    The link a browser should load: scheme-less hosts gain "https://".

    Bare paths and non-http(s) links are returned unchanged.
    """
    if is_bare_path(url):
        return url
    parts = parse_resource_url(url, fallback_base)
    if parts is None or parts.scheme not in ("http", "https"):
        return url
    return parts.geturl()


def extract_youtube_id(url: str) -> str | None:
    """11-character video id from watch, short, embed, shorts and live URLs."""
    match = YOUTUBE_ID.search(url)
    return match.group(1) if match else None


def extract_vimeo_id(url: str) -> str | None:
    """Vimeo video id: the last path segment."""
    parts = parse_resource_url(url)
    if parts is None:
        return None
    segments = [s for s in parts.path.split("/") if s]
    return segments[-1] if segments else None


def is_local_resource(url: str, fallback_base: str = DEFAULT_FALLBACK_BASE_URL) -> bool:
    """
    True when a link points at this machine or a private network, or is a
    bare path; public document viewers cannot fetch such files.
    """
    if is_bare_path(url):
        return True

    parts = parse_resource_url(url, fallback_base)
    if parts is None:
        return True

    host = (parts.hostname or "").lower()
    if not host or host in LOCAL_HOSTNAMES or host.endswith(".local"):
        return True

    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        return False
    return address.is_loopback or address.is_private or address.is_link_local


def fallback_panel(
    url: str | None,
    resource_type: ResourceType,
    message: str = UNAVAILABLE_MESSAGE,
) -> RenderDirective:
    """A message with a direct "open externally" action."""
    return RenderDirective(
        kind="fallback-panel",
        resource_type=resource_type,
        external_url=url,
        completion_event="open",
        message=message,
    )


def _iframe(
    src: str,
    external_url: str,
    resource_type: ResourceType,
    sandbox: str | None = IFRAME_SANDBOX,
    allow: str | None = None,
    may_fail_silently: bool = False,
) -> RenderDirective:
    return RenderDirective(
        kind="iframe",
        resource_type=resource_type,
        src=src,
        external_url=external_url,
        sandbox=sandbox,
        allow=allow,
        completion_event="load",
        may_fail_silently=may_fail_silently,
    )


def _render_player(url: str, classification: ResourceType) -> RenderDirective:
    if classification == "youtube":
        video_id = extract_youtube_id(url)
        src = f"https://www.youtube.com/embed/{video_id}" if video_id else None
    else:
        video_id = extract_vimeo_id(url)
        src = f"https://player.vimeo.com/video/{video_id}" if video_id else None

    if not src:
        logger.info(f"No {classification} video id in {url!r}, showing fallback panel")
        return fallback_panel(url, classification)

    # Provider players need their own origin; they are not sandboxed.
    return _iframe(src, url, classification, sandbox=None, allow=PLAYER_ALLOW)


def _render_document(url: str, classification: ResourceType, settings: Settings | None) -> RenderDirective:
    fallback_base = settings.fallback_base_url if settings else DEFAULT_FALLBACK_BASE_URL
    if is_local_resource(url, fallback_base):
        return fallback_panel(url, classification, LOCAL_FILE_MESSAGE)

    if classification == "pdf":
        return _iframe(url, url, classification)

    viewer = settings.document_viewer_url if settings else DEFAULT_DOCUMENT_VIEWER_URL
    return _iframe(f"{viewer}{quote(url, safe='')}", url, classification)


def _render_webpage(url: str, settings: Settings | None) -> RenderDirective:
    fallback_base = settings.fallback_base_url if settings else DEFAULT_FALLBACK_BASE_URL
    parts = None if is_bare_path(url) else parse_resource_url(url, fallback_base)
    if parts is None or parts.scheme not in ("http", "https"):
        return fallback_panel(url, "webpage")

    src = parts.geturl()
    return _iframe(src, src, "webpage", may_fail_silently=True)


def render(
    topic: Topic,
    classification: ResourceType,
    embed_url: str | None,
    settings: Settings | None = None,
) -> RenderDirective:
    """
    Build the render directive for a topic.

    Args:
        topic: The topic being shown
        classification: Result of classify() on the topic's resource link
        embed_url: Result of to_embed_url(); None means untransformable
        settings: Viewer configuration (document viewer, fallback base)

    Returns:
        RenderDirective for the viewer
    """
    url = topic.resource_link

    if classification == "text" or not url:
        return RenderDirective(
            kind="text",
            resource_type="text",
            content=topic.content or "",
            completion_event="view",
        )

    fallback_base = settings.fallback_base_url if settings else DEFAULT_FALLBACK_BASE_URL
    url = absolute_resource_url(url, fallback_base)

    if classification == "blocked":
        return fallback_panel(url, "blocked", BLOCKED_MESSAGE)

    if classification == "audio":
        # A fallback panel that also hands the viewer the audio source.
        return RenderDirective(
            kind="native-audio-fallback",
            resource_type="audio",
            src=url,
            external_url=url,
            completion_event="open",
            message=AUDIO_MESSAGE,
        )

    if classification in ("youtube", "vimeo"):
        return _render_player(url, classification)

    if classification == "video":
        return RenderDirective(
            kind="native-video",
            resource_type="video",
            src=url,
            external_url=url,
            completion_event="play",
        )

    if classification == "image":
        return RenderDirective(
            kind="native-image",
            resource_type="image",
            src=url,
            external_url=url,
            completion_event="load",
        )

    if classification == "pdf" or classification in OFFICE_TYPES:
        return _render_document(url, classification, settings)

    if classification in ("gdrive", "smart_presentation"):
        if not embed_url:
            logger.info(f"Could not build embed URL for {url!r}, showing fallback panel")
            return fallback_panel(url, classification)
        return _iframe(embed_url, url, classification, allow="fullscreen")

    return _render_webpage(url, settings)


def resolve_topic(topic: Topic, settings: Settings | None = None) -> tuple[ResourceType, RenderDirective]:
    """Classify, transform and render a topic's resource in one pass."""
    if not topic.resource_link:
        return "text", render(topic, "text", None, settings)

    classification = classify(topic.resource_link, settings)
    embed_url = to_embed_url(topic.resource_link, classification)
    return classification, render(topic, classification, embed_url, settings)
