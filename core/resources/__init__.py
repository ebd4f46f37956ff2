"""Resource classification and rendering for topic links."""

from .classifier import classify, get_extension, parse_resource_url
from .denylist import BLOCKED_HOSTS, is_blocked_host
from .embed import extract_gdrive_id, to_embed_url
from .renderer import (
    extract_vimeo_id,
    extract_youtube_id,
    is_local_resource,
    render,
    resolve_topic,
)
from .types import (
    CompletionEvent,
    DirectiveKind,
    Module,
    RenderDirective,
    ResourceType,
    Topic,
    ViewMode,
)

__all__ = [
    "classify",
    "get_extension",
    "parse_resource_url",
    "BLOCKED_HOSTS",
    "is_blocked_host",
    "extract_gdrive_id",
    "to_embed_url",
    "extract_vimeo_id",
    "extract_youtube_id",
    "is_local_resource",
    "render",
    "resolve_topic",
    "CompletionEvent",
    "DirectiveKind",
    "Module",
    "RenderDirective",
    "ResourceType",
    "Topic",
    "ViewMode",
]
