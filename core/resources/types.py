"""
Type definitions for learning content and render directives.
"""

from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel


ResourceType = Literal[
    "youtube",
    "vimeo",
    "gdrive",
    "smart_presentation",
    "pdf",
    "powerpoint",
    "document",
    "excel",
    "video",
    "image",
    "audio",
    "blocked",
    "webpage",
    "text",
]

DirectiveKind = Literal[
    "iframe",
    "native-video",
    "native-audio-fallback",
    "native-image",
    "fallback-panel",
    "text",
]

# Events a viewer reports back when a resource is shown.
CompletionEvent = Literal["load", "play", "open", "view"]

ViewMode = Literal["default", "theater", "fullscreen"]


class Module(BaseModel):
    """A named grouping of topics, as returned by GET /modules/."""

    id: int
    title: str
    description: str | None = None
    order_index: int = 0


class Topic(BaseModel):
    """A single learning unit, as returned by GET /topics/."""

    id: int
    title: str
    content: str | None = None
    resource_link: str | None = None
    order_index: int = 0
    module_id: int | None = None


@dataclass(frozen=True)
class RenderDirective:
    """How a viewer should display one topic's resource."""

    kind: DirectiveKind
    resource_type: ResourceType
    src: str | None = None
    external_url: str | None = None  # Target of the "open externally" action
    sandbox: str | None = None
    allow: str | None = None
    completion_event: CompletionEvent | None = None
    may_fail_silently: bool = False  # Cross-origin frames can refuse without notice
    message: str | None = None
    content: str | None = None  # Plain text body for "text" directives

    @property
    def is_fallback_panel(self) -> bool:
        return self.kind in ("fallback-panel", "native-audio-fallback")

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "resourceType": self.resource_type,
            "src": self.src,
            "externalUrl": self.external_url,
            "sandbox": self.sandbox,
            "allow": self.allow,
            "completionEvent": self.completion_event,
            "mayFailSilently": self.may_fail_silently,
            "message": self.message,
            "content": self.content,
        }
