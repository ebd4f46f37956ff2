"""
Resource resolution routes.

Endpoints:
- POST /api/resources/resolve - Classify a link and return its render directive
"""

from fastapi import APIRouter, Request
from pydantic import BaseModel

from core.resources import resolve_topic, Topic

router = APIRouter(prefix="/api/resources", tags=["resources"])


class ResolveRequest(BaseModel):
    """A resource link to preview, optionally with plain-text content."""

    url: str | None = None
    title: str = ""
    content: str | None = None


@router.post("/resolve")
async def resolve_resource(body: ResolveRequest, request: Request):
    """Classify a link the way topic resources are classified."""
    topic = Topic(id=0, title=body.title, content=body.content, resource_link=body.url)
    classification, directive = resolve_topic(topic, request.app.state.settings)
    return {"classification": classification, "directive": directive.to_dict()}
