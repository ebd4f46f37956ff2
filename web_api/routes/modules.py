"""
Module API routes.

Endpoints:
- GET /api/modules - List the caller's modules
- GET /api/modules/{module_id}/topics - Topics with render directives
- POST /api/modules/{module_id}/topics/{topic_id}/open - Select a topic
- POST /api/modules/{module_id}/topics/{topic_id}/events - Report a viewer event
- GET /api/modules/{module_id}/progress - Module completion
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from core.lms.errors import AuthenticationError
from core.resources.types import CompletionEvent, Topic
from core.viewer.session import TopicNotFoundError, ViewerSession
from web_api.auth import get_viewer

router = APIRouter(prefix="/api", tags=["modules"])


class TopicEvent(BaseModel):
    """An event reported by the viewer (iframe load, video play, ...)."""

    event: CompletionEvent


def serialize_topic(viewer: ViewerSession, module_id: int, topic: Topic) -> dict:
    """Serialize a topic with its classification and render directive."""
    classification, directive = viewer.resolve(topic)
    return {
        "id": topic.id,
        "title": topic.title,
        "orderIndex": topic.order_index,
        "resourceLink": topic.resource_link,
        "classification": classification,
        "directive": directive.to_dict(),
        "completed": viewer.progress.is_complete(module_id, topic.id),
    }


@router.get("/modules")
async def list_modules(viewer: ViewerSession = Depends(get_viewer)):
    """List modules assigned to the caller."""
    try:
        modules = await viewer.catalog.load_modules()
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))

    return {
        "modules": [
            {
                "id": m.id,
                "title": m.title,
                "description": m.description,
                "orderIndex": m.order_index,
            }
            for m in modules
        ],
        "loadFailed": viewer.catalog.modules_failed,
    }


@router.get("/modules/{module_id}/topics")
async def list_topics(module_id: int, viewer: ViewerSession = Depends(get_viewer)):
    """Topics of a module; loadFailed is set when the backend could not be reached."""
    try:
        topics = await viewer.catalog.get_topics(module_id)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))

    return {
        "moduleId": module_id,
        "topics": [serialize_topic(viewer, module_id, t) for t in topics],
        "loadFailed": module_id in viewer.catalog.failed_modules,
        "progress": viewer.progress.completion_ratio(module_id, topics),
    }


@router.post("/modules/{module_id}/topics/{topic_id}/open")
async def open_topic(module_id: int, topic_id: int, viewer: ViewerSession = Depends(get_viewer)):
    """Select a topic for the viewer and return how to render it."""
    try:
        topic, _classification, _directive = await viewer.open_topic(module_id, topic_id)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except TopicNotFoundError:
        raise HTTPException(status_code=404, detail="Topic not found")

    return serialize_topic(viewer, module_id, topic)


@router.post("/modules/{module_id}/topics/{topic_id}/events")
async def report_topic_event(
    module_id: int,
    topic_id: int,
    body: TopicEvent,
    viewer: ViewerSession = Depends(get_viewer),
):
    """Mark a topic complete when the event is its completion trigger."""
    try:
        newly_completed = await viewer.report_event(module_id, topic_id, body.event)
        progress = await viewer.completion_ratio(module_id)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))
    except TopicNotFoundError:
        raise HTTPException(status_code=404, detail="Topic not found")

    return {
        "completed": viewer.progress.is_complete(module_id, topic_id),
        "newlyCompleted": newly_completed,
        "progress": progress,
    }


@router.get("/modules/{module_id}/progress")
async def get_module_progress(module_id: int, viewer: ViewerSession = Depends(get_viewer)):
    """Completion percentage of a module for this viewer session."""
    try:
        topics = await viewer.catalog.get_topics(module_id)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))

    completed = viewer.progress.completed_count(module_id, topics)
    return {
        "moduleId": module_id,
        "progress": {"completed": completed, "total": len(topics)},
        "percent": viewer.progress.completion_ratio(module_id, topics),
    }
