"""
View mode routes.

Endpoints:
- GET /api/view-mode - Current layout state
- POST /api/view-mode/cycle - default -> theater -> fullscreen -> default
- POST /api/view-mode/key - Apply a keyboard shortcut
- POST /api/view-mode/tab - Switch the theater module tab
- POST /api/view-mode/accordion - Expand or collapse a module in the default view
- POST /api/view-mode/reset - Reset after navigation
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from core.lms.errors import AuthenticationError
from core.viewer.session import ViewerSession
from web_api.auth import get_viewer

router = APIRouter(prefix="/api/view-mode", tags=["view-mode"])


class KeyPress(BaseModel):
    key: str
    focus: str | None = None  # Tag name of the focused element


class ModuleTarget(BaseModel):
    module_id: int


def serialize_view(viewer: ViewerSession) -> dict:
    view = viewer.view
    return {
        "mode": view.mode,
        "selected": (
            {"moduleId": view.selected[0], "topicId": view.selected[1]}
            if view.selected
            else None
        ),
        "browsingModuleId": view.browsing_module_id,
        "expandedModules": sorted(view.expanded_modules),
    }


@router.get("")
async def get_view_mode(viewer: ViewerSession = Depends(get_viewer)):
    return serialize_view(viewer)


@router.post("/cycle")
async def cycle_view_mode(viewer: ViewerSession = Depends(get_viewer)):
    viewer.view.cycle()
    return serialize_view(viewer)


@router.post("/key")
async def press_key(body: KeyPress, viewer: ViewerSession = Depends(get_viewer)):
    handled = viewer.view.handle_key(body.key, body.focus)
    return {**serialize_view(viewer), "handled": handled}


@router.post("/tab")
async def switch_tab(body: ModuleTarget, viewer: ViewerSession = Depends(get_viewer)):
    """Load the module's playlist for the theater tab strip."""
    try:
        topics = await viewer.view.switch_tab(body.module_id)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))

    return {
        **serialize_view(viewer),
        "topics": [{"id": t.id, "title": t.title} for t in topics],
        "loadFailed": body.module_id in viewer.catalog.failed_modules,
    }


@router.post("/reset")
async def reset_view_mode(viewer: ViewerSession = Depends(get_viewer)):
    viewer.navigate_away()
    return serialize_view(viewer)


@router.post("/accordion")
async def toggle_accordion(body: ModuleTarget, viewer: ViewerSession = Depends(get_viewer)):
    """Expand or collapse a module in the default view."""
    try:
        topics = await viewer.view.toggle_module(body.module_id)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=str(e))

    return {
        **serialize_view(viewer),
        "topics": [{"id": t.id, "title": t.title} for t in topics] if topics is not None else None,
    }
