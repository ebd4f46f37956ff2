"""
Sign-in and profile routes, proxied to the LMS backend.

Endpoints:
- POST /api/auth/login - Sign in as admin, trainer or student
- POST /api/auth/logout - End the session and drop viewer state
- GET /api/profile - Profile of the signed-in user
- PATCH /api/profile - Create or update that profile
- POST /api/profile/image - Upload a profile photo
"""

from typing import Any

from fastapi import APIRouter, Depends, File, Header, HTTPException, Request, UploadFile
from pydantic import BaseModel

from core.lms.errors import AuthenticationError, LMSAPIError, LMSNotFoundError
from core.lms.models import ProfileUpdate
from core.lms.session import Role
from core.viewer.session import ViewerSession
from web_api.auth import ViewerRegistry, get_viewer

router = APIRouter(prefix="/api", tags=["session"])


class LoginRequest(BaseModel):
    email: str
    password: str
    role: Role


def _require_role(viewer: ViewerSession) -> Role:
    session = viewer.client.store.session
    if session is None or session.role is None:
        raise HTTPException(401, "Sign in required")
    return session.role


@router.post("/auth/login")
async def login(body: LoginRequest, viewer: ViewerSession = Depends(get_viewer)) -> dict[str, Any]:
    try:
        tokens = await viewer.client.login(body.email, body.password, body.role)
    except AuthenticationError:
        raise HTTPException(401, "Login failed. Please check your credentials.")
    except LMSAPIError as e:
        raise HTTPException(502, str(e))

    return {
        "accessToken": tokens.access_token,
        "role": body.role,
        "email": body.email,
    }


@router.post("/auth/logout")
async def logout(
    request: Request,
    viewer: ViewerSession = Depends(get_viewer),
    x_viewer_session: str = Header(...),
) -> dict[str, Any]:
    await viewer.client.logout()
    registry: ViewerRegistry = request.app.state.viewers
    await registry.discard(x_viewer_session)
    return {"status": "ok"}


@router.get("/profile")
async def get_profile(viewer: ViewerSession = Depends(get_viewer)) -> dict[str, Any]:
    role = _require_role(viewer)
    try:
        profile = await viewer.client.get_profile(role)
    except AuthenticationError as e:
        raise HTTPException(401, str(e))
    except LMSNotFoundError:
        return {"role": role, "profile": None}
    except LMSAPIError as e:
        raise HTTPException(502, str(e))

    return {"role": role, "profile": profile.model_dump(mode="json")}


@router.patch("/profile")
async def save_profile(
    updates: ProfileUpdate,
    viewer: ViewerSession = Depends(get_viewer),
) -> dict[str, Any]:
    """Update the profile, creating it first if the backend has none."""
    role = _require_role(viewer)
    try:
        try:
            await viewer.client.get_profile(role)
            exists = True
        except LMSNotFoundError:
            exists = False
        profile = await viewer.client.save_profile(role, updates, exists=exists)
    except AuthenticationError as e:
        raise HTTPException(401, str(e))
    except LMSAPIError as e:
        raise HTTPException(502, str(e))

    return {"status": "updated", "profile": profile.model_dump(mode="json")}


@router.post("/profile/image")
async def upload_profile_image(
    file: UploadFile = File(...),
    viewer: ViewerSession = Depends(get_viewer),
) -> dict[str, Any]:
    """Upload a profile photo; the returned URL can be saved with PATCH /api/profile."""
    _require_role(viewer)
    content_type = file.content_type or ""
    if not content_type.startswith("image/"):
        raise HTTPException(415, "Profile photo must be an image")

    content = await file.read()
    try:
        image_url = await viewer.client.upload_profile_image(
            content, file.filename or "profile-image", content_type
        )
    except AuthenticationError as e:
        raise HTTPException(401, str(e))
    except LMSAPIError as e:
        raise HTTPException(502, str(e))

    return {"profileImageUrl": image_url}
