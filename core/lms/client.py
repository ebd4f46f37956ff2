# core/lms/client.py
"""Async client for the remote LMS REST API.

All list endpoints return a bare JSON array. Bodies are validated with
pydantic at this boundary; any other shape raises LMSResponseError.
"""

import logging
import re
from typing import Any, TypeVar
from urllib.parse import urljoin

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from core.config import Settings
from .auth import TokenRefreshAuth
from .errors import AuthenticationError, LMSAPIError, LMSNotFoundError, LMSResponseError
from .models import Domain, Module, Profile, ProfileUpdate, TokenResponse, Topic, User
from .session import ROLES, Role, SessionStore

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

API_VERSION_SUFFIX = re.compile(r"/api/v\d+/?$")
IMAGE_URL_KEYS = ("profile_image_url", "profile_image", "image_url", "avatar_url", "url", "file_url")


def _error_message(response: httpx.Response) -> str:
    """Prefer the backend's detail, then message, then the status line."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        detail = body.get("detail") or body.get("message")
        if isinstance(detail, str) and detail:
            return detail
        if detail:
            return str(detail)
    return f"LMS API returned {response.status_code}"


def _image_url(body: Any) -> str | None:
    """Find the uploaded image location in an upload response."""
    if not isinstance(body, dict):
        return None
    for key in IMAGE_URL_KEYS:
        value = body.get(key)
        if isinstance(value, dict):
            value = value.get("url") or value.get("file_url") or value.get("path")
        if isinstance(value, str) and value:
            return value
    return _image_url(body.get("data"))


def _check_role(role: str) -> Role:
    if role not in ROLES:
        raise ValueError(f"Unknown role: {role}")
    return role


class LMSClient:
    """
    Client for the LMS backend.

    Usage:
        async with LMSClient(settings, store) as client:
            modules = await client.list_modules()
    """

    def __init__(
        self,
        settings: Settings,
        store: SessionStore,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings
        self.store = store
        base_url = settings.lms_api_base_url.rstrip("/")
        self._api_origin = API_VERSION_SUFFIX.sub("", base_url)
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=settings.http_timeout,
            auth=TokenRefreshAuth(store, f"{base_url}/auth/refresh"),
            transport=transport,
        )

    async def __aenter__(self) -> "LMSClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    @property
    def is_closed(self) -> bool:
        return self._http.is_closed

    async def aclose(self) -> None:
        await self._http.aclose()

    # --- Transport helpers ---

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise LMSAPIError(f"{method} {path} failed: {e}") from e

        if response.is_success:
            return response

        message = _error_message(response)
        if response.status_code in (401, 403):
            raise AuthenticationError(message, response.status_code)
        if response.status_code == 404:
            raise LMSNotFoundError(message, response.status_code)
        raise LMSAPIError(message, response.status_code)

    @staticmethod
    def _parse(response: httpx.Response, model: type[T]) -> T:
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise LMSResponseError(f"Unexpected response from {response.url}: {e}") from e

    @staticmethod
    def _parse_list(response: httpx.Response, model: type[T]) -> list[T]:
        try:
            return TypeAdapter(list[model]).validate_python(response.json())
        except (ValueError, ValidationError) as e:
            raise LMSResponseError(f"Unexpected response from {response.url}: {e}") from e

    # --- Auth ---

    async def login(self, email: str, password: str, role: str) -> TokenResponse:
        """Sign in with a role-specific endpoint and start a session."""
        role = _check_role(role)
        response = await self._request(
            "POST", f"/auth/login-{role}", json={"email": email, "password": password}
        )
        tokens = self._parse(response, TokenResponse)
        self.store.start(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            role=role,
            email=email,
            user_id=str(tokens.user_id) if tokens.user_id is not None else None,
        )
        logger.info(f"Signed in {email} as {role}")
        return tokens

    async def logout(self) -> None:
        """Tell the backend to end the session, then forget it locally."""
        try:
            await self._request("POST", "/auth/logout")
        except LMSAPIError as e:
            logger.warning(f"Logout request failed, clearing session anyway: {e}")
        finally:
            self.store.clear()

    # --- Content ---

    async def list_modules(self, limit: int = 100, skip: int = 0) -> list[Module]:
        """Modules assigned to the current trainer or student."""
        response = await self._request("GET", "/modules/", params={"limit": limit, "skip": skip})
        return self._parse_list(response, Module)

    async def list_topics(self, module_id: int, limit: int = 100) -> list[Topic]:
        response = await self._request(
            "GET", "/topics/", params={"module_id": module_id, "limit": limit}
        )
        topics = self._parse_list(response, Topic)
        return [
            t if t.module_id is not None else t.model_copy(update={"module_id": module_id})
            for t in topics
        ]

    async def list_domains(self) -> list[Domain]:
        response = await self._request("GET", "/domains/")
        return self._parse_list(response, Domain)

    # --- Profiles ---

    def _profile_path(self, role: Role) -> str:
        if role == "admin" and self.store.session and self.store.session.user_id:
            return f"/users/{self.store.session.user_id}"
        return f"/profiles/{role}"

    async def get_profile(self, role: str) -> Profile:
        """
        Fetch the signed-in user's profile.

        Admins are fetched from /users/{user_id} when the id is known, since
        not every backend exposes /profiles/admin.
        """
        response = await self._request("GET", self._profile_path(_check_role(role)))
        return self._parse(response, Profile)

    async def save_profile(self, role: str, data: ProfileUpdate, exists: bool) -> Profile:
        """Update an existing profile (PATCH) or create one (POST)."""
        role = _check_role(role)
        method = "PATCH" if exists else "POST"
        response = await self._request(
            method, f"/profiles/{role}", json=data.model_dump(mode="json", exclude_unset=True)
        )
        return self._parse(response, Profile)

    async def upload_profile_image(self, content: bytes, filename: str, content_type: str) -> str:
        """
        Upload a profile photo and return its absolute URL.

        The backend answers with the stored image location under one of a few
        keys; relative locations are resolved against the API origin.
        """
        response = await self._request(
            "POST",
            "/profiles/upload-image",
            files={"file": (filename, content, content_type)},
        )
        try:
            body = response.json()
        except ValueError as e:
            raise LMSResponseError(f"Unexpected response from {response.url}: {e}") from e

        image_url = _image_url(body)
        if not image_url:
            raise LMSResponseError("Upload succeeded but no image URL was returned")
        return urljoin(f"{self._api_origin}/", image_url)

    # --- Users (admin) ---

    async def list_users(
        self,
        role: str | None = None,
        domain_id: int | None = None,
        is_active: bool | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[User]:
        params: dict[str, Any] = {"skip": skip, "limit": limit}
        if role:
            params["role"] = _check_role(role)
        if domain_id is not None:
            params["domain_id"] = domain_id
        if is_active is not None:
            params["is_active"] = str(is_active).lower()
        response = await self._request("GET", "/users/", params=params)
        return self._parse_list(response, User)

    async def update_user(self, user_id: int | str, data: dict[str, Any]) -> User:
        response = await self._request("PATCH", f"/users/{user_id}", json=data)
        return self._parse(response, User)

    async def delete_user(self, user_id: int | str, confirm: bool = False) -> dict[str, Any]:
        """
        Delete a user in two steps.

        With confirm=False the backend only returns a warning describing what
        would be removed; confirm=True performs the deletion.
        """
        response = await self._request(
            "DELETE", f"/users/{user_id}", params={"confirm": str(confirm).lower()}
        )
        try:
            body = response.json() if response.content else {}
        except ValueError as e:
            raise LMSResponseError(f"Unexpected response from {response.url}: {e}") from e
        if not isinstance(body, dict):
            raise LMSResponseError(f"Unexpected response from {response.url}: {body!r}")
        return body

    async def register_user(self, role: str, data: dict[str, Any]) -> User:
        """Create a user through /auth/register-{role}."""
        response = await self._request("POST", f"/auth/register-{_check_role(role)}", json=data)
        return self._parse(response, User)
