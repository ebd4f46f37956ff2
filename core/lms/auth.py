# core/lms/auth.py
"""Bearer-token auth with a single refresh attempt on 401."""

import logging
from typing import Generator

import httpx

from .errors import AuthenticationError
from .session import SessionStore

logger = logging.getLogger(__name__)


class TokenRefreshAuth(httpx.Auth):
    """
    Attach the session's access token to every request.

    On a 401 the refresh token is exchanged once via POST /auth/refresh and
    the original request is replayed with the new token. If the refresh
    fails the session is cleared and AuthenticationError is raised.
    """

    requires_response_body = True

    def __init__(self, store: SessionStore, refresh_url: str):
        self.store = store
        self.refresh_url = refresh_url

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        if self.store.access_token:
            request.headers["Authorization"] = f"Bearer {self.store.access_token}"

        response = yield request

        if response.status_code != 401:
            return

        refresh_token = self.store.refresh_token
        if not refresh_token:
            return

        refresh_response = yield httpx.Request(
            "POST", self.refresh_url, json={"refresh_token": refresh_token}
        )

        access_token = _read_access_token(refresh_response)
        if not access_token:
            logger.warning(f"Token refresh failed with status {refresh_response.status_code}")
            self.store.clear()
            raise AuthenticationError("Session expired, please sign in again", 401)

        self.store.update_access_token(access_token)
        request.headers["Authorization"] = f"Bearer {access_token}"
        yield request


def _read_access_token(response: httpx.Response) -> str | None:
    if response.status_code != 200:
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    return body.get("access_token") or None
