# web_api/auth.py
"""Viewer session lookup for API requests.

Each browser tab identifies its viewer state with an X-Viewer-Session
header. The caller's LMS bearer token is forwarded to the backend.
"""

import logging
import time
from collections import OrderedDict
from typing import Callable

import httpx
from fastapi import Header, HTTPException, Request

from core.config import Settings
from core.lms.client import LMSClient
from core.lms.session import SessionStore
from core.viewer.session import ViewerSession

logger = logging.getLogger(__name__)


class ViewerRegistry:
    """
    In-memory viewer sessions keyed by the X-Viewer-Session header.

    Sessions idle for longer than settings.viewer_idle_timeout are closed on
    the next lookup, and the least recently used session is closed when
    settings.max_viewers would be exceeded. Evicted sessions have their
    LMS client closed.
    """

    def __init__(
        self,
        settings: Settings,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.settings = settings
        self._transport = transport
        self._clock = clock
        # Ordered from least to most recently used
        self._viewers: OrderedDict[str, ViewerSession] = OrderedDict()
        self._last_seen: dict[str, float] = {}

    def __len__(self) -> int:
        return len(self._viewers)

    def __contains__(self, key: str) -> bool:
        return key in self._viewers

    async def get(self, key: str, access_token: str | None = None) -> ViewerSession:
        now = self._clock()
        evicted = self._pop_idle(now)

        viewer = self._viewers.get(key)
        if viewer is None:
            while len(self._viewers) >= max(self.settings.max_viewers, 1):
                oldest = next(iter(self._viewers))
                logger.info(f"Viewer limit reached, closing session {oldest[:8]}")
                evicted.append(self._pop(oldest))
            client = LMSClient(self.settings, SessionStore(), transport=self._transport)
            viewer = ViewerSession(client, self.settings)
            self._viewers[key] = viewer
            logger.info(f"Created viewer session {key[:8]}")
        else:
            self._viewers.move_to_end(key)
        self._last_seen[key] = now

        if access_token and viewer.client.store.access_token != access_token:
            viewer.client.store.update_access_token(access_token)

        for stale in evicted:
            await self._close(stale)
        return viewer

    def _pop(self, key: str) -> ViewerSession | None:
        self._last_seen.pop(key, None)
        return self._viewers.pop(key, None)

    def _pop_idle(self, now: float) -> list[ViewerSession]:
        timeout = self.settings.viewer_idle_timeout
        idle = [key for key, seen in self._last_seen.items() if now - seen > timeout]
        for key in idle:
            logger.info(f"Closing idle viewer session {key[:8]}")
        return [self._pop(key) for key in idle]

    @staticmethod
    async def _close(viewer: ViewerSession | None) -> None:
        if viewer is not None:
            viewer.end()
            await viewer.client.aclose()

    async def discard(self, key: str) -> None:
        await self._close(self._pop(key))

    async def aclose(self) -> None:
        for key in list(self._viewers):
            await self.discard(key)


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _sep, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_viewer(
    request: Request,
    x_viewer_session: str | None = Header(None),
    authorization: str | None = Header(None),
) -> ViewerSession:
    """FastAPI dependency returning the caller's ViewerSession."""
    if not x_viewer_session:
        raise HTTPException(401, "Viewer session required")

    registry: ViewerRegistry = request.app.state.viewers
    return await registry.get(x_viewer_session, _bearer_token(authorization))
