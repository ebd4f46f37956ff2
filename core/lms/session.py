# core/lms/session.py
"""Explicit token/session store passed to the LMS client."""

from dataclasses import dataclass, replace
from datetime import datetime, timedelta, timezone
from typing import Literal


Role = Literal["admin", "trainer", "student"]
ROLES: tuple[Role, ...] = ("admin", "trainer", "student")

# The backend does not report expiry; tokens are assumed valid for an hour.
TOKEN_LIFETIME = timedelta(hours=1)


@dataclass(frozen=True)
class Session:
    """Credentials and identity of the signed-in user."""

    access_token: str
    refresh_token: str | None = None
    role: Role | None = None
    email: str | None = None
    user_id: str | None = None
    expires_at: datetime | None = None


class SessionStore:
    """Holds the current Session. One store per signed-in user."""

    def __init__(self, session: Session | None = None):
        self._session = session

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def access_token(self) -> str | None:
        return self._session.access_token if self._session else None

    @property
    def refresh_token(self) -> str | None:
        return self._session.refresh_token if self._session else None

    def start(
        self,
        access_token: str,
        refresh_token: str | None,
        role: Role,
        email: str,
        user_id: str | None = None,
        now: datetime | None = None,
    ) -> Session:
        now = now or datetime.now(timezone.utc)
        self._session = Session(
            access_token=access_token,
            refresh_token=refresh_token or None,
            role=role,
            email=email,
            user_id=user_id,
            expires_at=now + TOKEN_LIFETIME,
        )
        return self._session

    def update_access_token(self, access_token: str, now: datetime | None = None) -> None:
        """Swap in a refreshed access token, extending expiry."""
        if self._session is None:
            self._session = Session(access_token=access_token)
            return
        now = now or datetime.now(timezone.utc)
        self._session = replace(
            self._session, access_token=access_token, expires_at=now + TOKEN_LIFETIME
        )

    def clear(self) -> None:
        self._session = None

    def is_authenticated(self, now: datetime | None = None) -> bool:
        """False without a token; an expired session is cleared."""
        if self._session is None or not self._session.access_token:
            return False
        now = now or datetime.now(timezone.utc)
        if self._session.expires_at and now > self._session.expires_at:
            self.clear()
            return False
        return True
