"""Client for the remote LMS REST backend."""

from .auth import TokenRefreshAuth
from .client import LMSClient
from .errors import AuthenticationError, LMSAPIError, LMSNotFoundError, LMSResponseError
from .models import Domain, Profile, ProfileUpdate, TokenResponse, User
from .session import ROLES, Role, Session, SessionStore

__all__ = [
    "TokenRefreshAuth",
    "LMSClient",
    "AuthenticationError",
    "LMSAPIError",
    "LMSNotFoundError",
    "LMSResponseError",
    "Domain",
    "Profile",
    "ProfileUpdate",
    "TokenResponse",
    "User",
    "ROLES",
    "Role",
    "Session",
    "SessionStore",
]
