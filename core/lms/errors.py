"""Errors raised by the LMS API client."""


class LMSAPIError(Exception):
    """Raised when the LMS backend request fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(LMSAPIError):
    """Raised on 401/403, including after a failed token refresh."""
    pass


class LMSNotFoundError(LMSAPIError):
    """Raised when the backend answers 404."""
    pass


class LMSResponseError(LMSAPIError):
    """Raised when a response body does not match the documented shape."""
    pass
