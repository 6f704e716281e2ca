from __future__ import annotations

"""Centralized, structured exception hierarchy for the SafeZone client.

Every error carries a machine-readable `code` for programmatic handling and a
human-readable `message` suitable for display. API errors additionally carry
the HTTP status they were classified from.

The hierarchy is designed to:
- Mirror the backend's error classes by HTTP status.
- Keep transport failures (`NetworkError`) apart from status-mapped errors.
- Give the UI layer one terminal condition, `SessionExpiredError`, meaning
  the local session has already been cleared and the user must log in again.
- Support internationalization of default messages.
"""

from typing import Final, Optional

from safezone.utils.i18n import get_translated_message

__all__: Final = [
    "SafeZoneError",
    "ApiError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "UnknownApiError",
    "NetworkError",
    "SessionExpiredError",
    "RefreshError",
    "StorageError",
    "error_for_status",
    "get_error_message",
]


class SafeZoneError(Exception):
    """Base exception class for all custom errors in the SafeZone client.

    Attributes:
        message (str): A human-readable error message, possibly translated.
        code (str): A unique, machine-readable error code.
    """

    message: str
    code: str = "generic_error"

    def __init__(self, message: str, code: str = "generic_error"):
        self.message = message
        self.code = code
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Status-mapped API errors
# ---------------------------------------------------------------------------


class ApiError(SafeZoneError):
    """Raised when the backend answers with a non-2xx status.

    Attributes:
        status_code (int): The HTTP status the error was classified from.
        kind (str): The status class name (``BadRequest``, ``NotFound``...).
    """

    kind: str = "Unknown"
    default_message_key: str = "unknown_api_error"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: int = 0,
        code: str = "api_error",
    ):
        self.status_code = status_code
        if message is None:
            message = get_translated_message(self.default_message_key, status_code=status_code)
        super().__init__(message, code)


class BadRequestError(ApiError):
    """400 Bad Request."""

    kind = "BadRequest"
    default_message_key = "bad_request"

    def __init__(self, message: Optional[str] = None, status_code: int = 400, code: str = "bad_request"):
        super().__init__(message, status_code, code)


class UnauthorizedError(ApiError):
    """401 Unauthorized.

    Normally intercepted by the refresh coordinator; callers only see it for
    public endpoints or when no credential was held.
    """

    kind = "Unauthorized"
    default_message_key = "unauthorized"

    def __init__(self, message: Optional[str] = None, status_code: int = 401, code: str = "unauthorized"):
        super().__init__(message, status_code, code)


class ForbiddenError(ApiError):
    """403 Forbidden.

    Also raised with ``code="reauthentication_rejected"`` when a request
    replayed with a freshly refreshed credential is still answered with 401.
    """

    kind = "Forbidden"
    default_message_key = "forbidden"

    def __init__(self, message: Optional[str] = None, status_code: int = 403, code: str = "forbidden"):
        super().__init__(message, status_code, code)


class NotFoundError(ApiError):
    """404 Not Found."""

    kind = "NotFound"
    default_message_key = "not_found"

    def __init__(self, message: Optional[str] = None, status_code: int = 404, code: str = "not_found"):
        super().__init__(message, status_code, code)


class ConflictError(ApiError):
    """409 Conflict."""

    kind = "Conflict"
    default_message_key = "conflict"

    def __init__(self, message: Optional[str] = None, status_code: int = 409, code: str = "conflict"):
        super().__init__(message, status_code, code)


class UnknownApiError(ApiError):
    """Any other non-2xx status, or a 2xx body that could not be decoded."""

    kind = "Unknown"

    def __init__(self, message: Optional[str] = None, status_code: int = 0, code: str = "unknown_api_error"):
        super().__init__(message, status_code, code)


_STATUS_ERRORS = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
}


def error_for_status(status_code: int, message: Optional[str] = None) -> ApiError:
    """Builds the API error matching an HTTP status.

    Args:
        status_code: The response status, expected to be non-2xx.
        message: The server-provided message; the localized default is used
            when it is missing or blank.
    """
    if not message:
        message = None
    error_cls = _STATUS_ERRORS.get(status_code)
    if error_cls is None:
        return UnknownApiError(message, status_code=status_code)
    return error_cls(message)


# ---------------------------------------------------------------------------
# Transport and session errors
# ---------------------------------------------------------------------------


class NetworkError(SafeZoneError):
    """Raised for transport-level failures: DNS, refused connection, timeout.

    Never carries a status code.
    """

    status_code = None

    def __init__(self, message: Optional[str] = None, code: str = "network_error"):
        if message is None:
            message = get_translated_message("network_error")
        super().__init__(message, code)


class SessionExpiredError(UnauthorizedError):
    """Raised only by the refresh coordinator when a refresh exchange fails.

    By the time it is raised the local credentials are already cleared, so
    the UI can assume a consistent logged-out state and ask the user to log in.
    """

    kind = "SessionExpired"
    default_message_key = "session_expired"

    def __init__(self, message: Optional[str] = None, code: str = "session_expired"):
        super().__init__(message, 401, code)


class RefreshError(SafeZoneError):
    """Raised when a refresh-credential exchange cannot complete.

    The code names the reason: ``refresh_token_missing``,
    ``refresh_response_invalid``, ``refresh_timeout`` or
    ``refresh_interrupted``.
    """

    def __init__(self, message: Optional[str] = None, code: str = "refresh_failed"):
        if message is None:
            message = get_translated_message(code)
        super().__init__(message, code)


class StorageError(SafeZoneError):
    """Raised when persisted credentials cannot be written."""

    def __init__(self, message: Optional[str] = None, code: str = "storage_write_failed"):
        if message is None:
            message = get_translated_message("storage_write_failed")
        super().__init__(message, code)


def get_error_message(error: BaseException, locale: Optional[str] = None) -> str:
    """Returns the text to show a user for any error raised by the client.

    Network errors render a generic connectivity message, an expired session
    prompts re-authentication, and other structured errors surface their
    (server-provided when present) message verbatim.
    """
    if isinstance(error, SessionExpiredError):
        return get_translated_message("session_expired", locale)
    if isinstance(error, NetworkError):
        return get_translated_message("network_error", locale)
    if isinstance(error, SafeZoneError):
        return error.message
    return get_translated_message("unknown_error", locale)
