"""
Exceptions raised by the ArubaOS API client.

Every public operation raises a subclass of ``ArubaOsApiError``. Each class
carries a short ``kind`` tag so callers can branch on the failure without
parsing messages:

    try:
        await client.api_request("object", object_name="netdst")
    except NotAuthenticatedError:
        await client.login()
    except ResponseFormatError as e:
        print(e.content_type, e.body)
    except ArubaOsApiError as e:
        print(f"{e.kind}: {e}")

Failures that wrap another exception are raised with ``from``, so the
original error is always available as ``__cause__``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


@dataclass
class ArubaOsApiError(Exception):
    """
    Base class for all client errors.

    Attributes:
        message: Human-readable summary naming the failed operation.
        status_code: HTTP status code when the failure came from a response,
            0 otherwise.
        detail: Message of the underlying cause, if any.
    """

    kind: ClassVar[str] = "api-error"

    message: str
    status_code: int = 0
    detail: str = ""

    def __str__(self) -> str:
        """Return a formatted error message."""
        if self.detail:
            return f"{self.message}: {self.detail}"
        return self.message


# =============================================================================
# PRECONDITION ERRORS (raised before any network call)
# =============================================================================


class NotAuthenticatedError(ArubaOsApiError):
    """``api_request`` was called without a session token."""

    kind: ClassVar[str] = "unauthenticated"


class RequestShapeError(ArubaOsApiError):
    """A request carried both a write payload and GET modifiers."""

    kind: ClassVar[str] = "conflicting-request-shape"


# =============================================================================
# OPERATION ERRORS (raised after a network call was attempted)
# =============================================================================


class LoginError(ArubaOsApiError):
    """Login failed: transport error, bad response, or no token returned."""

    kind: ClassVar[str] = "login-failure"


class LogoutError(ArubaOsApiError):
    """Logout request failed. The local session is cleared regardless."""

    kind: ClassVar[str] = "logout-failure"


class RequestError(ArubaOsApiError):
    """A configuration request failed in transport or while parsing."""

    kind: ClassVar[str] = "request-failure"


@dataclass
class ResponseFormatError(RequestError):
    """
    The controller answered with something other than JSON.

    This usually means the session expired and the controller served its
    HTML login page instead.

    Attributes:
        content_type: The declared Content-Type header ("" if missing).
        body: The raw response body.
    """

    kind: ClassVar[str] = "response-format"

    content_type: str = ""
    body: str = ""
