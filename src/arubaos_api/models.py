"""
Request and session models shared by the client.

``RequestSpec`` describes one configuration request; ``SessionState`` holds
the token issued by the controller at login.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from arubaos_api.modifiers import GetModifiers

# =============================================================================
# REQUEST SPEC
# =============================================================================


class RequestType(str, Enum):
    """Whether a request targets single objects or containers of objects."""

    OBJECT = "object"
    CONTAINER = "container"


@dataclass(frozen=True)
class RequestSpec:
    """
    One configuration request.

    A request with a ``payload`` is a Set (POST); without one it is a Get
    (GET). An empty payload still counts as present, which is what
    ``write_memory`` expects.

    Attributes:
        request_type: ``object`` or ``container``.
        object_name: Name of a specific object or container. Omit to list
            all of them.
        payload: Body of a Set request.
        config_path: Config node for this request only.
        get_modifiers: Query refinements for a Get request, as a
            ``GetModifiers`` or a plain mapping.

    Example:
        spec = RequestSpec(RequestType.OBJECT, object_name="netdst")
        print(spec.path)  # "/object/netdst"
    """

    request_type: RequestType
    object_name: str | None = None
    payload: Mapping[str, Any] | None = None
    config_path: str | None = None
    get_modifiers: GetModifiers | Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "request_type", RequestType(self.request_type))

    @property
    def is_write(self) -> bool:
        """True when the request carries a payload (sent as POST)."""
        return self.payload is not None

    @property
    def has_conflicting_shape(self) -> bool:
        """True when both a payload and GET modifiers were given."""
        return self.payload is not None and self.get_modifiers is not None

    @property
    def path(self) -> str:
        """Path below ``/configuration`` used in URLs and error messages."""
        if self.object_name:
            return f"/{self.request_type.value}/{self.object_name}"
        return f"/{self.request_type.value}"


# =============================================================================
# SESSION STATE
# =============================================================================


@dataclass
class SessionState:
    """
    Tracks the controller session of one client.

    Attributes:
        token: The ``UIDARUBA`` value returned by login. None if not
            authenticated.
    """

    token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        """Check if we have an active session."""
        return bool(self.token)

    def clear(self) -> None:
        """Clear the session (logout)."""
        self.token = None
