"""
Async client for the ArubaOS controller configuration API.

The client logs in once, keeps the session token the controller hands out,
and sends it with every configuration request. It must be used as an async
context manager so the underlying HTTP transport is closed:

    config = ClientConfig(host="10.1.1.1", username="admin", password="secret")

    async with ArubaOsApiClient(config) as client:
        await client.login()
        netdst = await client.api_request("object", "netdst")
        await client.logout()

Requests with a ``payload`` are Sets (POST with a JSON body); requests
without one are Gets (GET), optionally refined with ``GetModifiers``.
Every failure surfaces as a subclass of ``ArubaOsApiError``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote, urlencode

import httpx

from arubaos_api.config import ClientConfig
from arubaos_api.exceptions import (
    LoginError,
    LogoutError,
    NotAuthenticatedError,
    RequestError,
    RequestShapeError,
    ResponseFormatError,
)
from arubaos_api.models import RequestSpec, RequestType, SessionState
from arubaos_api.modifiers import GetModifiers, encode_get_modifiers

logger = logging.getLogger(__name__)

# The controller expects this exact header value, trailing semicolon included.
REQUEST_HEADERS = {"Content-Type": "application/json;"}

JSON_MEDIA_TYPE = "application/json"


def _status_code(exc: BaseException) -> int:
    """Return the HTTP status carried by an exception, 0 if it has none."""
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code
    return 0


def _session_token(data: Any) -> str | None:
    """Extract ``_global_result.UIDARUBA`` from a login response."""
    if not isinstance(data, dict):
        return None
    global_result = data.get("_global_result")
    if not isinstance(global_result, dict):
        return None
    token = global_result.get("UIDARUBA")
    return token if isinstance(token, str) and token else None


def _check_json_response(response: httpx.Response) -> None:
    """
    Verify that a response declares a JSON body.

    Raises:
        ResponseFormatError: If the media type is not application/json.
    """
    content_type = response.headers.get("content-type", "")
    media_type = content_type.split(";")[0].strip().lower()
    if media_type != JSON_MEDIA_TYPE:
        raise ResponseFormatError(
            message=f"Content-Type received is not '{JSON_MEDIA_TYPE}', it is '{content_type}'",
            status_code=response.status_code,
            detail=response.text,
            content_type=content_type,
            body=response.text,
        )


# =============================================================================
# API CLIENT
# =============================================================================


@dataclass
class ArubaOsApiClient:
    """
    Async HTTP client for one controller session.

    Attributes:
        config: Connection settings, fixed for the life of the client.
        session: Current session state. Set by ``login()``, cleared by
            ``logout()``.

    Example:
        async with ArubaOsApiClient(ClientConfig.from_env()) as client:
            await client.login()
            acls = await client.api_request(
                "object",
                "acl_sess",
                get_modifiers=GetModifiers(paginate=Paginate(limit=5, offset=1)),
            )
    """

    config: ClientConfig
    session: SessionState = field(default_factory=SessionState)

    # Private attributes for the HTTP client
    _http_client: httpx.AsyncClient | None = field(default=None, repr=False)

    # -------------------------------------------------------------------------
    # Context Manager Protocol
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> ArubaOsApiClient:
        """
        Enter the async context manager.

        Creates the underlying httpx.AsyncClient with the configured TLS
        verification and timeout.
        """
        self._http_client = httpx.AsyncClient(
            verify=self.config.verify_ssl,
            timeout=self.config.timeout,
        )
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Close the underlying HTTP client. The session token is kept."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None

    @property
    def http_client(self) -> httpx.AsyncClient:
        """
        Get the HTTP client, ensuring it's been initialized.

        Raises:
            RuntimeError: If accessed outside of async context manager.
        """
        if self._http_client is None:
            raise RuntimeError(
                "ArubaOsApiClient must be used as an async context manager. "
                "Use 'async with ArubaOsApiClient(config) as client:'"
            )
        return self._http_client

    # -------------------------------------------------------------------------
    # Authentication Methods
    # -------------------------------------------------------------------------

    async def login(self) -> dict[str, Any]:
        """
        Log into the controller with the configured credentials.

        On success the session token (``_global_result.UIDARUBA``) is stored
        and used by every following ``api_request()``.

        Returns:
            dict: The parsed login response, e.g.
                ``{"_global_result": {"UIDARUBA": "...", "status": "0",
                "status_str": "You've logged in successfully."}}``

        Raises:
            LoginError: If the request fails, the body is not JSON, or no
                token was returned. The session is left unauthenticated.
        """
        try:
            response = await self.http_client.post(
                f"{self.config.base_url}/api/login",
                content=urlencode(
                    {"username": self.config.username, "password": self.config.password}
                ),
                headers=REQUEST_HEADERS,
            )
            response.raise_for_status()
        except Exception as e:
            raise LoginError(
                message="Failed to login",
                status_code=_status_code(e),
                detail=str(e),
            ) from e

        try:
            data = response.json()
        except ValueError as e:
            raise LoginError(
                message="Failed to login",
                status_code=response.status_code,
                detail=f"Invalid JSON response: {e}",
            ) from e

        token = _session_token(data)
        if token is None:
            # A rejected login still answers 200, with the reason in status_str
            global_result = data.get("_global_result") if isinstance(data, dict) else None
            reason = ""
            if isinstance(global_result, dict):
                reason = str(global_result.get("status_str") or "")
            raise LoginError(
                message="Failed to login",
                status_code=response.status_code,
                detail=reason or "No session token (_global_result.UIDARUBA) in response",
            )

        self.session.token = token
        logger.info("Logged in to %s as %s", self.config.host, self.config.username)
        return dict(data)

    async def logout(self) -> Any:
        """
        Log out of the controller.

        The local session is always cleared, whether or not the controller
        could be reached, so no request can reuse a token after this call.

        Returns:
            The parsed logout response.

        Raises:
            LogoutError: If the request fails or the body is not JSON.
        """
        try:
            response = await self.http_client.get(
                f"{self.config.base_url}/api/logout",
                headers=REQUEST_HEADERS,
            )
            response.raise_for_status()
            data = response.json()
        except Exception as e:
            raise LogoutError(
                message="Failed to log out",
                status_code=_status_code(e),
                detail=str(e),
            ) from e
        finally:
            self.session.clear()

        logger.info("Logged out of %s", self.config.host)
        return data

    # -------------------------------------------------------------------------
    # Configuration Requests
    # -------------------------------------------------------------------------

    def _require_auth(self) -> None:
        """
        Verify that we have an active session.

        Raises:
            NotAuthenticatedError: If login() has not succeeded.
        """
        if not self.session.is_authenticated:
            raise NotAuthenticatedError(
                message="Authentication cookie not set",
                detail="Please use the login() method before making an API request",
            )

    async def api_request(
        self,
        request_type: RequestType | str,
        object_name: str | None = None,
        *,
        payload: Mapping[str, Any] | None = None,
        config_path: str | None = None,
        get_modifiers: GetModifiers | Mapping[str, Any] | None = None,
    ) -> Any:
        """
        Send a Get or Set request for configuration objects or containers.

        If ``payload`` is given the request is a POST with the payload as
        its JSON body; otherwise it is a GET, optionally refined by
        ``get_modifiers``.

        Args:
            request_type: ``"object"`` or ``"container"``.
            object_name: Specific object or container. Omit to list all.
            payload: Data for a Set request. ``{}`` still sends a POST.
            config_path: Config node for this request, instead of
                ``config.default_config_path``.
            get_modifiers: Filter/sort/count/type/pagination for a GET.

        Returns:
            The parsed JSON response.

        Raises:
            NotAuthenticatedError: If ``login()`` has not succeeded.
            RequestShapeError: If both ``payload`` and ``get_modifiers`` are
                given.
            ResponseFormatError: If the controller did not answer with JSON.
            RequestError: For any other failure.

        Example:
            await client.api_request(
                "object",
                "netdst",
                get_modifiers={"filter": [{"netdst.dstname": {"$eq": ["wan"]}}]},
            )
        """
        # Session first, so a bad request_type never masks a missing login
        self._require_auth()
        return await self.send(
            RequestSpec(
                request_type=request_type,  # type: ignore[arg-type]
                object_name=object_name,
                payload=payload,
                config_path=config_path,
                get_modifiers=get_modifiers,
            )
        )

    async def send(self, spec: RequestSpec) -> Any:
        """
        Send a prepared ``RequestSpec``. See ``api_request()``.

        Both preconditions are checked before any network call.
        """
        self._require_auth()
        token = self.session.token

        failed = f'API request failed for "{spec.path}"'

        if spec.has_conflicting_shape:
            raise RequestShapeError(
                message=failed,
                detail="Cannot specify GET modifiers for POST requests (requests with a payload)",
            )

        try:
            url = self._prepare_url(spec, token)
            if self.config.debug_enabled:
                logger.debug("Prepared URL: %s", url)

            headers = {**REQUEST_HEADERS, "Cookie": f"SESSION={token}"}
            if spec.is_write:
                response = await self.http_client.post(
                    url, content=json.dumps(spec.payload), headers=headers
                )
            else:
                response = await self.http_client.get(url, headers=headers)

            response.raise_for_status()
            _check_json_response(response)
            return response.json()

        except ResponseFormatError as e:
            logger.warning("%s: unexpected Content-Type %r", failed, e.content_type)
            raise ResponseFormatError(
                message=failed,
                status_code=e.status_code,
                detail=str(e),
                content_type=e.content_type,
                body=e.body,
            ) from e

        except Exception as e:
            logger.warning("%s: %s", failed, e)
            raise RequestError(
                message=failed,
                status_code=_status_code(e),
                detail=str(e),
            ) from e

    def _prepare_url(self, spec: RequestSpec, token: str | None) -> str:
        """
        Build the full request URL.

        Layout: ``{base}/configuration{path}?{modifiers}UIDARUBA={token}&config_path={path}``
        with the config path fully percent-encoded.
        """
        config_path = spec.config_path or self.config.default_config_path
        return (
            f"{self.config.base_url}/configuration{spec.path}"
            f"?{encode_get_modifiers(spec.get_modifiers)}"
            f"UIDARUBA={token}&config_path={quote(config_path, safe='')}"
        )
