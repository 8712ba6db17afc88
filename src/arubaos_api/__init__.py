"""ArubaOS API — async client for the ArubaOS controller configuration API.

Log in once, then read and write configuration objects and containers:

    from arubaos_api import ArubaOsApiClient, ClientConfig

    async with ArubaOsApiClient(ClientConfig.from_env()) as client:
        await client.login()
        objects = await client.api_request("object")

Version Management
------------------
``__version__`` is read from the installed package metadata at import time.
The single source of truth is the ``version`` field in ``pyproject.toml``.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from arubaos_api.client import ArubaOsApiClient
from arubaos_api.config import ClientConfig
from arubaos_api.exceptions import (
    ArubaOsApiError,
    LoginError,
    LogoutError,
    NotAuthenticatedError,
    RequestError,
    RequestShapeError,
    ResponseFormatError,
)
from arubaos_api.models import RequestSpec, RequestType, SessionState
from arubaos_api.modifiers import (
    DataType,
    FilterOperator,
    GetModifiers,
    Paginate,
    Sort,
    SortOrder,
    filter_condition,
)

try:
    __version__: str = version("arubaos-api")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = [
    "ArubaOsApiClient",
    "ArubaOsApiError",
    "ClientConfig",
    "DataType",
    "FilterOperator",
    "GetModifiers",
    "LoginError",
    "LogoutError",
    "NotAuthenticatedError",
    "Paginate",
    "RequestError",
    "RequestShapeError",
    "RequestSpec",
    "RequestType",
    "ResponseFormatError",
    "SessionState",
    "Sort",
    "SortOrder",
    "filter_condition",
    "__version__",
]
