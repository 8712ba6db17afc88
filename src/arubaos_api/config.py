"""
Connection settings for the ArubaOS API client.

Settings can be given explicitly or resolved from the environment with the
following precedence (highest to lowest):

1. Keyword overrides passed to ``ClientConfig.from_env()``
2. Environment variables (ARUBAOS_HOST, ARUBAOS_PORT, ...)
3. Default values

The configuration is immutable once created, so a client instance always
talks to the same controller with the same credentials.

Example:
    config = ClientConfig(host="10.1.1.1", username="admin", password="secret")

    # Or, with ARUBAOS_HOST/ARUBAOS_USERNAME/ARUBAOS_PASSWORD exported:
    config = ClientConfig.from_env(verify_ssl=False)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any

# =============================================================================
# DEFAULT CONFIGURATION VALUES
# =============================================================================

# Default HTTPS port of the controller's web UI and REST API.
DEFAULT_PORT = 4343

# Config node requests are scoped to when no override is given.
DEFAULT_CONFIG_PATH = "/mm/mynode"

# Environment variable names.
ENV_HOST = "ARUBAOS_HOST"
ENV_USERNAME = "ARUBAOS_USERNAME"
ENV_PASSWORD = "ARUBAOS_PASSWORD"  # nosec B105 - variable name, not a secret
ENV_PORT = "ARUBAOS_PORT"
ENV_CONFIG_PATH = "ARUBAOS_CONFIG_PATH"
ENV_VERIFY_SSL = "ARUBAOS_VERIFY_SSL"
ENV_DEBUG = "ARUBAOS_DEBUG"
ENV_TIMEOUT = "ARUBAOS_TIMEOUT"


def _parse_bool(value: str) -> bool:
    """Parse a string value to boolean."""
    return value.strip().lower() in ("true", "yes", "1", "on", "enabled")


# =============================================================================
# CONFIGURATION DATACLASS
# =============================================================================


@dataclass(frozen=True)
class ClientConfig:
    """
    Immutable connection settings for one ``ArubaOsApiClient``.

    Attributes:
        host: Management IP or hostname of the controller.
        username: Admin user on the controller.
        password: Password of the admin user. Hidden from ``repr()``.
        port: HTTPS port of the API (default 4343).
        default_config_path: Config node targeted when a request does not
            override it (default ``/mm/mynode``).
        verify_ssl: Verify the controller's TLS certificate. Disable only
            for controllers without a trusted certificate.
        debug_enabled: Log every prepared request URL at DEBUG level on the
            ``arubaos_api.client`` logger. The library adds no handler, so
            the application must enable that logger to see the output, e.g.
            ``logging.basicConfig(level=logging.DEBUG)``.
        timeout: Transport timeout in seconds. ``None`` leaves requests
            unbounded.
    """

    host: str
    username: str
    password: str = field(repr=False)
    port: int = DEFAULT_PORT
    default_config_path: str = DEFAULT_CONFIG_PATH
    verify_ssl: bool = True
    debug_enabled: bool = False
    timeout: float | None = None

    def __post_init__(self) -> None:
        """
        Validate configuration values after initialization.

        Raises:
            ValueError: If a required value is empty or out of range.
        """
        if not self.host:
            raise ValueError("host cannot be empty")

        if not self.username:
            raise ValueError("username cannot be empty")

        if not 0 < self.port < 65536:
            raise ValueError("port must be between 1 and 65535")

        if not self.default_config_path.startswith("/"):
            raise ValueError("default_config_path must start with '/'")

        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("timeout must be a positive number")

    @property
    def base_url(self) -> str:
        """Root of every API endpoint, e.g. ``https://10.1.1.1:4343/v1``."""
        return f"https://{self.host}:{self.port}/v1"

    @classmethod
    def from_env(cls, **overrides: Any) -> ClientConfig:
        """
        Create a ClientConfig from environment variables.

        Any field passed as a keyword wins over its environment variable,
        which in turn wins over the default.

        Args:
            **overrides: Field values that take precedence over the
                environment.

        Returns:
            ClientConfig: A validated configuration object.

        Raises:
            ValueError: If host, username or password cannot be resolved, or
                a numeric variable is malformed.

        Example:
            config = ClientConfig.from_env(default_config_path="/md")
        """
        values: dict[str, Any] = {}

        if env_host := os.getenv(ENV_HOST):
            values["host"] = env_host
        if env_username := os.getenv(ENV_USERNAME):
            values["username"] = env_username
        if env_password := os.getenv(ENV_PASSWORD):
            values["password"] = env_password
        if env_port := os.getenv(ENV_PORT):
            values["port"] = int(env_port)
        if env_path := os.getenv(ENV_CONFIG_PATH):
            values["default_config_path"] = env_path
        if env_verify := os.getenv(ENV_VERIFY_SSL):
            values["verify_ssl"] = _parse_bool(env_verify)
        if env_debug := os.getenv(ENV_DEBUG):
            values["debug_enabled"] = _parse_bool(env_debug)
        if env_timeout := os.getenv(ENV_TIMEOUT):
            values["timeout"] = float(env_timeout)

        values.update(overrides)

        missing = [name for name in ("host", "username", "password") if name not in values]
        if missing:
            raise ValueError(
                "Missing controller settings: "
                + ", ".join(missing)
                + f" (set {ENV_HOST}, {ENV_USERNAME} and {ENV_PASSWORD})"
            )

        return cls(**values)
