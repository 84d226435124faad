"""Runtime configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_API_URL = "https://api.firecrawl.dev"
DEFAULT_TRANSPORT = "stdio"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_TIMEOUT = 300.0

TRANSPORTS = ("stdio", "http")


class ConfigError(ValueError):
    """Raised when the environment does not describe a usable configuration."""


@dataclass(frozen=True)
class Settings:
    """Server settings.

    Only ``api_key`` and ``api_url`` reach the gateway itself; the rest
    configures the transport and the backend HTTP client.
    """

    api_key: str
    api_url: str | None = None
    transport: str = DEFAULT_TRANSPORT
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    timeout: float = DEFAULT_TIMEOUT
    invocation_timeout: float | None = None
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ConfigError("FIRECRAWL_API_KEY is required")
        if self.transport not in TRANSPORTS:
            raise ConfigError(
                f"Unsupported transport {self.transport!r}, expected one of {', '.join(TRANSPORTS)}"
            )

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        """Build settings from ``environ`` (defaults to ``os.environ``).

        Raises:
            ConfigError: If a variable is missing or malformed
        """
        env = os.environ if environ is None else environ

        return cls(
            api_key=env.get("FIRECRAWL_API_KEY", ""),
            api_url=env.get("FIRECRAWL_API_URL") or None,
            transport=env.get("TRANSPORT", DEFAULT_TRANSPORT).lower(),
            host=env.get("HOST", DEFAULT_HOST),
            port=_parse_number(env, "PORT", int, DEFAULT_PORT),
            timeout=_parse_number(env, "FIRECRAWL_TIMEOUT", float, DEFAULT_TIMEOUT),
            invocation_timeout=_parse_number(env, "FIRECRAWL_INVOCATION_TIMEOUT", float, None),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )


def _parse_number(env, key, cast, default):
    raw = env.get(key)
    if raw is None or raw == "":
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from e
