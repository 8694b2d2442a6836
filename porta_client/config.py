"""
Client settings for Porta Client.

Settings come from the caller or from ``THREESCALE_*`` environment variables.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_ADMIN_URL = "THREESCALE_ADMIN_URL"
ENV_ACCESS_TOKEN = "THREESCALE_ACCESS_TOKEN"
ENV_TIMEOUT = "THREESCALE_TIMEOUT"
ENV_VERIFY_SSL = "THREESCALE_VERIFY_SSL"

_FALSE_VALUES = ("0", "false", "no", "off")


@dataclass
class PortaConfig:
    """Settings used to build a client against one admin portal."""
    admin_url: str = ""
    access_token: str = ""
    timeout: Optional[float] = None  # seconds; None leaves it to the transport
    verify_ssl: bool = True

    def is_configured(self) -> bool:
        """Check whether both the admin portal URL and a token are set."""
        return bool(self.admin_url and self.access_token)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PortaConfig":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Raises:
            ConfigurationError: If ``THREESCALE_TIMEOUT`` is not a positive number
        """
        env = os.environ if environ is None else environ

        timeout: Optional[float] = None
        raw_timeout = env.get(ENV_TIMEOUT, "").strip()
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid {ENV_TIMEOUT} value: {raw_timeout!r}",
                    details="Expected a number of seconds",
                )
            if timeout <= 0:
                raise ConfigurationError(f"{ENV_TIMEOUT} must be positive, got {raw_timeout}")

        verify_ssl = env.get(ENV_VERIFY_SSL, "true").strip().lower() not in _FALSE_VALUES
        if not verify_ssl:
            logger.debug("TLS certificate verification disabled by %s", ENV_VERIFY_SSL)

        return cls(
            admin_url=env.get(ENV_ADMIN_URL, "").strip(),
            access_token=env.get(ENV_ACCESS_TOKEN, ""),
            timeout=timeout,
            verify_ssl=verify_ssl,
        )


def get_config() -> PortaConfig:
    """Get settings from the process environment."""
    return PortaConfig.from_env()
