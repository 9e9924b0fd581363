"""Runtime configuration read from the environment.

The only required setting is the vendor API key. Everything else has a
default suited to the Hourglass Loco project and can be overridden for
other projects or for testing against a local server.

Environment variables:
    LOCO_RO_API_KEY - API key (required). The i18conv command needs a key
                      with write scope; every other command only reads.
    LOCO_API_URL    - API base URL (default: https://localise.biz/api)
    LOCO_PROJECT    - Project name used in export payloads (default: hourglass)
    LOCO_FALLBACK   - Locale used to fill untranslated assets (default: en-US)
    LOCO_TIMEOUT    - Per-request timeout in seconds (default: 20)

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from locoexport.constants import (
    API_KEY_ENV_VAR,
    DEFAULT_API_URL,
    DEFAULT_FALLBACK_LOCALE,
    DEFAULT_PROJECT,
    DEFAULT_TIMEOUT,
)
from locoexport.errors import ConfigurationError

__all__ = ["Settings", "require_directory"]


@dataclass(frozen=True, slots=True)
class Settings:
    """Immutable configuration for one CLI invocation.

    Attributes:
        api_key: Vendor API key sent with every request
        api_url: API base URL without trailing slash
        project: Project name expected in i18next and YAML exports
        fallback_locale: Locale the vendor uses for untranslated assets
        timeout: Per-request timeout in seconds
    """

    api_key: str
    api_url: str = DEFAULT_API_URL
    project: str = DEFAULT_PROJECT
    fallback_locale: str = DEFAULT_FALLBACK_LOCALE
    timeout: float = DEFAULT_TIMEOUT

    def __repr__(self) -> str:
        """Return representation with the API key redacted."""
        return (
            f"Settings(api_url={self.api_url!r}, project={self.project!r}, "
            f"fallback_locale={self.fallback_locale!r}, timeout={self.timeout!r})"
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Populated Settings

        Raises:
            ConfigurationError: If the API key is missing or the timeout is invalid
        """
        env = os.environ if environ is None else environ

        api_key = env.get(API_KEY_ENV_VAR, "").strip()
        if not api_key:
            msg = f"missing api key: provide it in the environment variable {API_KEY_ENV_VAR}"
            raise ConfigurationError(msg)

        raw_timeout = env.get("LOCO_TIMEOUT", "")
        timeout = DEFAULT_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                msg = f"LOCO_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
                raise ConfigurationError(msg) from None
            if timeout <= 0:
                msg = f"LOCO_TIMEOUT must be positive, got {raw_timeout!r}"
                raise ConfigurationError(msg)

        return cls(
            api_key=api_key,
            api_url=env.get("LOCO_API_URL", DEFAULT_API_URL).rstrip("/"),
            project=env.get("LOCO_PROJECT", DEFAULT_PROJECT),
            fallback_locale=env.get("LOCO_FALLBACK", DEFAULT_FALLBACK_LOCALE),
            timeout=timeout,
        )


def require_directory(path: str | Path) -> Path:
    """Return path as a Path if it is an existing directory.

    Raises:
        ConfigurationError: If path does not exist or is not a directory
    """
    directory = Path(path)
    if not directory.is_dir():
        msg = f"invalid base dir: {path}"
        raise ConfigurationError(msg)
    return directory
