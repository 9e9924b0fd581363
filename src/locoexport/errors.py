"""locoexport exception hierarchy.

Every error the tool raises on purpose derives from LocoError so the CLI can
report it and exit non-zero without a traceback. Per-item conditions
(LocaleParseError) are caught by the writers, logged, and the item is skipped.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from locoexport.exporters.results import ExportSummary

__all__ = [
    "ConfigurationError",
    "ExportError",
    "LocaleParseError",
    "LocoError",
    "PayloadError",
    "UpstreamError",
]


class LocoError(Exception):
    """Base exception for all locoexport errors."""


class ConfigurationError(LocoError):
    """Invalid local configuration.

    Raised before any network call is made.

    Examples:
    - Missing API key environment variable
    - Target directory does not exist
    """


class LocaleParseError(LocoError, ValueError):
    """Locale code cannot be parsed into a language tag.

    Attributes:
        locale_code: The code that failed to parse
    """

    def __init__(self, message: str, *, locale_code: str = "") -> None:
        """Initialize LocaleParseError.

        Args:
            message: Error message
            locale_code: The code that failed to parse
        """
        super().__init__(message)
        self.locale_code = locale_code


class UpstreamError(LocoError):
    """Vendor API request failed.

    Covers transport failures (timeouts, connection errors) and responses
    with an unexpected status code. Requests are never retried.

    Attributes:
        url: Requested URL
        status_code: HTTP status code, or None when no response was received
    """

    def __init__(self, message: str, *, url: str = "", status_code: int | None = None) -> None:
        """Initialize UpstreamError.

        Args:
            message: Error message
            url: Requested URL
            status_code: HTTP status code if a response was received
        """
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class PayloadError(LocoError):
    """Vendor response body could not be decoded (zip, JSON or YAML)."""


class ExportError(LocoError):
    """A multi-task export did not complete every task.

    Raised after all tasks have finished, never while siblings are in flight.

    Attributes:
        summary: Results of every task in the export
    """

    def __init__(self, message: str, summary: ExportSummary) -> None:
        """Initialize ExportError.

        Args:
            message: Error message
            summary: Results of every task in the export
        """
        super().__init__(message)
        self.summary = summary
