"""HTTP client for the Loco REST API.

Wraps a requests Session carrying the API key. Every call is attempted once;
there are no retries. Failures are raised as UpstreamError (transport errors
and unexpected status codes) or PayloadError (undecodable JSON) so callers
decide whether a failure is fatal or counted against a multi-task export.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

import requests

from locoexport.config import Settings
from locoexport.constants import AUTH_HEADER, AUTH_SCHEME, WRITE_TIMEOUT
from locoexport.errors import PayloadError, UpstreamError

__all__ = ["LocoClient", "escape_path"]

logger = logging.getLogger(__name__)

type QueryParams = Mapping[str, str]


def escape_path(segment: str) -> str:
    """Escape one URL path segment (asset ids may contain spaces and '%')."""
    return quote(segment, safe="")


class LocoClient:
    """Authenticated client for the Loco API.

    Safe to share across threads for the fixed fan-out of the iOS exports:
    requests.Session handles concurrent GETs through its connection pool.

    Attributes:
        settings: Configuration this client was built from
    """

    __slots__ = ("_session", "settings")

    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        """Initialize the client.

        Args:
            settings: Configuration with API key, base URL and timeout
            session: Session to use (a new one is created when omitted)
        """
        self.settings = settings
        self._session = session if session is not None else requests.Session()
        self._session.headers.update(
            {
                AUTH_HEADER: f"{AUTH_SCHEME} {settings.api_key}",
                "Accept": "application/json, application/zip, */*",
            }
        )

    def __enter__(self) -> LocoClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Release pooled connections."""
        self._session.close()

    def url(self, path: str) -> str:
        """Build an absolute API URL from a path starting with '/'."""
        return f"{self.settings.api_url}{path}"

    def get(self, path: str, params: QueryParams | None = None) -> requests.Response:
        """Send a GET request and require a 200 response.

        Args:
            path: API path (e.g., '/export/archive/po.zip')
            params: Query parameters

        Returns:
            The response, body already read

        Raises:
            UpstreamError: On transport failure or a non-200 status
        """
        url = self.url(path)
        logger.debug("GET %s params=%s", url, dict(params or {}))
        try:
            response = self._session.get(url, params=params, timeout=self.settings.timeout)
        except requests.RequestException as e:
            logger.error("Error fetching %s: %s", url, e)
            msg = f"request to {url} failed: {e}"
            raise UpstreamError(msg, url=url) from e

        if response.status_code != requests.codes.ok:
            msg = f"status not OK: is {response.status_code} for {url}"
            raise UpstreamError(msg, url=url, status_code=response.status_code)
        return response

    def get_bytes(self, path: str, params: QueryParams | None = None) -> bytes:
        """GET a binary payload (zip archives)."""
        return self.get(path, params).content

    def get_json(self, path: str, params: QueryParams | None = None) -> Any:
        """GET and decode a JSON payload.

        Raises:
            UpstreamError: On transport failure or a non-200 status
            PayloadError: If the body is not valid JSON
        """
        response = self.get(path, params)
        try:
            return response.json()
        except ValueError as e:
            msg = f"invalid JSON from {response.url}: {e}"
            raise PayloadError(msg) from e

    def write(
        self,
        path: str,
        method: str,
        body: bytes,
        content_type: str = "text/plain; charset=utf-8",
    ) -> requests.Response:
        """Send a POST or PATCH with a raw body and require a 2xx response.

        Args:
            path: API path
            method: 'POST' or 'PATCH'
            body: Request body
            content_type: Content-Type header value

        Returns:
            The response

        Raises:
            UpstreamError: On transport failure or a non-2xx status
        """
        url = self.url(path)
        logger.debug("%s %s (%d bytes)", method, url, len(body))
        try:
            response = self._session.request(
                method,
                url,
                data=body,
                headers={"Content-Type": content_type},
                timeout=max(self.settings.timeout, WRITE_TIMEOUT),
            )
        except requests.RequestException as e:
            msg = f"{method} {url} failed: {e}"
            raise UpstreamError(msg, url=url) from e

        if not response.ok or response.status_code >= 300:
            msg = f"{method} {url} returned status {response.status_code}: {response.text[:200]}"
            raise UpstreamError(msg, url=url, status_code=response.status_code)
        return response
