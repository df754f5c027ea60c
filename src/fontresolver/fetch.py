"""
HTTP Fetching
=============

Thin wrapper around a `requests` session used to talk to font provider APIs,
with bounded retries and exponential backoff.
"""

import logging
import time
from collections.abc import Mapping
from typing import Any
from urllib.parse import urljoin

import requests

from src.fontresolver.core.config import FetchConfig
from src.fontresolver.core.exceptions import FetchError, InvalidResponseError

logger = logging.getLogger(__name__)


class FontFetcher:
    """Fetches CSS and JSON documents from font provider endpoints."""

    def __init__(self, config: FetchConfig | None = None, session: requests.Session | None = None):
        self.config = config or FetchConfig()
        self.session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        """Create HTTP session with appropriate configuration."""
        session = requests.Session()
        session.verify = self.config.verify_ssl
        session.headers.update({"User-Agent": self.config.user_agent})
        return session

    def fetch_text(
        self,
        path: str,
        base_url: str | None = None,
        headers: Mapping[str, str] | None = None,
        query: Mapping[str, Any] | None = None,
    ) -> str:
        """Fetch a text document.

        Args:
            path: Request path, or an absolute URL when `base_url` is omitted
            base_url: Base URL the path is resolved against
            headers: Extra request headers (e.g. `user-agent`)
            query: Query string parameters

        Returns:
            Response body decoded as text

        Raises:
            FetchError: If every attempt fails
        """
        response = self._request(self._build_url(path, base_url), headers, query)
        return response.text

    def fetch_json(self, url: str, headers: Mapping[str, str] | None = None) -> Any:
        """Fetch and decode a JSON document.

        Raises:
            FetchError: If every attempt fails
            InvalidResponseError: If the body is not JSON
        """
        response = self._request(url, headers, None)
        try:
            return response.json()
        except ValueError as e:
            raise InvalidResponseError(url, f"body is not JSON: {e}") from e

    def _build_url(self, path: str, base_url: str | None) -> str:
        if base_url is None:
            return path
        return urljoin(base_url.rstrip("/") + "/", path.lstrip("/"))

    def _request(
        self,
        url: str,
        headers: Mapping[str, str] | None,
        query: Mapping[str, Any] | None,
    ) -> requests.Response:
        last_error: requests.RequestException | None = None

        for attempt in range(self.config.max_retries):
            try:
                logger.debug(f"GET {url} (attempt {attempt + 1})")
                response = self.session.get(
                    url,
                    headers=dict(headers or {}),
                    params=dict(query or {}),
                    timeout=self.config.timeout_seconds,
                )
                response.raise_for_status()
            except requests.HTTPError as e:
                status = e.response.status_code if e.response is not None else None
                # Client errors will not succeed on retry
                if status is not None and 400 <= status < 500:
                    raise FetchError(url, status_code=status) from e
                last_error = e
            except requests.RequestException as e:
                last_error = e
            else:
                return response

            logger.warning(f"Request to {url} failed on attempt {attempt + 1}: {last_error}")
            if attempt < self.config.max_retries - 1:
                time.sleep(self.config.backoff_seconds * 2**attempt)

        status = None
        if isinstance(last_error, requests.HTTPError) and last_error.response is not None:
            status = last_error.response.status_code
        raise FetchError(url, status_code=status, details={"error": str(last_error)}) from last_error

    def close(self):
        """Release the underlying session."""
        self.session.close()
