"""
Kaizen API client used by the MCP tool handlers.

Every call is an authenticated JSON request against the Kaizen REST API:

    client = KaizenClient(base_url="http://localhost:8080", api_key="...")
    data = client.execute("POST", "/v1/akuma/explain", {"sql": "select 1"})

The client never retries. Failures surface as ``KaizenError`` subclasses whose
message is safe to show to an MCP caller.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import requests

from kaizen_mcp.sdk.errors import (
    KaizenAPIError,
    KaizenConfigError,
    KaizenConnectionError,
    KaizenTimeoutError,
)
from kaizen_mcp.version import __version__

logger = logging.getLogger("Kaizen.sdk")

DEFAULT_BASE_URL = "http://localhost:8080"
DEFAULT_TIMEOUT_SEC = 60.0
BODY_CHUNK_SIZE = 64 * 1024
USER_AGENT = f"kaizen-mcp/{__version__}"


def _normalize_base_url(base_url: str) -> str:
    value = base_url.strip().rstrip("/")
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"Invalid Kaizen base URL: {base_url!r}")
    return value


def remaining_deadline_seconds(deadline: Optional[float]) -> Optional[float]:
    """Seconds left until a ``time.monotonic()`` deadline, floored at zero."""
    if deadline is None:
        return None
    return max(0.0, deadline - time.monotonic())


class KaizenClient:
    """
    Synchronous Kaizen API client.

    The underlying ``requests.Session`` is created once and reused for every
    call; the client holds no per-call state.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_SEC,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = _normalize_base_url(base_url)
        self.api_key = (api_key or "").strip()
        self.timeout = timeout
        self._owns_session = session is None
        self._session = session or requests.Session()
        self._session.headers.setdefault("Accept", "application/json")
        self._session.headers["User-Agent"] = USER_AGENT

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "KaizenClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _url(self, path: str) -> str:
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.base_url}{path}"

    def _effective_timeout(self, path: str, deadline: Optional[float]) -> float:
        remaining = remaining_deadline_seconds(deadline)
        if remaining is None:
            return self.timeout
        if remaining <= 0:
            raise KaizenTimeoutError(f"deadline exceeded before request to {path}")
        return min(self.timeout, remaining)

    def execute(
        self,
        verb: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
        *,
        deadline: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Perform one API call and return the decoded JSON object.

        Args:
            verb: HTTP method, e.g. ``"GET"`` or ``"POST"``.
            path: API path beginning with ``/v1/``.
            payload: JSON body; ignored for GET requests.
            deadline: optional ``time.monotonic()`` value bounding the call.

        Raises:
            KaizenConfigError: no API key is configured.
            KaizenTimeoutError: the call timed out or the deadline is spent.
            KaizenConnectionError: the API could not be reached.
            KaizenAPIError: HTTP status >= 400 or an undecodable body.
        """
        if not self.api_key:
            raise KaizenConfigError("KAIZEN_API_KEY is not set")

        verb = verb.upper()
        timeout = self._effective_timeout(path, deadline)
        headers = {"Authorization": f"Bearer {self.api_key}"}
        json_body = None
        if payload is not None and verb != "GET":
            headers["Content-Type"] = "application/json"
            json_body = payload

        try:
            response = self._session.request(
                method=verb,
                url=self._url(path),
                json=json_body,
                headers=headers,
                timeout=timeout,
                stream=True,
            )
        except requests.Timeout as exc:
            raise KaizenTimeoutError(f"request timed out after {timeout:.1f}s: {exc}") from exc
        except requests.RequestException as exc:
            raise KaizenConnectionError(f"request failed: {exc}") from exc

        try:
            body = self._read_body(response, path, deadline)
        finally:
            response.close()

        decoded = self._decode_body(body, response.status_code, path)
        if response.status_code >= 400:
            message = decoded.get("error")
            if not isinstance(message, str) or not message:
                message = "Kaizen API request failed"
            logger.info("Kaizen API %s %s returned status %d", verb, path, response.status_code)
            raise KaizenAPIError(
                message,
                status_code=response.status_code,
                path=path,
                payload=decoded,
            )
        return decoded

    def _read_body(self, response: requests.Response, path: str, deadline: Optional[float]) -> bytes:
        """Read the whole body, checking the deadline after every chunk."""
        chunks = []
        try:
            for chunk in response.iter_content(chunk_size=BODY_CHUNK_SIZE):
                chunks.append(chunk)
                remaining = remaining_deadline_seconds(deadline)
                if remaining is not None and remaining <= 0:
                    raise KaizenTimeoutError(f"deadline exceeded while reading response from {path}")
        except requests.Timeout as exc:
            raise KaizenTimeoutError(f"response read timed out: {exc}") from exc
        except requests.RequestException as exc:
            raise KaizenConnectionError(f"failed to read response: {exc}") from exc
        return b"".join(chunks)

    @staticmethod
    def _decode_body(body: bytes, status_code: int, path: str) -> Dict[str, Any]:
        if not body:
            return {}
        try:
            decoded = json.loads(body)
        except (ValueError, RecursionError) as exc:
            raise KaizenAPIError(
                f"failed to decode response: {exc}",
                status_code=status_code,
                path=path,
            ) from exc
        if not isinstance(decoded, dict):
            raise KaizenAPIError(
                "failed to decode response: expected a JSON object",
                status_code=status_code,
                path=path,
                payload=decoded,
            )
        return decoded
