"""
Kaizen API client exceptions.
"""

from __future__ import annotations

from typing import Any, Optional


class KaizenError(RuntimeError):
    """Base class for Kaizen API client errors."""


class KaizenConfigError(KaizenError):
    """Raised when the client is missing required configuration."""


class KaizenConnectionError(KaizenError):
    """Raised when the client cannot reach the Kaizen API."""


class KaizenTimeoutError(KaizenConnectionError):
    """Raised when a call exceeds its timeout or deadline budget."""


class KaizenAPIError(KaizenError):
    """Raised when the API returns an HTTP error or an undecodable body."""

    def __init__(
        self,
        detail: str,
        *,
        status_code: Optional[int] = None,
        path: Optional[str] = None,
        payload: Optional[Any] = None,
    ) -> None:
        self.detail = detail
        self.status_code = status_code
        self.path = path
        self.payload = payload
        status_hint = f" (status={status_code})" if status_code is not None else ""
        super().__init__(f"{detail}{status_hint}")
