"""
Search Errors
Error taxonomy shared by the transport, token provider and backends
"""
from typing import Any, Dict, Optional


class SearchError(Exception):
    """
    Base exception for every search failure.

    All errors carry:
    - status_code: upstream HTTP status when one was received
    - backend: which backend was running when the error surfaced
    - metadata: extra context for logs
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        backend: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.backend = backend
        self.metadata = metadata or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "status_code": self.status_code,
            "backend": self.backend,
            "metadata": self.metadata,
        }


class RateLimited(SearchError):
    """Upstream answered with one of its throttling or soft-block statuses."""


class SearchTimeout(SearchError):
    """A request exceeded the client-wide timeout."""


class SearchFailed(SearchError):
    """Unexpected status, undecodable body, missing token or transport failure."""


class InvalidParams(SearchError, ValueError):
    """Caller supplied parameters the engine cannot search with."""
