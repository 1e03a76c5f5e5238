"""
Exception taxonomy for the emissions backend

Each error carries the HTTP status the API layer reports for it.
"""

from typing import Any, Optional


class EmissionsAPIError(Exception):
    """Base class for all domain errors"""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(EmissionsAPIError):
    """A required request parameter is missing or malformed"""

    status_code = 400


class ConfigurationError(EmissionsAPIError):
    """Required configuration (e.g. search credentials) is missing"""

    status_code = 500


class UpstreamError(EmissionsAPIError):
    """The external search provider failed or timed out"""

    status_code = 502

    def __init__(self, message: str, status_code: Optional[int] = None, details: Any = None):
        super().__init__(message, status_code)
        self.details = details if details is not None else message


class RateLimitedError(EmissionsAPIError):
    """Client sent a request before its minimum interval elapsed"""

    status_code = 429

    def __init__(self, message: str, retry_after: float = 0.0):
        super().__init__(message)
        self.retry_after = retry_after


class DatasetError(EmissionsAPIError):
    """The emissions dataset violates an integrity rule"""
