"""Error types raised by the DingTalk robot client.

Exception Hierarchy:
    WebhookError (base)
    ├── TransportError - Network/connection failures
    ├── HTTPStatusError - Non-200 HTTP responses
    ├── MalformedResponseError - Response body not in the expected JSON shape
    ├── RemoteAPIError - Non-zero errcode reported by DingTalk
    └── ValidationError - Invalid caller arguments, raised before sending
"""

from enum import Enum
from typing import Any


class WebhookError(Exception):
    """Base exception for all robot webhook errors.

    Attributes:
        message: Human-readable error message.
        details: Additional error details.
    """

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging/API responses."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class TransportError(WebhookError):
    """The HTTP request could not be completed.

    Covers connection refused, DNS failures, timeouts and unusable URLs.

    Attributes:
        cause: The underlying exception.
    """

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"api request error: {cause}")
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        base = super().to_dict()
        base.update({"cause": repr(self.cause)})
        return base


class HTTPStatusError(WebhookError):
    """The endpoint answered with a status code other than 200."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"api response error: {status_code}")
        self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        base = super().to_dict()
        base.update({"status_code": self.status_code})
        return base


class MalformedResponseError(WebhookError):
    """The response body is not a JSON object in the expected shape.

    Attributes:
        body: Raw response body, kept for diagnostics.
        cause: The parse failure.
    """

    def __init__(self, body: str, cause: BaseException) -> None:
        super().__init__(
            f"response struct error: response is not a json anymore, {cause}"
        )
        self.body = body
        self.cause = cause

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        base = super().to_dict()
        base.update({"body": self.body})
        return base


class RemoteAPIError(WebhookError):
    """DingTalk accepted the request but reported a non-zero errcode."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"api custom error: {{code: {code}, msg: {message}}}")
        self.code = code
        self.error_message = message

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        base = super().to_dict()
        base.update({"code": self.code, "error_message": self.error_message})
        return base


class ValidationErrorKind(str, Enum):
    """Reasons a message was rejected before sending."""

    EMPTY = "empty"
    LENGTH_MISMATCH = "length mismatch"


class ValidationError(WebhookError):
    """Caller-supplied message arguments are invalid.

    Attributes:
        kind: Which check failed.
    """

    _MESSAGES = {
        ValidationErrorKind.EMPTY: "links or titles is empty",
        ValidationErrorKind.LENGTH_MISMATCH: "links length and titles length is not equal",
    }

    def __init__(
        self,
        kind: ValidationErrorKind | str,
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        kind = ValidationErrorKind(kind)
        super().__init__(self._MESSAGES[kind], details=details)
        self.kind = kind

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        base = super().to_dict()
        base.update({"kind": self.kind.value})
        return base
