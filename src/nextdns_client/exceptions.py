"""Exception hierarchy for the NextDNS API client."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorType(str, Enum):
    """Kind of failure reported by the API dispatcher."""

    SERVICE_ERROR = "service_error"
    REQUEST = "request"
    MALFORMED = "malformed"
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ErrorDetail:
    """One item of the API error envelope."""

    code: str
    detail: Optional[str] = None
    parameter: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ErrorDetail":
        source = data.get("source") or {}
        return cls(
            code=str(data.get("code", "")),
            detail=data.get("detail") or None,
            parameter=source.get("parameter") if isinstance(source, dict) else None,
        )


class NextDNSError(Exception):
    """Base exception for the NextDNS client."""


class ConfigurationError(NextDNSError):
    """Raised when configuration is invalid or missing."""


class MissingProfileError(NextDNSError, ValueError):
    """Raised when a profile-scoped call is made without a profile ID."""

    def __init__(self, message: str = "missing profile is required") -> None:
        super().__init__(message)


class TransportError(NextDNSError):
    """Raised when the request never produced an HTTP response."""


class APIError(NextDNSError):
    """Raised when the API answered with an error."""

    error_type = ErrorType.REQUEST

    def __init__(
        self,
        message: str,
        errors: Optional[List[ErrorDetail]] = None,
        meta: Optional[Dict[str, str]] = None,
        status_code: Optional[int] = None,
    ) -> None:
        self.message = message
        self.errors = list(errors or [])
        self.meta = dict(meta or {})
        self.status_code = status_code
        super().__init__(self.__str__())

    def __str__(self) -> str:
        if not self.errors:
            return self.message
        items = [
            f"{e.detail} ({e.code})" if e.detail else e.code
            for e in self.errors
        ]
        return f"{self.message} ({self.error_type.value}): " + ", ".join(items)


class ServiceError(APIError):
    """5xx response from the API."""

    error_type = ErrorType.SERVICE_ERROR


class RequestError(APIError):
    """Regular request error, including 200 responses carrying errors."""

    error_type = ErrorType.REQUEST


class MalformedResponseError(APIError):
    """Response body could not be decoded."""

    error_type = ErrorType.MALFORMED


class AuthenticationError(APIError):
    """API key missing, invalid, or not allowed to access the resource."""

    error_type = ErrorType.AUTHENTICATION


class NotFoundError(APIError):
    """Requested resource does not exist."""

    error_type = ErrorType.NOT_FOUND
