"""
Error types for the Blog SDK.

Every failure a BlogClient call can produce is one of these, regardless of
which transport carried the call:
- UnauthorizedError: Missing, invalid or expired token
- NotFoundError: Post or user does not exist
- ForbiddenError: Authenticated but not allowed (gRPC only)
- AlreadyExistsError: Username/email taken (gRPC only)
- InvalidRequestError: Request rejected by the service
- TransportError: Connection failure or unexpected status
- SerializationError: Response body does not match the expected shape

Invariants:
    - All errors inherit from BlogError
    - Every error carries an ErrorKind tag; predicates read only the tag
    - HTTP has no forbidden/already-exists slot: 403 and 409 arrive as
      InvalidRequestError (403 with a "Forbidden: " prefix)
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    """Closed set of error kinds exposed to callers."""

    UNAUTHORIZED = "UNAUTHORIZED"
    NOT_FOUND = "NOT_FOUND"
    FORBIDDEN = "FORBIDDEN"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    INVALID_REQUEST = "INVALID_REQUEST"
    TRANSPORT = "TRANSPORT_ERROR"
    SERIALIZATION = "SERIALIZATION_ERROR"


class BlogError(Exception):
    """Base exception for all Blog SDK errors.

    Attributes:
        message: Error message
        kind: Error kind for programmatic handling
        code: String form of kind
        details: Additional error context
    """

    kind: ErrorKind = ErrorKind.TRANSPORT

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = self.kind.value
        self.details = details or {}

    def is_not_found(self) -> bool:
        return self.kind is ErrorKind.NOT_FOUND

    def is_unauthorized(self) -> bool:
        return self.kind is ErrorKind.UNAUTHORIZED


class UnauthorizedError(BlogError):
    """Authentication required or rejected.

    Raised when:
    - No token was attached to a protected call
    - Token is invalid or expired
    - Login credentials are wrong
    """

    kind = ErrorKind.UNAUTHORIZED

    def __init__(self, detail: str) -> None:
        super().__init__(f"Unauthorized: {detail}", details={"detail": detail})
        self.detail = detail


class NotFoundError(BlogError):
    """Resource not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message)


class ForbiddenError(BlogError):
    """Caller is authenticated but may not touch the resource.

    Only the gRPC transport produces this; HTTP folds 403 into
    InvalidRequestError.
    """

    kind = ErrorKind.FORBIDDEN

    def __init__(self, detail: str = "Forbidden") -> None:
        super().__init__(f"Forbidden: {detail}", details={"detail": detail})
        self.detail = detail


class AlreadyExistsError(BlogError):
    """Resource already exists.

    Only the gRPC transport produces this; HTTP folds 409 into
    InvalidRequestError.
    """

    kind = ErrorKind.ALREADY_EXISTS

    def __init__(self, detail: str = "Already exists") -> None:
        super().__init__(f"Already exists: {detail}", details={"detail": detail})
        self.detail = detail


class InvalidRequestError(BlogError):
    """Request rejected by the service, or one the SDK cannot encode.

    Attributes:
        detail: Human-readable reason
        status: HTTP status that was folded into this error, if any
    """

    kind = ErrorKind.INVALID_REQUEST

    def __init__(self, detail: str, status: int | None = None) -> None:
        super().__init__(
            f"Invalid request: {detail}",
            details={"detail": detail, "status": status},
        )
        self.detail = detail
        self.status = status


class TransportError(BlogError):
    """The call did not complete at the protocol level.

    Raised when:
    - Server is unreachable or the channel never becomes ready
    - Server answers with an unmapped status
    - Client is misused (wrong transport state)
    """

    kind = ErrorKind.TRANSPORT

    def __init__(self, detail: str, address: str | None = None) -> None:
        super().__init__(
            f"Transport error: {detail}",
            details={"detail": detail, "address": address},
        )
        self.detail = detail
        self.address = address


class SerializationError(BlogError):
    """Response payload could not be decoded into the expected shape."""

    kind = ErrorKind.SERIALIZATION

    def __init__(self, detail: str) -> None:
        super().__init__(f"Serialization error: {detail}", details={"detail": detail})
        self.detail = detail
