from __future__ import annotations

from enum import Enum
from http import HTTPStatus
from typing import Optional


class ErrorKind(str, Enum):
    """Kind of failure reported by the API handler."""

    BASE = "Base"
    NETWORK = "Network"
    AUTHENTICATION = "Authentication"
    SERVER = "Server"
    BAD_REQUEST = "BadRequest"


DEFAULT_MESSAGES = {
    ErrorKind.NETWORK: "Network Error",
    ErrorKind.AUTHENTICATION: "Authentication Failed",
    ErrorKind.SERVER: "Server Error",
    ErrorKind.BAD_REQUEST: "Bad Request",
}

FIXED_STATUS_CODES = {
    ErrorKind.AUTHENTICATION: int(HTTPStatus.UNAUTHORIZED),
    ErrorKind.SERVER: int(HTTPStatus.INTERNAL_SERVER_ERROR),
    ErrorKind.BAD_REQUEST: int(HTTPStatus.BAD_REQUEST),
}

_KIND_BY_STATUS = {code: kind for kind, code in FIXED_STATUS_CODES.items()}


class ApiError(Exception):
    """Single failure type raised by the API handler.

    The ``kind`` tag tells callers which variant they got:

        try:
            handler.get("/items")
        except ApiError as exc:
            if exc.kind is ErrorKind.AUTHENTICATION:
                ...
    """

    __match_args__ = ("kind", "message", "status_code")

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        *,
        kind: ErrorKind = ErrorKind.BASE,
    ) -> None:
        self.kind = kind
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message} (Status Code: {self.status_code})"

    def __repr__(self) -> str:
        return f"ApiError(kind={self.kind.name}, message={self.message!r}, status_code={self.status_code!r})"

    @classmethod
    def _fixed(cls, kind: ErrorKind, message: Optional[str]) -> "ApiError":
        return cls(
            message if message is not None else DEFAULT_MESSAGES[kind],
            FIXED_STATUS_CODES.get(kind),
            kind=kind,
        )

    @classmethod
    def network(cls, message: Optional[str] = None) -> "ApiError":
        return cls._fixed(ErrorKind.NETWORK, message or None)

    @classmethod
    def authentication(cls, message: Optional[str] = None) -> "ApiError":
        return cls._fixed(ErrorKind.AUTHENTICATION, message)

    @classmethod
    def server(cls, message: Optional[str] = None) -> "ApiError":
        return cls._fixed(ErrorKind.SERVER, message)

    @classmethod
    def bad_request(cls, message: Optional[str] = None) -> "ApiError":
        return cls._fixed(ErrorKind.BAD_REQUEST, message)

    @classmethod
    def for_status(cls, status_code: int, message: Optional[str] = None) -> "ApiError":
        """Build the failure matching an HTTP status code."""

        kind = _KIND_BY_STATUS.get(int(status_code))
        if kind is not None:
            return cls._fixed(kind, message)
        return cls(message if message is not None else "Unknown Error", int(status_code))


__all__ = ["ApiError", "ErrorKind", "DEFAULT_MESSAGES", "FIXED_STATUS_CODES"]
