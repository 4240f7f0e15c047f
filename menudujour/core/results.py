"""
Explicit result values for catalog, menu and rendering operations.

Expected business outcomes (not authenticated, missing product, bad date,
store failure...) travel back to the caller as a ``Result``; exceptions are
left for programming errors.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    UNAUTHENTICATED = "unauthenticated"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    STORE = "store"
    RENDER = "render"


# Generic user-facing messages, never carrying driver/browser details
NOT_AUTHENTICATED = "Not authenticated"
NOT_AUTHORIZED = "Not authorized"
STORE_ERROR = "Something went wrong while accessing the menu data"
RENDER_ERROR = "PDF generation failed"


@dataclass
class Result(Generic[T]):
    data: Optional[T] = None
    error: Optional[str] = None
    kind: Optional[ErrorKind] = None

    @property
    def ok(self) -> bool:
        return self.kind is None

    @classmethod
    def success(cls, data: Optional[T] = None) -> "Result[T]":
        return cls(data=data)

    @classmethod
    def fail(cls, kind: ErrorKind, message: str) -> "Result[T]":
        return cls(error=message, kind=kind)

    @classmethod
    def unauthenticated(cls) -> "Result[T]":
        return cls.fail(ErrorKind.UNAUTHENTICATED, NOT_AUTHENTICATED)

    @classmethod
    def unauthorized(cls) -> "Result[T]":
        return cls.fail(ErrorKind.UNAUTHORIZED, NOT_AUTHORIZED)

    @classmethod
    def store_error(cls) -> "Result[T]":
        return cls.fail(ErrorKind.STORE, STORE_ERROR)
