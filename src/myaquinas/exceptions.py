__all__ = [
    "ErrorKind",
    "MyAquinasBadCredentialsError",
    "MyAquinasBadHttpStatusError",
    "MyAquinasException",
    "MyAquinasIllegalStateError",
    "MyAquinasProtocolError",
    "MyAquinasTransportError",
    "MyAquinasUnauthorizedError",
]

from dataclasses import dataclass
from enum import Enum, auto
from typing import ClassVar


class ErrorKind(Enum):
    ILLEGAL_STATE = auto()
    BAD_CREDENTIALS = auto()
    UNAUTHORIZED = auto()
    PROTOCOL_VIOLATION = auto()
    BAD_HTTP_STATUS = auto()
    TRANSPORT = auto()


@dataclass
class MyAquinasException(Exception):
    """Base exception class for MyAquinas API errors."""

    message: str

    kind: ClassVar[ErrorKind]

    def __str__(self) -> str:
        return self.message


class MyAquinasIllegalStateError(MyAquinasException):
    """An operation was invoked on an object whose state forbids it."""

    kind = ErrorKind.ILLEGAL_STATE


class MyAquinasBadCredentialsError(MyAquinasException):
    """The server rejected the admission number/password pair."""

    kind = ErrorKind.BAD_CREDENTIALS


class MyAquinasUnauthorizedError(MyAquinasException):
    """The session token was rejected. Authenticate again."""

    kind = ErrorKind.UNAUTHORIZED


class MyAquinasProtocolError(MyAquinasException):
    """The server answered successfully, but not with what we expected."""

    kind = ErrorKind.PROTOCOL_VIOLATION


@dataclass
class MyAquinasBadHttpStatusError(MyAquinasException):
    """The server answered with an unexpected HTTP status."""

    status_code: int
    reason: str = ""

    kind = ErrorKind.BAD_HTTP_STATUS


class MyAquinasTransportError(MyAquinasException):
    """No HTTP status was obtained: DNS, connection or timeout failure."""

    kind = ErrorKind.TRANSPORT
