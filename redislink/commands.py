"""Commands: a request to send and a conversion of the reply."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from .convert import as_bool
from .errors import OutputError, ServerError
from .protocol import (
    ArrayRequest,
    BulkIntegerRequest,
    BulkRequest,
    BytesResponse,
    ErrorResponse,
    IntegerResponse,
    NilResponse,
    Request,
    Response,
    StringResponse,
)

_U32_MAX = 2**32 - 1


def _bulk(value: Any) -> BulkRequest:
    """Turn text or bytes into a bulk string request."""
    if isinstance(value, BulkRequest):
        return value
    if isinstance(value, str):
        return BulkRequest(value.encode("utf-8"))
    if isinstance(value, (bytes, bytearray, memoryview)):
        return BulkRequest(bytes(value))
    raise TypeError(f"cannot use {type(value).__name__} as a bulk string")


class Command(ABC):
    """Something that can be sent to the server and whose reply can be read."""

    @abstractmethod
    def to_request(self) -> Request:
        """Return the request to send."""

    @abstractmethod
    def to_output(self, response: Response) -> Any:
        """Turn the server's reply into the command's output."""


@dataclass
class _PreparedCommand(Command, ABC):
    request: Request

    def to_request(self) -> Request:
        return self.request


@dataclass
class BulkOutputCommand(_PreparedCommand):
    """A command whose reply is a bulk string or nil."""

    def to_output(self, response: Response) -> bytes | None:
        if isinstance(response, NilResponse):
            return None
        if isinstance(response, BytesResponse):
            return response.data
        raise OutputError("Cannot parse response", response)


@dataclass
class IntOutputCommand(_PreparedCommand):
    """A command whose reply is an integer."""

    def to_output(self, response: Response) -> int:
        if isinstance(response, IntegerResponse):
            return response.value
        raise OutputError("Cannot parse response", response)


@dataclass
class BoolOutputCommand(_PreparedCommand):
    """A command whose reply is the integer 0 or 1."""

    def to_output(self, response: Response) -> bool:
        return as_bool(response)


def _is_ok(response: Response) -> bool:
    return isinstance(response, StringResponse) and response.value == "OK"


@dataclass
class AuthCommand(_PreparedCommand):
    """AUTH: true when the server accepts the password."""

    def to_output(self, response: Response) -> bool:
        return _is_ok(response)


@dataclass
class SelectCommand(_PreparedCommand):
    """SELECT: true when the database was selected."""

    def to_output(self, response: Response) -> bool:
        return _is_ok(response)


@dataclass
class PingCommand(_PreparedCommand):
    """PING: returns the server's status text."""

    def to_output(self, response: Response) -> str:
        if isinstance(response, StringResponse):
            return response.value
        if isinstance(response, ErrorResponse):
            raise ServerError(response.message)
        raise OutputError("Unknown response", response)


def auth(password: str | bytes) -> AuthCommand:
    """Build an AUTH command."""
    return AuthCommand(ArrayRequest((BulkRequest(b"AUTH"), _bulk(password))))


def select(db: int) -> SelectCommand:
    """Build a SELECT command for the zero-based database index ``db``."""
    if isinstance(db, bool) or not isinstance(db, int):
        raise TypeError(f"database index must be an integer, got {type(db).__name__}")
    if not 0 <= db <= _U32_MAX:
        raise ValueError(f"database index out of range: {db}")
    return SelectCommand(ArrayRequest((BulkRequest(b"SELECT"), BulkIntegerRequest(db))))


def ping() -> PingCommand:
    """Build a PING command."""
    return PingCommand(ArrayRequest((BulkRequest(b"PING"),)))