"""RESP request and response values and the codec that reads and writes them."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Iterable

from .codec import Decoder, Encoder
from .errors import ParseError, ServerError

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1

_CRLF = b"\r\n"
_INTEGER = re.compile(rb"[+-]?[0-9]+")


def _check_i64(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an integer, got {type(value).__name__}")
    if not I64_MIN <= value <= I64_MAX:
        raise ValueError(f"integer out of 64-bit range: {value}")
    return value


def _write_header(symbol: bytes, length: int, dst: bytearray) -> None:
    dst += symbol
    dst += str(length).encode("ascii")
    dst += _CRLF


@dataclass(frozen=True)
class Request:
    """A value sent to the server."""

    def add(self, other: Any) -> ArrayRequest:
        """Return an array request with ``other`` appended."""
        item = to_request(other)
        if isinstance(self, ArrayRequest):
            return ArrayRequest(self.items + (item,))
        return ArrayRequest((self, item))

    def extend(self, others: Iterable[Any]) -> ArrayRequest:
        """Return an array request with all of ``others`` appended."""
        extra = tuple(to_request(other) for other in others)
        if isinstance(self, ArrayRequest):
            return ArrayRequest(self.items + extra)
        return ArrayRequest((self,) + extra)

    def _write(self, dst: bytearray) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class ArrayRequest(Request):
    """Zero or more nested requests."""

    items: tuple[Request, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def _write(self, dst: bytearray) -> None:
        _write_header(b"*", len(self.items), dst)
        for item in self.items:
            item._write(dst)


@dataclass(frozen=True)
class BulkRequest(Request):
    """A binary-safe bulk string."""

    data: bytes = b""

    def __post_init__(self) -> None:
        data = self.data
        if isinstance(data, str):
            data = data.encode("utf-8")
        object.__setattr__(self, "data", bytes(data))

    def _write(self, dst: bytearray) -> None:
        _write_header(b"$", len(self.data), dst)
        dst += self.data
        dst += _CRLF


@dataclass(frozen=True)
class BulkIntegerRequest(Request):
    """An integer sent as its decimal bulk string."""

    value: int = 0

    def __post_init__(self) -> None:
        _check_i64(self.value)

    def _write(self, dst: bytearray) -> None:
        digits = str(self.value).encode("ascii")
        _write_header(b"$", len(digits), dst)
        dst += digits
        dst += _CRLF


@dataclass(frozen=True)
class StringRequest(Request):
    """A simple string."""

    value: str = ""

    def _write(self, dst: bytearray) -> None:
        dst += b"+"
        dst += self.value.encode("utf-8")
        dst += _CRLF


@dataclass(frozen=True)
class IntegerRequest(Request):
    """A signed 64-bit integer."""

    value: int = 0

    def __post_init__(self) -> None:
        _check_i64(self.value)

    def _write(self, dst: bytearray) -> None:
        _write_header(b":", self.value, dst)


def to_request(value: Any) -> Request:
    """Turn a Python value into a request: text and bytes become bulk strings, ints integers."""
    if isinstance(value, Request):
        return value
    if isinstance(value, bool):
        raise TypeError("cannot convert bool to a request")
    if isinstance(value, int):
        return IntegerRequest(value)
    if isinstance(value, str):
        return BulkRequest(value.encode("utf-8"))
    if isinstance(value, (bytes, bytearray, memoryview)):
        return BulkRequest(bytes(value))
    raise TypeError(f"cannot convert {type(value).__name__} to a request")


def array(*args: Any) -> ArrayRequest:
    """Build an array request from the given values."""
    return ArrayRequest(tuple(to_request(arg) for arg in args))


@dataclass(frozen=True)
class Response:
    """A value read from the server."""

    def into_result(self) -> Response:
        """Return the response itself, raising ServerError for error replies."""
        return self


@dataclass(frozen=True)
class NilResponse(Response):
    """The null reply."""


@dataclass(frozen=True)
class ArrayResponse(Response):
    """Zero or more nested responses."""

    items: tuple[Response, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True)
class BytesResponse(Response):
    """A bulk string."""

    data: bytes = b""


@dataclass(frozen=True)
class StringResponse(Response):
    """A simple string."""

    value: str = ""


@dataclass(frozen=True)
class ErrorResponse(Response):
    """An error reported by the server."""

    message: str = ""

    def into_result(self) -> Response:
        raise ServerError(self.message)


@dataclass(frozen=True)
class IntegerResponse(Response):
    """A signed 64-bit integer."""

    value: int = 0


_Parsed = "tuple[Response, int] | None"


def _parse_length(buf: bytearray, idx: int) -> tuple[int, int] | None:
    end = buf.find(_CRLF, idx)
    if end < 0:
        return None
    text = bytes(buf[idx:end])
    if _INTEGER.fullmatch(text) is None:
        raise ParseError(f"Not an integer: {text[:10]!r}")
    value = int(text)
    if not I64_MIN <= value <= I64_MAX:
        raise ParseError(f"Not an integer: {text[:10]!r}")
    return value, end + 2


def _parse_line(buf: bytearray, idx: int) -> tuple[str, int] | None:
    end = buf.find(_CRLF, idx)
    if end < 0:
        return None
    raw = bytes(buf[idx:end])
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        raise ParseError(f"Not a valid string: {raw[:10]!r}") from None
    return text, end + 2


def _parse_bulk(buf: bytearray, idx: int) -> tuple[Response, int] | None:
    header = _parse_length(buf, idx)
    if header is None:
        return None
    size, pos = header
    if size == -1:
        return NilResponse(), pos
    if size < 0:
        raise ParseError(f"Invalid string size: {size}")
    if len(buf) - pos < size + 2:
        return None
    return BytesResponse(bytes(buf[pos:pos + size])), pos + size + 2


def _parse_array(buf: bytearray, idx: int) -> tuple[Response, int] | None:
    header = _parse_length(buf, idx)
    if header is None:
        return None
    size, pos = header
    if size == -1:
        return NilResponse(), pos
    if size < 0:
        raise ParseError(f"Invalid array size: {size}")
    items = []
    for _ in range(size):
        parsed = _parse(buf, pos)
        if parsed is None:
            return None
        item, pos = parsed
        items.append(item)
    return ArrayResponse(tuple(items)), pos


def _parse(buf: bytearray, idx: int) -> tuple[Response, int] | None:
    if len(buf) <= idx:
        return None
    marker = buf[idx]
    start = idx + 1
    if marker == ord("$"):
        return _parse_bulk(buf, start)
    if marker == ord("*"):
        return _parse_array(buf, start)
    if marker == ord(":"):
        header = _parse_length(buf, start)
        if header is None:
            return None
        return IntegerResponse(header[0]), header[1]
    if marker == ord("+"):
        line = _parse_line(buf, start)
        if line is None:
            return None
        return StringResponse(line[0]), line[1]
    if marker == ord("-"):
        line = _parse_line(buf, start)
        if line is None:
            return None
        return ErrorResponse(line[0]), line[1]
    raise ParseError(f"Unexpected byte: {marker}")


class RespCodec(Encoder, Decoder):
    """Reads responses and writes requests in the RESP wire format."""

    def encode(self, item: Request, dst: bytearray) -> None:
        item._write(dst)

    def decode(self, src: bytearray) -> Response | None:
        parsed = _parse(src, 0)
        if parsed is None:
            return None
        response, end = parsed
        del src[:end]
        return response