"""Conversions from server responses to plain Python values."""

from __future__ import annotations

from typing import Any, Callable

from .errors import OutputError
from .protocol import (
    ArrayResponse,
    BytesResponse,
    IntegerResponse,
    NilResponse,
    Response,
    StringResponse,
)

Converter = Callable[[Response], Any]

_INTEGER_BOUNDS: dict[str, tuple[int, int]] = {
    "isize": (-(2**63), 2**63 - 1),
    "usize": (0, 2**64 - 1),
    "i32": (-(2**31), 2**31 - 1),
    "u32": (0, 2**32 - 1),
    "u64": (0, 2**64 - 1),
}


def as_bytes(response: Response) -> bytes:
    """Return the payload of a bulk string reply."""
    if isinstance(response, BytesResponse):
        return response.data
    raise OutputError("Not a bytes object", response)


def as_str(response: Response) -> str:
    """Return the text of a simple string or of a UTF-8 bulk string."""
    if isinstance(response, StringResponse):
        return response.value
    if isinstance(response, BytesResponse):
        try:
            return response.data.decode("utf-8")
        except UnicodeDecodeError:
            raise OutputError("from response fail", response) from None
    raise OutputError("Cannot convert into a string", response)


def as_int(response: Response) -> int:
    """Return the value of an integer reply."""
    if isinstance(response, IntegerResponse):
        return response.value
    raise OutputError("Cannot be converted into an i64", response)


def as_bool(response: Response) -> bool:
    """Return an integer reply of 0 or 1 as a bool."""
    value = as_int(response)
    if value == 0:
        return False
    if value == 1:
        return True
    raise OutputError("i64 value cannot be represented as bool", IntegerResponse(value))


def as_ok(response: Response) -> None:
    """Accept only the simple string reply ``OK``."""
    if isinstance(response, StringResponse):
        if response.value == "OK":
            return None
        raise OutputError("Unexpected value within String", response)
    raise OutputError("Unexpected value", response)


def as_list(response: Response, item: Converter) -> list[Any]:
    """Convert every element of an array reply with ``item``."""
    if isinstance(response, ArrayResponse):
        return [item(value) for value in response.items]
    raise OutputError("Cannot be converted into a vector", response)


def as_tuple(response: Response, *args: Converter) -> tuple[Any, ...]:
    """Convert an array reply of exactly ``len(args)`` elements, one converter each."""
    if not isinstance(response, ArrayResponse):
        raise OutputError("Unexpected value", response)
    if len(response.items) != len(args):
        raise OutputError(f"Array needs to be {len(args)} elements", response)
    return tuple(convert(value) for convert, value in zip(args, response.items))


def as_dict(response: Response, key: Converter, value: Converter) -> dict[Any, Any]:
    """Convert an array reply of alternating keys and values into a dict."""
    if not isinstance(response, ArrayResponse):
        raise OutputError("Cannot be converted into a hashmap", response)
    result: dict[Any, Any] = {}
    items = iter(response.items)
    for raw_key in items:
        converted_key = key(raw_key)
        try:
            raw_value = next(items)
        except StopIteration:
            raise OutputError(
                "Cannot convert an odd number of elements into a hashmap", NilResponse()
            ) from None
        result[converted_key] = value(raw_value)
    return result


def as_bounded_int(response: Response, kind: str) -> int:
    """Return an integer reply checked against the range of ``kind``.

    ``kind`` is one of ``isize``, ``usize``, ``i32``, ``u32`` and ``u64``.
    """
    try:
        low, high = _INTEGER_BOUNDS[kind]
    except KeyError:
        raise ValueError(f"unknown integer kind: {kind!r}") from None
    value = as_int(response)
    if not low <= value <= high:
        raise OutputError(
            f"i64 value cannot be represented as {kind}", IntegerResponse(value)
        )
    return value