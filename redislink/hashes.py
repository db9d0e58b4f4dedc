"""Hash commands: HGET, HGETALL, HSET, HDEL, HLEN and HINCRBY."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .commands import BulkOutputCommand, Command, IntOutputCommand, _bulk
from .convert import as_bytes, as_dict
from .errors import OutputError
from .protocol import ArrayRequest, BulkRequest, IntegerResponse, Request, Response, _check_i64


def hget(key: str | bytes, field: str | bytes) -> BulkOutputCommand:
    """Build an HGET command; its output is the field's value or None."""
    return BulkOutputCommand(ArrayRequest((BulkRequest(b"HGET"), _bulk(key), _bulk(field))))


@dataclass
class HGetAllCommand(Command):
    """HGETALL: every field and value of a hash as a dict of bytes."""

    request: Request

    def to_request(self) -> Request:
        return self.request

    def to_output(self, response: Response) -> dict[bytes, bytes]:
        return as_dict(response, as_bytes, as_bytes)


def hget_all(key: str | bytes) -> HGetAllCommand:
    """Build an HGETALL command."""
    return HGetAllCommand(ArrayRequest((BulkRequest(b"HGETALL"), _bulk(key))))


def _count(response: Response) -> int:
    if isinstance(response, IntegerResponse):
        return response.value
    raise OutputError("Cannot parse response", response)


@dataclass
class HSetCommand(Command):
    """HSET: its output is the number of fields added."""

    items: list[Request] = field(default_factory=list)

    def entry(self, field: str | bytes, value: str | bytes) -> HSetCommand:
        """Add a field and value, returning the command."""
        self.add_entry(field, value)
        return self

    def add_entry(self, field: str | bytes, value: str | bytes) -> None:
        """Add a field and value in place."""
        self.items.append(_bulk(field))
        self.items.append(_bulk(value))

    def to_request(self) -> Request:
        return ArrayRequest(tuple(self.items))

    def to_output(self, response: Response) -> int:
        return _count(response)


def hset(key: str | bytes, field: str | bytes, value: str | bytes) -> HSetCommand:
    """Build an HSET command."""
    return HSetCommand([BulkRequest(b"HSET"), _bulk(key), _bulk(field), _bulk(value)])


@dataclass
class HDelCommand(Command):
    """HDEL: its output is the number of fields removed."""

    items: list[Request] = field(default_factory=list)

    def remove(self, field: str | bytes) -> HDelCommand:
        """Add a field to remove."""
        self.items.append(_bulk(field))
        return self

    def remove_all(self, fields: Iterable[str | bytes]) -> HDelCommand:
        """Add several fields to remove."""
        self.items.extend(_bulk(name) for name in fields)
        return self

    def to_request(self) -> Request:
        return ArrayRequest(tuple(self.items))

    def to_output(self, response: Response) -> int:
        return _count(response)


def hdel(key: str | bytes, field: str | bytes) -> HDelCommand:
    """Build an HDEL command."""
    return HDelCommand([BulkRequest(b"HDEL"), _bulk(key), _bulk(field)])


def hlen(key: str | bytes) -> IntOutputCommand:
    """Build an HLEN command; its output is the number of fields."""
    return IntOutputCommand(ArrayRequest((BulkRequest(b"HLEN"), _bulk(key))))


def hincr_by(key: str | bytes, field: str | bytes, increment: int) -> IntOutputCommand:
    """Build an HINCRBY command; its output is the new value."""
    _check_i64(increment)
    return IntOutputCommand(
        ArrayRequest(
            (
                BulkRequest(b"HINCRBY"),
                _bulk(key),
                _bulk(field),
                BulkRequest(str(increment).encode("ascii")),
            )
        )
    )