"""List commands: LINDEX, LPOP, RPOP, LPUSH and RPUSH."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .commands import BulkOutputCommand, Command, _bulk
from .errors import OutputError
from .protocol import (
    ArrayRequest,
    BulkIntegerRequest,
    BulkRequest,
    IntegerResponse,
    Request,
    Response,
)

_LEFT_NAMES = (b"LPUSH", b"LPUSHX")


def lindex(key: str | bytes, index: int) -> BulkOutputCommand:
    """Build an LINDEX command; its output is the element or None."""
    return BulkOutputCommand(
        ArrayRequest((BulkRequest(b"LINDEX"), _bulk(key), BulkIntegerRequest(index)))
    )


def lpop(key: str | bytes) -> BulkOutputCommand:
    """Build an LPOP command; its output is the removed first element or None."""
    return BulkOutputCommand(ArrayRequest((BulkRequest(b"LPOP"), _bulk(key))))


def rpop(key: str | bytes) -> BulkOutputCommand:
    """Build an RPOP command; its output is the removed last element or None."""
    return BulkOutputCommand(ArrayRequest((BulkRequest(b"RPOP"), _bulk(key))))


@dataclass
class LPushCommand(Command):
    """LPUSH or RPUSH: its output is the length of the list after the push."""

    items: list[Request] = field(default_factory=list)

    def if_exists(self) -> LPushCommand:
        """Push only if the key already exists and holds a list (LPUSHX/RPUSHX)."""
        first = self.items[0] if self.items else None
        if isinstance(first, BulkRequest) and first.data not in _LEFT_NAMES:
            name = b"RPUSHX"
        else:
            name = b"LPUSHX"
        if self.items:
            self.items[0] = BulkRequest(name)
        else:
            self.items.append(BulkRequest(name))
        return self

    def value(self, other: str | bytes) -> LPushCommand:
        """Add a value."""
        self.items.append(_bulk(other))
        return self

    def extend(self, others: Iterable[str | bytes]) -> LPushCommand:
        """Add several values."""
        self.items.extend(_bulk(other) for other in others)
        return self

    def to_request(self) -> Request:
        return ArrayRequest(tuple(self.items))

    def to_output(self, response: Response) -> int:
        if isinstance(response, IntegerResponse):
            return response.value
        raise OutputError("Cannot parse response", response)


def lpush(key: str | bytes, value: str | bytes) -> LPushCommand:
    """Build an LPUSH command inserting at the head of the list."""
    return LPushCommand([BulkRequest(b"LPUSH"), _bulk(key), _bulk(value)])


def rpush(key: str | bytes, value: str | bytes) -> LPushCommand:
    """Build an RPUSH command inserting at the tail of the list."""
    return LPushCommand([BulkRequest(b"RPUSH"), _bulk(key), _bulk(value)])