"""Key commands: DEL, EXISTS, EXPIRE, EXPIREAT and TTL."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Iterable

from .commands import BoolOutputCommand, Command, _bulk
from .convert import as_int
from .errors import OutputError
from .protocol import ArrayRequest, BulkRequest, IntegerResponse, Request, Response, _check_i64


@dataclass
class KeysCommand(Command):
    """A command over one or more keys whose reply is a count."""

    items: list[Request] = field(default_factory=list)

    def key(self, other: str | bytes) -> KeysCommand:
        """Add a key."""
        self.items.append(_bulk(other))
        return self

    def keys(self, others: Iterable[str | bytes]) -> KeysCommand:
        """Add several keys."""
        self.items.extend(_bulk(other) for other in others)
        return self

    def to_request(self) -> Request:
        return ArrayRequest(tuple(self.items))

    def to_output(self, response: Response) -> int:
        if isinstance(response, IntegerResponse):
            return response.value
        raise OutputError("Cannot parse response", response)


def delete(key: str | bytes) -> KeysCommand:
    """Build a DEL command; its output is the number of keys removed."""
    return KeysCommand([BulkRequest(b"DEL"), _bulk(key)])


def exists(key: str | bytes) -> KeysCommand:
    """Build an EXISTS command; its output is the number of keys that exist."""
    return KeysCommand([BulkRequest(b"EXISTS"), _bulk(key)])


def _timeout_command(name: bytes, key: str | bytes, amount: int) -> BoolOutputCommand:
    _check_i64(amount)
    return BoolOutputCommand(
        ArrayRequest((BulkRequest(name), _bulk(key), BulkRequest(str(amount).encode("ascii"))))
    )


def expire(key: str | bytes, seconds: int) -> BoolOutputCommand:
    """Build an EXPIRE command setting a timeout in seconds."""
    return _timeout_command(b"EXPIRE", key, seconds)


def expire_at(key: str | bytes, timestamp: int) -> BoolOutputCommand:
    """Build an EXPIREAT command setting a Unix-time deadline."""
    return _timeout_command(b"EXPIREAT", key, timestamp)


@dataclass(frozen=True)
class TtlResult:
    """Remaining time to live: seconds, no expiry, or missing key."""

    seconds: int | None = None
    found: bool = True

    NO_EXPIRE: ClassVar[TtlResult]
    NOT_FOUND: ClassVar[TtlResult]


TtlResult.NO_EXPIRE = TtlResult(None, True)
TtlResult.NOT_FOUND = TtlResult(None, False)


@dataclass
class TtlCommand(Command):
    """TTL: the remaining time to live of a key."""

    request: Request

    def to_request(self) -> Request:
        return self.request

    def to_output(self, response: Response) -> TtlResult:
        value = as_int(response)
        if value == -1:
            return TtlResult.NO_EXPIRE
        if value == -2:
            return TtlResult.NOT_FOUND
        return TtlResult(value)


def ttl(key: str | bytes) -> TtlCommand:
    """Build a TTL command."""
    return TtlCommand(ArrayRequest((BulkRequest(b"TTL"), _bulk(key))))