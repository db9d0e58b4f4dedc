"""String commands: GET, SET and INCRBY."""

from __future__ import annotations

from dataclasses import dataclass, field

from .commands import BulkOutputCommand, Command, IntOutputCommand, _bulk
from .errors import OutputError
from .protocol import (
    ArrayRequest,
    BulkIntegerRequest,
    BulkRequest,
    NilResponse,
    Request,
    Response,
    StringResponse,
    _check_i64,
)


def get(key: str | bytes) -> BulkOutputCommand:
    """Build a GET command; its output is the value or None."""
    return BulkOutputCommand(ArrayRequest((BulkRequest(b"GET"), _bulk(key))))


@dataclass
class SetCommand(Command):
    """SET: true when the value was stored, false when a condition prevented it."""

    items: list[Request] = field(default_factory=list)
    expire: tuple[BulkRequest, BulkIntegerRequest] | None = None
    keep_ttl: bool = False
    exists: bool | None = None

    def expire_secs(self, secs: int) -> SetCommand:
        """Set the expire time in seconds."""
        self.expire = (BulkRequest(b"EX"), BulkIntegerRequest(secs))
        return self

    def expire_millis(self, millis: int) -> SetCommand:
        """Set the expire time in milliseconds."""
        self.expire = (BulkRequest(b"PX"), BulkIntegerRequest(millis))
        return self

    def if_exists(self) -> SetCommand:
        """Only set the key if it already exists."""
        self.exists = True
        return self

    def if_not_exists(self) -> SetCommand:
        """Only set the key if it does not exist yet."""
        self.exists = False
        return self

    def keepttl(self) -> SetCommand:
        """Retain the time to live associated with the key."""
        self.keep_ttl = True
        return self

    def to_request(self) -> Request:
        parts = list(self.items)
        if self.expire is not None:
            parts.extend(self.expire)
        if self.exists is not None:
            parts.append(BulkRequest(b"XX" if self.exists else b"NX"))
        if self.keep_ttl:
            parts.append(BulkRequest(b"KEEPTTL"))
        return ArrayRequest(tuple(parts))

    def to_output(self, response: Response) -> bool:
        if isinstance(response, NilResponse):
            return False
        if isinstance(response, StringResponse):
            if response.value == "OK":
                return True
            raise OutputError("Unexpected value within String", response)
        raise OutputError("Unexpected value", response)


def set(key: str | bytes, value: str | bytes) -> SetCommand:  # noqa: A001
    """Build a SET command storing ``value`` at ``key``."""
    return SetCommand([BulkRequest(b"SET"), _bulk(key), _bulk(value)])


def incr_by(key: str | bytes, increment: int) -> IntOutputCommand:
    """Build an INCRBY command; its output is the new value."""
    _check_i64(increment)
    return IntOutputCommand(
        ArrayRequest(
            (BulkRequest(b"INCRBY"), _bulk(key), BulkRequest(str(increment).encode("ascii")))
        )
    )