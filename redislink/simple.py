"""A blocking client that sends one command and waits for its reply."""

from __future__ import annotations

import socket
import threading
from typing import Any

from .commands import Command
from .errors import CommandError, PeerGoneError, ProtocolError, RedisError
from .protocol import Request, RespCodec, Response

_CHUNK = 64


class SimpleClient:
    """Talks to a redis server over a connected socket, one command at a time."""

    def __init__(self, sock: socket.socket) -> None:
        self.codec = RespCodec()
        self._sock: socket.socket | None = sock
        self._lock = threading.Lock()

    def exec(self, command: Command) -> Any:
        """Send ``command`` and return its converted output."""
        data = self.encode(command)
        response = self.send(data)
        return self.decode(command, response)

    def encode(self, command: Command) -> bytes:
        """Return the wire form of ``command``."""
        return self.encode_request(command.to_request())

    def encode_request(self, request: Request) -> bytes:
        """Return the wire form of ``request``."""
        buf = bytearray()
        self.codec.encode(request, buf)
        return bytes(buf)

    def send(self, data: bytes) -> Response:
        """Write ``data`` and read back one complete response."""
        with self._lock:
            sock = self._sock
            if sock is None:
                raise ProtocolError(PeerGoneError())
            buffer = bytearray()
            try:
                sock.sendall(data)
                while True:
                    chunk = sock.recv(_CHUNK)
                    if not chunk:
                        self._drop()
                        raise ProtocolError(PeerGoneError())
                    buffer += chunk
                    response = self.codec.decode(buffer)
                    if response is not None:
                        return response
            except OSError as exc:
                raise ProtocolError(PeerGoneError(exc)) from exc
            except RedisError as exc:
                raise ProtocolError(exc) from exc

    def decode(self, command: Command, response: Response) -> Any:
        """Convert ``response`` for ``command``, raising ServerError on error replies."""
        return command.to_output(response.into_result())

    def is_closed(self) -> bool:
        """Return True once the connection is closed."""
        return self._sock is None

    def close(self) -> None:
        """Close the connection."""
        self._drop()

    def _drop(self) -> None:
        sock, self._sock = self._sock, None
        if sock is not None:
            try:
                sock.close()
            except OSError:
                pass

    def __enter__(self) -> SimpleClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["SimpleClient", "CommandError"]