"""Connecting to a redis server and authenticating."""

from __future__ import annotations

import socket
from datetime import timedelta
from typing import Union

from .client import Client
from .commands import auth
from .errors import CommandError, ConnectError, UnauthorizedError
from .simple import SimpleClient

Address = Union[str, "tuple[str, int]"]


def _split_address(address: Address) -> tuple[str, int]:
    if isinstance(address, tuple):
        host, port = address
    elif isinstance(address, str):
        host, sep, port = address.rpartition(":")
        if not sep or not host:
            raise ConnectError(f"invalid socket address: {address!r}")
        if host.startswith("[") and host.endswith("]"):
            host = host[1:-1]
    else:
        raise ConnectError(f"invalid socket address: {address!r}")
    try:
        number = int(port)
    except (TypeError, ValueError):
        raise ConnectError(f"invalid port in socket address: {address!r}") from None
    if not 0 <= number <= 65535:
        raise ConnectError(f"invalid port in socket address: {address!r}")
    return host, number


def _seconds(timeout: float | timedelta) -> float:
    if isinstance(timeout, timedelta):
        return timeout.total_seconds()
    return float(timeout)


class RedisConnector:
    """Builds clients connected to the server at ``address``."""

    def __init__(self, address: Address) -> None:
        self.address = address
        self.passwords: list[str] = []

    def password(self, password: str) -> RedisConnector:
        """Add a password to try when authenticating."""
        self.passwords.append(str(password))
        return self

    def _authenticate(self, sock: socket.socket) -> SimpleClient:
        client = SimpleClient(sock)
        if not self.passwords:
            return client
        for candidate in self.passwords:
            try:
                accepted = client.exec(auth(candidate))
            except CommandError as exc:
                client.close()
                raise ConnectError.from_command_error(exc) from exc
            if accepted:
                return client
        client.close()
        raise UnauthorizedError()

    def _connect(self) -> SimpleClient:
        host, port = _split_address(self.address)
        try:
            sock = socket.create_connection((host, port))
        except OSError as exc:
            raise ConnectError.from_os_error(exc) from exc
        return self._authenticate(sock)

    def _connect_timeout(self, timeout: float | timedelta) -> SimpleClient:
        host, port = _split_address(self.address)
        seconds = _seconds(timeout)
        try:
            infos = socket.getaddrinfo(host, port, type=socket.SOCK_STREAM)
        except OSError as exc:
            raise ConnectError.from_os_error(exc) from exc
        if not infos:
            raise ConnectError("none socket addr!")
        family, kind, proto, _, sockaddr = infos[-1]
        sock = socket.socket(family, kind, proto)
        try:
            sock.settimeout(seconds)
            sock.connect(sockaddr)
        except OSError as exc:
            sock.close()
            raise ConnectError.from_os_error(exc) from exc
        return self._authenticate(sock)

    def connect(self) -> Client:
        """Connect and return a shared client."""
        return Client(self._connect())

    def connect_timeout(self, timeout: float | timedelta) -> Client:
        """Connect with a timeout, also used for reads and writes, and return a shared client."""
        return Client(self._connect_timeout(timeout))

    def connect_simple(self) -> SimpleClient:
        """Connect and return a simple client."""
        return self._connect()

    def connect_simple_timeout(self, timeout: float | timedelta) -> SimpleClient:
        """Connect with a timeout and return a simple client."""
        return self._connect_timeout(timeout)