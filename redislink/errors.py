"""Errors raised while talking to a redis server."""

from __future__ import annotations

from typing import Any


class RedisError(Exception):
    """A protocol-level failure."""


class ParseError(RedisError):
    """The server sent bytes that are not valid RESP."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"Redis server response error: {self.message}"


class PeerGoneError(RedisError):
    """The connection is closed or an I/O operation on it failed."""

    def __init__(self, cause: OSError | None = None) -> None:
        super().__init__(cause)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"Io error: {self.cause!r}"


class CommandFailedError(RedisError):
    """A command could not be carried out."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    @classmethod
    def from_command_error(cls, error: CommandError) -> CommandFailedError:
        failure = cls(repr(error))
        failure.__cause__ = error
        return failure

    def __str__(self) -> str:
        return f"Command error: {self.detail!r}"


class RecvError(RedisError):
    """No reply could be received for a request."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"Recv error: {self.detail!r}"


class ConnectError(Exception):
    """Establishing a connection failed."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @classmethod
    def from_os_error(cls, error: OSError) -> ConnectError:
        failure = cls(str(error))
        failure.__cause__ = error
        return failure

    @classmethod
    def from_command_error(cls, error: CommandError) -> ConnectError:
        failure = cls(str(error))
        failure.__cause__ = error
        return failure

    def __str__(self) -> str:
        return self.message


class UnauthorizedError(ConnectError):
    """None of the configured passwords was accepted."""

    def __init__(self) -> None:
        super().__init__("Unauthorized")


class CommandError(Exception):
    """Executing a command failed."""


class ServerError(CommandError):
    """The server answered with an error reply."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class OutputError(CommandError):
    """A reply could not be turned into the command's output."""

    def __init__(self, message: str, response: Any) -> None:
        super().__init__(message, response)
        self.message = message
        self.response = response

    def __str__(self) -> str:
        return f"Command output parse error: {self.message}"


class ProtocolError(CommandError):
    """A protocol-level failure happened while executing a command."""

    def __init__(self, error: RedisError) -> None:
        super().__init__(error)
        self.error = error
        self.__cause__ = error

    def __str__(self) -> str:
        return str(self.error)