"""A shared client that serialises commands through a background worker."""

from __future__ import annotations

import logging
import queue
import threading
from concurrent.futures import Future
from typing import Any

from .commands import Command
from .errors import (
    CommandError,
    CommandFailedError,
    PeerGoneError,
    ProtocolError,
    RecvError,
    RedisError,
)
from .protocol import Request, Response, array
from .simple import SimpleClient

_log = logging.getLogger(__name__)
_STOP = object()


class Client:
    """Thread-safe redis client; requests are sent one at a time by a worker thread."""

    def __init__(self, io: SimpleClient) -> None:
        self._io = io
        self._queue: queue.Queue[Any] = queue.Queue()
        self._state_lock = threading.Lock()
        self._stopped = False
        self._worker = threading.Thread(target=self._run, name="redis-client", daemon=True)
        self._worker.start()

    def _run(self) -> None:
        while True:
            job = self._queue.get()
            if job is _STOP:
                _log.info("Redis client is dropped")
                return
            data, future = job
            try:
                future.set_result(self._io.send(data))
            except CommandError as exc:
                future.set_exception(CommandFailedError.from_command_error(exc))

    def exec(self, command: Command) -> Any:
        """Execute ``command`` and return its converted output."""
        is_open = not self._io.is_closed()
        try:
            response = self.call(command.to_request())
        except RedisError as exc:
            if not is_open:
                raise ProtocolError(PeerGoneError()) from exc
            raise ProtocolError(exc) from exc
        if not is_open:
            raise ProtocolError(PeerGoneError())
        return command.to_output(response.into_result())

    def flushdb(self) -> None:
        """Delete all the keys of the currently selected database."""
        self.call(array("FLUSHDB"))

    def is_connected(self) -> bool:
        """Return True while the underlying connection is open."""
        return not self._io.is_closed()

    def call(self, request: Request) -> Response:
        """Send ``request`` and return the raw response, raising RedisError on failure."""
        data = self._io.encode_request(request)
        future: Future[Response] = Future()
        with self._state_lock:
            if self._stopped:
                raise RecvError("receiving on a closed channel")
            self._queue.put((data, future))
        return future.result()

    def close(self) -> None:
        """Stop the worker and close the connection."""
        with self._state_lock:
            if self._stopped:
                return
            self._stopped = True
            self._queue.put(_STOP)
        self._worker.join()
        self._io.close()

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Client(connected={self.is_connected()})"