import socket
from concurrent.futures import ThreadPoolExecutor

import pytest

from redislink.client import Client
from redislink.commands import ping
from redislink.errors import (
    CommandFailedError,
    PeerGoneError,
    ProtocolError,
    RecvError,
    ServerError,
)
from redislink.protocol import StringResponse, array
from redislink.simple import SimpleClient
from redislink.strings import get


@pytest.fixture
def pair():
    left, right = socket.socketpair()
    left.settimeout(5)
    right.settimeout(5)
    client = Client(SimpleClient(left))
    yield client, right
    client.close()
    right.close()


def _read(sock, size):
    data = bytearray()
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        if not chunk:
            break
        data += chunk
    return bytes(data)


def test_exec_ping(pair):
    client, peer = pair
    peer.sendall(b"+PONG\r\n")
    assert client.exec(ping()) == "PONG"
    assert _read(peer, 14) == b"*1\r\n$4\r\nPING\r\n"


def test_call_returns_raw_response(pair):
    client, peer = pair
    peer.sendall(b"+PONG\r\n")
    assert client.call(array("PING")) == StringResponse("PONG")


def test_exec_server_error(pair):
    client, peer = pair
    peer.sendall(b"-ERR boom\r\n")
    with pytest.raises(ServerError) as info:
        client.exec(get("key"))
    assert info.value.message == "ERR boom"


def test_flushdb_sends_command(pair):
    client, peer = pair
    peer.sendall(b"+OK\r\n")
    assert client.flushdb() is None
    expected = b"*1\r\n$7\r\nFLUSHDB\r\n"
    assert _read(peer, len(expected)) == expected


def test_peer_hangup_is_protocol_error(pair):
    client, peer = pair
    peer.shutdown(socket.SHUT_WR)
    with pytest.raises(ProtocolError) as info:
        client.exec(ping())
    assert isinstance(info.value.error, CommandFailedError)


def test_is_connected_and_repr(pair):
    client, _ = pair
    assert client.is_connected()
    assert repr(client) == "Client(connected=True)"
    client.close()
    assert not client.is_connected()
    assert repr(client) == "Client(connected=False)"


def test_exec_after_close_is_peer_gone(pair):
    client, _ = pair
    client.close()
    with pytest.raises(ProtocolError) as info:
        client.exec(ping())
    assert isinstance(info.value.error, PeerGoneError)


def test_call_after_close_raises_recv_error(pair):
    client, _ = pair
    client.close()
    with pytest.raises(RecvError):
        client.call(array("PING"))


def test_concurrent_exec(pair):
    client, peer = pair
    count = 5
    peer.sendall(b"+PONG\r\n")
    with ThreadPoolExecutor(max_workers=count) as pool:
        futures = [pool.submit(client.exec, ping()) for _ in range(count)]
        for _ in range(count - 1):
            _read(peer, 14)
            peer.sendall(b"+PONG\r\n")
        results = [future.result(timeout=5) for future in futures]
    assert results == ["PONG"] * count