# redislink

redislink is a small, synchronous Redis client with no dependencies. It has three parts:

- a RESP encoder and decoder (`redislink.protocol`, built on the codec
  interfaces in `redislink.codec`),
- command builders that turn server replies into Python values
  (`redislink.commands`, `redislink.strings`, `redislink.keys`,
  `redislink.hashes`, `redislink.lists`), plus reply converters in
  `redislink.convert`,
- clients that talk to a server over TCP (`redislink.simple`,
  `redislink.client`, `redislink.connector`).

## Installation

```
pip install redislink
```

## Connecting

```python
from redislink.connector import RedisConnector

client = RedisConnector("127.0.0.1:6379").connect()
```

The address is either a `"host:port"` string or a `(host, port)` tuple.

If the server needs a password, add one or more candidates. The connector tries each one with `AUTH` in turn. If the server accepts none of them, it raises `UnauthorizedError`.

```python
password = "password"
client = RedisConnector("127.0.0.1:6379").password(password).connect()
```

`connect_timeout(timeout)` takes seconds or a `datetime.timedelta`. It uses that timeout for the connect and for every later read and write on the socket.

`connect_simple()` and `connect_simple_timeout(timeout)` return a plain `SimpleClient`. It sends commands on the calling thread. The shared `Client` instead hands each request to a background worker thread, so one `Client` can be used from several threads.

You can use `Client` and `SimpleClient` as context managers. Both close the connection on exit.

## Running commands

Build a command with one of the builder functions and pass it to `exec`. The reply comes back already converted.

```python
from redislink import commands, strings, keys, hashes, lists

client.exec(commands.ping())                                    # "PONG"
client.exec(commands.select(1))                                 # True
client.exec(strings.set("greeting", "hello").expire_secs(60))   # True
client.exec(strings.get("greeting"))                            # b"hello"
client.exec(strings.incr_by("counter", 5))                      # 5

client.exec(keys.exists("greeting").key("other"))               # 1
client.exec(keys.expire("greeting", 30))                        # True
client.exec(keys.ttl("greeting"))                               # TtlResult(seconds=30, found=True)
client.exec(keys.delete("greeting"))                            # 1

client.exec(hashes.hset("user", "name", "alice").entry("age", "30"))  # 2
client.exec(hashes.hget_all("user"))                  # {b"name": b"alice", b"age": b"30"}
client.exec(hashes.hincr_by("user", "age", 1))        # 31

client.exec(lists.lpush("queue", "a").extend(["b", "c"]))  # 3
client.exec(lists.rpop("queue"))                           # b"a"

client.flushdb()
client.close()
```

### Command options

- `SetCommand` adds options to `SET`:
  - `expire_secs` adds `EX`.
  - `expire_millis` adds `PX`.
  - `if_exists` adds `XX`.
  - `if_not_exists` adds `NX`.
  - `keepttl` adds `KEEPTTL`.

  `exec` returns `False` when a condition stopped the value from being stored.
- `TtlResult` has two special values: `TtlResult.NO_EXPIRE` for a key with no timeout and `TtlResult.NOT_FOUND` for a missing key.
- `LPushCommand.if_exists()` turns `LPUSH` into `LPUSHX` and `RPUSH` into `RPUSHX`.
- `HDelCommand.remove` and `HDelCommand.remove_all` add more fields to delete.
- `KeysCommand.key` and `KeysCommand.keys` add more keys to `DEL` and `EXISTS`.

## Errors

All errors live in `redislink.errors`.

- `ServerError` (a `CommandError`): the server answered with an error reply.
- `OutputError` (a `CommandError`): the reply had a shape the command does not expect.
- `ProtocolError` (a `CommandError`): wraps a `RedisError`.
  - On a `SimpleClient` that is a `ParseError` or a `PeerGoneError`.
  - On a `Client`, a failed send reaches you as a `CommandFailedError` inside the `ProtocolError`.
- `Client.call` and `Client.flushdb` raise `RedisError` subclasses directly. After `close()` that is a `RecvError`.
- `ConnectError` and its subclass `UnauthorizedError` are raised while connecting.

## Working with the codec directly

```python
from redislink.protocol import RespCodec, array

buf = bytearray()
RespCodec().encode(array("SET", "x", "1"), buf)
bytes(buf)   # b"*3\r\n$3\r\nSET\r\n$1\r\nx\r\n$1\r\n1\r\n"
```

`RespCodec.decode(buf)` removes one complete reply from the front of a `bytearray` and returns it as a `Response`. If the buffer does not yet hold a whole reply, it returns `None`.

The helpers in `redislink.convert` turn a `Response` into plain Python values:

- `as_bytes`, `as_str`, `as_int`, `as_bool`, `as_ok`,
- `as_list`, `as_tuple`, `as_dict`,
- `as_bounded_int`.

## What it does not do

redislink covers only the commands listed above, plus `FLUSHDB` through `Client.flushdb`. To send other commands, build the request yourself with `array(...)` and pass it to `Client.call`, which returns the raw `Response`.

It has none of the following:

- pipelining or transactions,
- publish/subscribe,
- TLS,
- connection pooling,
- reconnection,
- a command-line tool.