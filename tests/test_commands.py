import pytest

from redislink.commands import (
    AuthCommand,
    BoolOutputCommand,
    BulkOutputCommand,
    IntOutputCommand,
    PingCommand,
    SelectCommand,
    auth,
    ping,
    select,
)
from redislink.errors import OutputError, ServerError
from redislink.protocol import (
    ArrayRequest,
    ArrayResponse,
    BulkIntegerRequest,
    BulkRequest,
    BytesResponse,
    ErrorResponse,
    IntegerResponse,
    NilResponse,
    RespCodec,
    StringResponse,
)


def _round_trip(command):
    buf = bytearray()
    codec = RespCodec()
    codec.encode(command.to_request(), buf)
    decoded = codec.decode(buf)
    assert buf == bytearray()
    return decoded


def test_ping_request():
    command = ping()
    assert command.to_request() == ArrayRequest((BulkRequest(b"PING"),))
    assert _round_trip(command) == ArrayResponse((BytesResponse(b"PING"),))


def test_ping_output():
    command = ping()
    assert command.to_output(StringResponse("PONG")) == "PONG"


def test_ping_error_reply():
    with pytest.raises(ServerError) as info:
        ping().to_output(ErrorResponse("ERR broken"))
    assert info.value.message == "ERR broken"


def test_ping_unknown_reply():
    response = IntegerResponse(1)
    with pytest.raises(OutputError) as info:
        ping().to_output(response)
    assert info.value.response == response


def test_auth_request():
    password = "password"
    command = auth(password)
    assert isinstance(command, AuthCommand)
    assert _round_trip(command) == ArrayResponse(
        (BytesResponse(b"AUTH"), BytesResponse(password.encode()))
    )


def test_auth_output():
    password = "password"
    command = auth(password)
    assert command.to_output(StringResponse("OK")) is True
    assert command.to_output(StringResponse("NO")) is False
    assert command.to_output(ErrorResponse("WRONGPASS")) is False


def test_auth_rejects_integer():
    with pytest.raises(TypeError):
        auth(5)


def test_select_request():
    command = select(1)
    assert isinstance(command, SelectCommand)
    assert command.to_request() == ArrayRequest(
        (BulkRequest(b"SELECT"), BulkIntegerRequest(1))
    )
    assert _round_trip(command) == ArrayResponse(
        (BytesResponse(b"SELECT"), BytesResponse(b"1"))
    )


def test_select_output():
    command = select(0)
    assert command.to_output(StringResponse("OK")) is True
    assert command.to_output(NilResponse()) is False


@pytest.mark.parametrize("db", [-1, 2**32])
def test_select_out_of_range(db):
    with pytest.raises(ValueError):
        select(db)


def test_bulk_output_command():
    command = BulkOutputCommand(ArrayRequest((BulkRequest(b"GET"), BulkRequest(b"k"))))
    assert command.to_output(NilResponse()) is None
    assert command.to_output(BytesResponse(b"value")) == b"value"
    with pytest.raises(OutputError):
        command.to_output(StringResponse("value"))


def test_int_output_command():
    command = IntOutputCommand(ArrayRequest((BulkRequest(b"HLEN"), BulkRequest(b"k"))))
    assert command.to_output(IntegerResponse(50)) == 50
    with pytest.raises(OutputError):
        command.to_output(BytesResponse(b"50"))


def test_bool_output_command():
    command = BoolOutputCommand(ArrayRequest((BulkRequest(b"EXPIRE"),)))
    assert command.to_output(IntegerResponse(1)) is True
    assert command.to_output(IntegerResponse(0)) is False
    with pytest.raises(OutputError):
        command.to_output(IntegerResponse(2))


def test_prepared_command_returns_its_request():
    request = ArrayRequest((BulkRequest(b"PING"),))
    assert PingCommand(request).to_request() is request