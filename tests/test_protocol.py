import pytest

from redislink.errors import ParseError, ServerError
from redislink.protocol import (
    ArrayRequest,
    ArrayResponse,
    BulkIntegerRequest,
    BulkRequest,
    BytesResponse,
    ErrorResponse,
    IntegerRequest,
    IntegerResponse,
    NilResponse,
    RespCodec,
    StringRequest,
    StringResponse,
    array,
    to_request,
)


def obj_to_bytes(obj):
    buf = bytearray()
    RespCodec().encode(obj, buf)
    return bytes(buf)


def test_array_macro():
    assert obj_to_bytes(array("SET", "x")) == b"*2\r\n$3\r\nSET\r\n$1\r\nx\r\n"

    req = array("RPUSH", "wyz").extend(["a", "b"])
    assert obj_to_bytes(req) == b"*4\r\n$5\r\nRPUSH\r\n$3\r\nwyz\r\n$1\r\na\r\n$1\r\nb\r\n"

    vals = ["a", "b"]
    req = array("RPUSH", "xyz").extend(vals)
    assert obj_to_bytes(req) == b"*4\r\n$5\r\nRPUSH\r\n$3\r\nxyz\r\n$1\r\na\r\n$1\r\nb\r\n"


def test_bulk_string():
    codec = RespCodec()
    buf = bytearray()
    codec.encode(BulkRequest(b"THISISATEST"), buf)
    assert bytes(buf) == b"$11\r\nTHISISATEST\r\n"
    assert codec.decode(buf) == BytesResponse(b"THISISATEST")
    assert buf == bytearray()


def test_array():
    codec = RespCodec()
    buf = bytearray()
    codec.encode(ArrayRequest((to_request(b"TEST1"), to_request(b"TEST2"))), buf)
    assert bytes(buf) == b"*2\r\n$5\r\nTEST1\r\n$5\r\nTEST2\r\n"
    expected = ArrayResponse((BytesResponse(b"TEST1"), BytesResponse(b"TEST2")))
    assert codec.decode(buf) == expected


def test_nil_string():
    buf = bytearray(b"$-1\r\n")
    assert RespCodec().decode(buf) == NilResponse()


def test_nil_array():
    buf = bytearray(b"*-1\r\n")
    assert RespCodec().decode(buf) == NilResponse()


def test_encode_integer_and_string():
    assert obj_to_bytes(IntegerRequest(-5)) == b":-5\r\n"
    assert obj_to_bytes(StringRequest("OK")) == b"+OK\r\n"
    assert obj_to_bytes(BulkIntegerRequest(123)) == b"$3\r\n123\r\n"


def test_decode_simple_values():
    codec = RespCodec()
    buf = bytearray(b"+OK\r\n:42\r\n-ERR bad\r\n")
    assert codec.decode(buf) == StringResponse("OK")
    assert codec.decode(buf) == IntegerResponse(42)
    assert codec.decode(buf) == ErrorResponse("ERR bad")
    assert codec.decode(buf) is None


def test_decode_nested_array():
    buf = bytearray(b"*2\r\n*1\r\n:1\r\n$3\r\nabc\r\n")
    expected = ArrayResponse((ArrayResponse((IntegerResponse(1),)), BytesResponse(b"abc")))
    assert RespCodec().decode(buf) == expected


@pytest.mark.parametrize(
    "partial",
    [b"", b"$5\r\nab", b"*2\r\n$1\r\na\r\n", b":12", b"+OK"],
)
def test_incomplete_input_is_kept(partial):
    buf = bytearray(partial)
    assert RespCodec().decode(buf) is None
    assert bytes(buf) == partial


def test_incomplete_then_complete():
    codec = RespCodec()
    buf = bytearray(b"$5\r\nhel")
    assert codec.decode(buf) is None
    buf += b"lo\r\n"
    assert codec.decode(buf) == BytesResponse(b"hello")


@pytest.mark.parametrize(
    "data",
    [b"?oops\r\n", b"$-5\r\n", b"*-2\r\n", b":abc\r\n", b"$\r\n", b"+\xff\xfe\r\n"],
)
def test_parse_errors(data):
    with pytest.raises(ParseError):
        RespCodec().decode(bytearray(data))


def test_into_result_raises_for_errors():
    with pytest.raises(ServerError) as info:
        ErrorResponse("ERR nope").into_result()
    assert info.value.message == "ERR nope"
    assert IntegerResponse(3).into_result() == IntegerResponse(3)


def test_add_wraps_non_array():
    req = BulkRequest(b"GET").add("key")
    assert req == ArrayRequest((BulkRequest(b"GET"), BulkRequest(b"key")))
    assert array("A").add(7) == ArrayRequest((BulkRequest(b"A"), IntegerRequest(7)))


def test_to_request_conversions():
    assert to_request("hi") == BulkRequest(b"hi")
    assert to_request(bytearray(b"x")) == BulkRequest(b"x")
    assert to_request(9) == IntegerRequest(9)
    with pytest.raises(TypeError):
        to_request(True)
    with pytest.raises(TypeError):
        to_request(1.5)


def test_integer_out_of_range():
    with pytest.raises(ValueError):
        IntegerRequest(2**63)


def test_round_trip_bulk_array():
    req = array("a", b"\x00\x01", "")
    buf = bytearray(obj_to_bytes(req))
    decoded = RespCodec().decode(buf)
    assert decoded == ArrayResponse(
        (BytesResponse(b"a"), BytesResponse(b"\x00\x01"), BytesResponse(b""))
    )