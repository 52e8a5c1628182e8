import json

import pytest

from kaizen_mcp.mcp.envelope import (
    Response,
    RpcError,
    decode_request,
    decode_response,
    encode_response,
)
from kaizen_mcp.mcp.errors import EnvelopeDecodeError


def test_decode_request_with_numeric_id():
    request = decode_request(b'{"jsonrpc":"2.0","id":1,"method":"ping"}')
    assert request.method == "ping"
    assert request.id == 1
    assert request.has_id is True
    assert request.params is None


def test_decode_request_preserves_string_id_type():
    request = decode_request(b'{"jsonrpc":"2.0","id":"1","method":"ping"}')
    assert request.id == "1"
    assert isinstance(request.id, str)


def test_decode_request_without_id_is_notification():
    request = decode_request(b'{"jsonrpc":"2.0","method":"notifications/initialized"}')
    assert request.has_id is False
    assert request.is_notification is True


def test_explicit_null_id_still_expects_response():
    request = decode_request(b'{"jsonrpc":"2.0","id":null,"method":"ping"}')
    assert request.has_id is True
    assert request.id is None
    assert request.is_notification is False


def test_decode_request_missing_method_decodes_as_empty():
    request = decode_request(b'{"jsonrpc":"2.0","id":4}')
    assert request.method == ""


def test_decode_request_keeps_params_opaque():
    request = decode_request(b'{"id":2,"method":"tools/call","params":{"name":"akuma.query","arguments":{"dialect":"postgres"}}}')
    assert request.params == {"name": "akuma.query", "arguments": {"dialect": "postgres"}}
    assert decode_request(b'{"id":3,"method":"x","params":[1,2]}').params == [1, 2]


@pytest.mark.parametrize(
    "payload",
    [
        b"{bad-json}",
        b"[1,2,3]",
        b'"ping"',
        b'{"id":1,"method":42}',
        b'{"jsonrpc":2,"id":1,"method":"ping"}',
        b"\xff\xfe{}",
    ],
)
def test_decode_request_rejects_malformed_payloads(payload):
    with pytest.raises(EnvelopeDecodeError):
        decode_request(payload)


def test_encode_success_response_is_compact_and_ordered():
    assert encode_response(Response.success(1, {})) == b'{"jsonrpc":"2.0","id":1,"result":{}}'


def test_encode_error_response_omits_absent_data():
    encoded = json.loads(encode_response(Response.failure("a", -32601, "method not found")))
    assert encoded == {"jsonrpc": "2.0", "id": "a", "error": {"code": -32601, "message": "method not found"}}
    assert "result" not in encoded


def test_encode_error_response_includes_data():
    encoded = json.loads(encode_response(Response.failure(7, -32602, "unknown tool", data="nope.tool")))
    assert encoded["error"]["data"] == "nope.tool"


def test_encode_echoes_null_id():
    assert json.loads(encode_response(Response.success(None, {})))["id"] is None


def test_response_rejects_result_and_error_together():
    with pytest.raises(ValueError):
        Response(id=1, result={"a": 1}, error=RpcError(-32603, "boom"))


def test_success_with_none_result_becomes_empty_object():
    assert Response.success(1, None).result == {}


def test_decode_response_round_trip():
    response = Response.failure(12, -32602, "invalid tool call params", data="params must be an object")
    decoded = decode_response(encode_response(response))
    assert decoded == response
    assert decoded.is_error is True


def test_response_rejects_neither_result_nor_error():
    with pytest.raises(ValueError):
        Response(id=1)


def test_decode_response_without_result_or_error_is_rejected():
    with pytest.raises(EnvelopeDecodeError, match="neither a result nor an error"):
        decode_response(b'{"jsonrpc":"2.0","id":1}')


def test_decode_request_rejects_deeply_nested_payload():
    payload = b'{"id":1,"method":"ping","params":' + b"[" * 100000 + b"}"
    with pytest.raises(EnvelopeDecodeError, match="nested too deeply"):
        decode_request(payload)


def test_encode_lone_surrogate_id_falls_back_to_ascii_escapes():
    request = decode_request(b'{"id":"\\ud800","method":"ping"}')
    encoded = encode_response(Response.success(request.id, {}))
    assert encoded == b'{"jsonrpc":"2.0","id":"\\ud800","result":{}}'
    assert json.loads(encoded)["id"] == "\ud800"


def test_encode_keeps_non_ascii_text_as_utf8():
    encoded = encode_response(Response.success(1, {"name": "café"}))
    assert "café".encode("utf-8") in encoded
