"""Tests for JSON-RPC exceptions."""

import json

import pytest

from jamulus_rpc.exceptions import (
    RPC_ERRORS,
    InvalidParamsError,
    JsonRpcError,
    JsonRpcErrorCode,
    RequestTooLargeError,
    generate_error_response,
)


@pytest.mark.unit
class TestJsonRpcErrorCode:
    """Test error code values."""

    @pytest.mark.parametrize(
        ("code", "value"),
        [
            (JsonRpcErrorCode.PARSE_ERROR, -32700),
            (JsonRpcErrorCode.INVALID_REQUEST, -32600),
            (JsonRpcErrorCode.METHOD_NOT_FOUND, -32601),
            (JsonRpcErrorCode.INVALID_PARAMS, -32602),
            (JsonRpcErrorCode.INTERNAL_ERROR, -32603),
            (JsonRpcErrorCode.REQUEST_TOO_LARGE, -32001),
            (JsonRpcErrorCode.PARSE_RESULT_ERROR, -32701),
        ],
    )
    def test_code_values(self, code, value):
        assert code == value

    def test_every_code_has_a_title(self):
        for code in JsonRpcErrorCode:
            assert code in RPC_ERRORS


@pytest.mark.unit
class TestJsonRpcError:
    """Test JsonRpcError class."""

    def test_as_dict_without_data(self):
        """Should omit data when there is none."""
        error = JsonRpcError(7, JsonRpcErrorCode.PARSE_ERROR)

        assert error.as_dict() == {
            "jsonrpc": "2.0",
            "id": 7,
            "error": {"code": -32700, "message": "Parse Error"},
        }

    def test_method_not_found_message_names_method(self):
        error = JsonRpcError(
            1, JsonRpcErrorCode.METHOD_NOT_FOUND, data={"method": "foo/bar"}
        )

        assert error.message == "Method Not Found: 'foo/bar'"
        assert error.as_dict()["error"]["data"] == {"method": "foo/bar"}

    def test_invalid_version_message(self):
        error = JsonRpcError(1, JsonRpcErrorCode.INVALID_REQUEST, data={"version": "1.0"})

        assert "Invalid JSON-RPC version '1.0'" in error.message

    def test_invalid_request_field_message(self):
        error = JsonRpcError(
            None, JsonRpcErrorCode.INVALID_REQUEST, data={"field": "bad method"}
        )

        assert error.message == "Invalid Request: bad method"

    def test_unlisted_code_gets_generic_title(self):
        error = JsonRpcError(2, -32000, data={"detail": "busy"})

        assert error.message == "Server error"
        assert error.as_dict() == {
            "jsonrpc": "2.0",
            "id": 2,
            "error": {
                "code": -32000,
                "message": "Server error",
                "data": {"detail": "busy"},
            },
        }

    def test_str_is_json(self):
        error = JsonRpcError("abc", JsonRpcErrorCode.INTERNAL_ERROR)

        assert json.loads(str(error))["id"] == "abc"

    def test_generate_error_response(self):
        response = generate_error_response(3, -32603, "boom", data={"x": 1})

        assert response == {
            "jsonrpc": "2.0",
            "id": 3,
            "error": {"code": -32603, "message": "boom", "data": {"x": 1}},
        }


@pytest.mark.unit
class TestInvalidParamsError:
    """Test InvalidParamsError class."""

    def test_data_and_message(self):
        error = InvalidParamsError("address", "string", "address is not a string")

        assert error.code == JsonRpcErrorCode.INVALID_PARAMS
        assert error.rpc_id is None
        assert error.message == "Invalid params: address is not a string"
        assert error.data == {
            "field": "address",
            "expected": "string",
            "reason": "address is not a string",
        }

    def test_index_is_included(self):
        error = InvalidParamsError(
            "addresses",
            "array of string",
            "address within array is not a string",
            index=2,
        )

        assert error.index == 2
        assert error.data["index"] == 2

    def test_is_json_rpc_error(self):
        assert isinstance(InvalidParamsError("a", "string", "r"), JsonRpcError)


@pytest.mark.unit
class TestRequestTooLargeError:
    def test_message(self):
        error = RequestTooLargeError(None, "message_size", 1024)

        assert error.code == JsonRpcErrorCode.REQUEST_TOO_LARGE
        assert error.data == {"limit_type": "message_size", "limit": 1024}
        assert error.message == "Request Too Large: message_size exceeds limit of 1024"
