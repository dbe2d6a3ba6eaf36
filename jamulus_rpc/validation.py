"""Request and parameter validation.

Request-shape checks run once per call in the dispatcher; parameter checks
are used by :mod:`jamulus_rpc.params` to decode each method's arguments
before a handler touches the server.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from jamulus_rpc import logs
from jamulus_rpc.exceptions import (
    InvalidParamsError,
    JsonRpcError,
    JsonRpcErrorCode,
)

logger = logging.getLogger("jamulus_rpc")


class ParamKind(str, Enum):
    """Kinds of parameter values, named as they appear in error messages."""

    STRING = "string"
    STRING_ARRAY = "array of string"
    BINARY_FLAG = "number in {0, 1}"
    OBJECT = "object"


def _expect_string(params: dict[str, Any], field: str) -> str:
    value = params.get(field)
    if not isinstance(value, str):
        raise InvalidParamsError(
            field, ParamKind.STRING.value, f"{field} is not a string"
        )
    return value


def _expect_string_array(
    params: dict[str, Any], field: str, element: str | None = None
) -> tuple[str, ...]:
    value = params.get(field)
    if not isinstance(value, list):
        raise InvalidParamsError(
            field, ParamKind.STRING_ARRAY.value, f"{field} must be an array"
        )

    # Every element is checked before anything is handed to the server
    for index, item in enumerate(value):
        if not isinstance(item, str):
            raise InvalidParamsError(
                field,
                ParamKind.STRING_ARRAY.value,
                f"{element or field} within array is not a string",
                index=index,
            )
    return tuple(value)


def _expect_binary_flag(params: dict[str, Any], field: str) -> int:
    value = params.get(field)
    # bool is an int subclass but not a JSON number
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise InvalidParamsError(
            field, ParamKind.BINARY_FLAG.value, f"{field} must be numeric"
        )
    if value not in (0, 1):
        raise InvalidParamsError(
            field, ParamKind.BINARY_FLAG.value, f"{field} must be 0 or 1"
        )
    return int(value)


def _expect_object(params: dict[str, Any], field: str) -> dict[str, Any]:
    value = params.get(field)
    if not isinstance(value, dict):
        raise InvalidParamsError(
            field, ParamKind.OBJECT.value, f"{field} must be an object"
        )
    return value


_VALIDATORS = {
    ParamKind.STRING: _expect_string,
    ParamKind.STRING_ARRAY: _expect_string_array,
    ParamKind.BINARY_FLAG: _expect_binary_flag,
    ParamKind.OBJECT: _expect_object,
}


def expect(
    params: dict[str, Any],
    field: str,
    kind: ParamKind,
    *,
    element: str | None = None,
) -> Any:
    """Return ``params[field]`` checked against ``kind``.

    Parameters
    ----------
    params : dict[str, Any]
        The request's ``params`` object.
    field : str
        Name of the parameter.
    kind : ParamKind
        Expected kind of value.
    element : str | None, optional
        Name of one array element in error messages, e.g. ``"address"`` for
        ``addresses``. Only used with :attr:`ParamKind.STRING_ARRAY`; by
        default the field name.

    Returns
    -------
    Any
        The typed value: ``str``, ``tuple[str, ...]``, ``int`` or ``dict``.

    Raises
    ------
    InvalidParamsError
        If the field is missing or its value does not match ``kind``.

    Examples
    --------
    >>> expect({"mode": 1}, "mode", ParamKind.BINARY_FLAG)
    1
    >>> expect({"addresses": ["1.2.3.4"]}, "addresses", ParamKind.STRING_ARRAY)
    ('1.2.3.4',)
    """
    if kind is ParamKind.STRING_ARRAY:
        return _expect_string_array(params, field, element)
    return _VALIDATORS[kind](params, field)


def validate_request(data: Any) -> dict[str, Any]:
    """Validate the shape of a decoded JSON-RPC request.

    Parameters
    ----------
    data : Any
        The decoded request.

    Returns
    -------
    dict[str, Any]
        The ``params`` object, ``{}`` when absent or null.

    Raises
    ------
    JsonRpcError
        INVALID_REQUEST for a malformed request, INVALID_PARAMS when
        ``params`` is not an object.
    """
    if not data:
        logger.warning(logs.EMPTY_CALL)
        raise JsonRpcError(None, JsonRpcErrorCode.INVALID_REQUEST)

    if not isinstance(data, dict):
        logger.warning("Invalid message type: %s", type(data).__name__)
        raise JsonRpcError(None, JsonRpcErrorCode.INVALID_REQUEST)

    rpc_id = data.get("id")

    if "jsonrpc" in data and data["jsonrpc"] != "2.0":
        logger.warning(logs.INVALID_JSON_RPC_VERSION, data["jsonrpc"])
        raise JsonRpcError(
            rpc_id,
            JsonRpcErrorCode.INVALID_REQUEST,
            data={"version": data["jsonrpc"]},
        )

    if "method" not in data:
        raise JsonRpcError(
            rpc_id,
            JsonRpcErrorCode.INVALID_REQUEST,
            data={"field": "Missing required 'method' field"},
        )

    method = data["method"]
    if not isinstance(method, str):
        raise JsonRpcError(
            rpc_id,
            JsonRpcErrorCode.INVALID_REQUEST,
            data={"field": f"'method' must be a string, got {type(method).__name__}"},
        )
    if not method:
        raise JsonRpcError(
            rpc_id,
            JsonRpcErrorCode.INVALID_REQUEST,
            data={"field": "'method' must not be empty"},
        )

    params = data.get("params")
    if params is None:
        return {}
    if not isinstance(params, dict):
        raise InvalidParamsError(
            "params",
            ParamKind.OBJECT.value,
            "params must be an object",
            rpc_id=rpc_id,
        )
    return params
