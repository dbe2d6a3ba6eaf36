"""Exceptions for the jamulus-rpc package."""

import json
from enum import IntEnum
from typing import Any

from jamulus_rpc.utils import create_json_rpc_error_response


class JsonRpcErrorCode(IntEnum):
    """JSON-RPC 2.0 error codes.

    Standard error codes are defined by the JSON-RPC 2.0 specification.
    Server-defined error codes are in the range -32099 to -32000.

    Standard Attributes
    -------------------
    PARSE_ERROR : int
        Invalid JSON was received (-32700).
    INVALID_REQUEST : int
        The JSON sent is not a valid Request object (-32600).
    METHOD_NOT_FOUND : int
        The method does not exist / is not available (-32601).
    INVALID_PARAMS : int
        Invalid method parameter(s) (-32602).
    INTERNAL_ERROR : int
        Internal JSON-RPC error (-32603).

    Server-Defined Attributes
    -------------------------
    REQUEST_TOO_LARGE : int
        Server-defined error for oversized frames (-32001).
    PARSE_RESULT_ERROR : int
        Server-defined error for result serialization (-32701).
    """

    # Standard JSON-RPC 2.0 error codes
    PARSE_ERROR = -32700
    INVALID_REQUEST = -32600
    METHOD_NOT_FOUND = -32601
    INVALID_PARAMS = -32602
    INTERNAL_ERROR = -32603

    # Server-defined error codes (-32099 to -32000, with -32701 extension)
    REQUEST_TOO_LARGE = -32001

    PARSE_RESULT_ERROR = -32701  # Extension


# Title for application-defined codes missing from RPC_ERRORS
SERVER_ERROR = "Server error"

RPC_ERRORS: dict[int, str] = {
    # Standard JSON-RPC 2.0 errors
    JsonRpcErrorCode.PARSE_ERROR: "Parse Error",
    JsonRpcErrorCode.INVALID_REQUEST: "Invalid Request",
    JsonRpcErrorCode.METHOD_NOT_FOUND: "Method Not Found",
    JsonRpcErrorCode.INVALID_PARAMS: "Invalid params",
    JsonRpcErrorCode.INTERNAL_ERROR: "Internal Error",
    # Server-defined errors
    JsonRpcErrorCode.REQUEST_TOO_LARGE: "Request Too Large",
    # Extensions
    JsonRpcErrorCode.PARSE_RESULT_ERROR: "Error while parsing result",
}


def generate_error_response(
    rpc_id: Any, code: int, message: str, data=None
) -> dict[str, Any]:
    """Generate a JSON-RPC error response.

    Parameters
    ----------
    rpc_id : Any
        Request ID this error responds to, echoed unchanged.
    code : int
        RPC error code.
    message : str
        Error message.
    data : Any, optional
        Additional error data, by default None.

    Returns
    -------
    dict[str, Any]
        Error response.
    """
    return create_json_rpc_error_response(
        rpc_id=rpc_id, code=code, message=message, data=data
    )


class JsonRpcError(Exception):
    """General JSON-RPC exception class."""

    def __init__(self, rpc_id: Any, code: int, data: Any = None):
        """Initialize a new :class:`JsonRpcError` instance.

        Parameters
        ----------
        rpc_id : Any
            Call ID. Opaque, None for notifications or when unknown.
        code : int
            RPC error code.
        data : Any, optional
            Additional error context data, by default None
        """
        super().__init__(code)
        self.rpc_id = rpc_id
        self.code = code
        self.data = data

    @property
    def message(self) -> str:
        """Human readable message, enriched with context from ``data``."""
        message = RPC_ERRORS.get(self.code, SERVER_ERROR)
        if not isinstance(self.data, dict):
            return message

        if self.code == JsonRpcErrorCode.METHOD_NOT_FOUND:
            method = self.data.get("method")
            if method:
                message = f"{message}: '{method}'"
        elif self.code == JsonRpcErrorCode.INVALID_REQUEST:
            if "version" in self.data:
                message = (
                    f"{message}: Invalid JSON-RPC version "
                    f"'{self.data['version']}', expected '2.0'"
                )
            elif "field" in self.data:
                message = f"{message}: {self.data['field']}"
        elif self.code == JsonRpcErrorCode.INVALID_PARAMS:
            if "reason" in self.data:
                message = f"{message}: {self.data['reason']}"
        elif self.code == JsonRpcErrorCode.REQUEST_TOO_LARGE:
            limit_type = self.data.get("limit_type", "unknown")
            limit = self.data.get("limit", "unknown")
            message = f"{message}: {limit_type} exceeds limit of {limit}"
        return message

    def as_dict(self) -> dict[str, Any]:
        """Return an error response dictionary.

        Returns
        -------
        dict[str, Any]
            Error response.
        """
        return generate_error_response(
            rpc_id=self.rpc_id, code=self.code, message=self.message, data=self.data
        )

    def __str__(self) -> str:
        """Error response dictionary as a string.

        Returns
        -------
        str
            Error response.
        """
        return json.dumps(self.as_dict())


class InvalidParamsError(JsonRpcError):
    """A request parameter is missing, has the wrong type or is out of range.

    Raised by the parameter validators before a handler touches the server,
    so the request ID is not known yet. The dispatcher fills it in.
    """

    def __init__(
        self,
        field: str,
        expected: str,
        reason: str,
        *,
        index: int | None = None,
        rpc_id: Any = None,
    ):
        """Initialize InvalidParamsError.

        Parameters
        ----------
        field : str
            Name of the offending parameter.
        expected : str
            Expected kind of value (e.g. "string", "array of string").
        reason : str
            Short description of the violation, used in the error message.
        index : int | None, optional
            Position of the offending element for array parameters.
        rpc_id : Any, optional
            Request ID, if already known.
        """
        data: dict[str, Any] = {"field": field, "expected": expected, "reason": reason}
        if index is not None:
            data["index"] = index
        super().__init__(rpc_id=rpc_id, code=JsonRpcErrorCode.INVALID_PARAMS, data=data)
        self.field = field
        self.expected = expected
        self.reason = reason
        self.index = index


class RequestTooLargeError(JsonRpcError):
    """Exception for frames exceeding the configured size limit."""

    def __init__(self, rpc_id: Any, limit_type: str, limit_value: int):
        """Initialize RequestTooLargeError.

        Parameters
        ----------
        rpc_id : Any
            Request ID.
        limit_type : str
            Type of limit exceeded (e.g., "message_size").
        limit_value : int
            The limit that was exceeded.
        """
        super().__init__(
            rpc_id=rpc_id,
            code=JsonRpcErrorCode.REQUEST_TOO_LARGE,
            data={"limit_type": limit_type, "limit": limit_value},
        )


class DuplicateMethodError(ValueError):
    """A method name was registered twice."""

    def __init__(self, name: str):
        super().__init__(f"RPC method '{name}' is already registered")
        self.name = name
