"""JSON-RPC 2.0 message envelopes.

Every message built here carries ``"jsonrpc": "2.0"``. Responses always
carry an ``id`` (None when the request's id is unknown) and exactly one of
``result`` or ``error``.
"""

from __future__ import annotations

from typing import Any

JSON_RPC_VERSION = "2.0"


def is_notification(data: Any) -> bool:
    """Whether a decoded request is a notification.

    A notification is a request object with a ``method`` and no ``id``
    member at all; ``"id": null`` still asks for a response.
    """
    return isinstance(data, dict) and "method" in data and "id" not in data


def create_json_rpc_request(
    method: str,
    params: dict[str, Any] | None = None,
    rpc_id: Any = None,
) -> dict[str, Any]:
    """Build a request, or a notification when ``rpc_id`` is None.

    Used by clients and tests; the server itself only answers.

    Examples
    --------
    >>> create_json_rpc_request("jamulus/getMode", rpc_id=1)
    {'jsonrpc': '2.0', 'method': 'jamulus/getMode', 'id': 1}
    """
    request: dict[str, Any] = {"jsonrpc": JSON_RPC_VERSION, "method": method}
    if params is not None:
        request["params"] = params
    if rpc_id is not None:
        request["id"] = rpc_id
    return request


def create_json_rpc_response(
    rpc_id: Any = None,
    result: Any = None,
    error: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a response envelope.

    Parameters
    ----------
    rpc_id : Any
        Identifier of the request, echoed unchanged.
    result : Any
        Handler result. Kept even when None, unless ``error`` is given.
    error : dict[str, Any] | None
        Error object; replaces ``result`` when given.

    Returns
    -------
    dict[str, Any]
        JSON-RPC 2.0 response message.
    """
    outcome = ("error", error) if error is not None else ("result", result)
    return {"jsonrpc": JSON_RPC_VERSION, "id": rpc_id, outcome[0]: outcome[1]}


def create_json_rpc_error_response(
    rpc_id: Any = None,
    code: int = -32603,
    message: str = "Internal error",
    data: Any = None,
) -> dict[str, Any]:
    """Build an error response; ``data`` is left out when None."""
    error: dict[str, Any] = {"code": code, "message": message}
    if data is not None:
        error["data"] = data
    return create_json_rpc_response(rpc_id=rpc_id, error=error)
