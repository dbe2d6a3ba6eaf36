"""Definition of the :class:`RequestDispatcher` class.

A JSON-RPC request message can contain three elements: the *method*, a string
naming the handler to invoke; *params*, an object of named values passed to
that handler; and *id*, an opaque value that is echoed back so the caller can
match the response with its request.

Every request goes through the same stages: the request shape is validated,
the method is resolved in the registry, the handler runs against the server
object, and the outcome is wrapped in a response envelope. Each stage can end
the request with an error response; nothing is retried or queued.

References
----------
- https://www.jsonrpc.org/specification
"""

from __future__ import annotations

import logging
import time
from typing import Any

from jamulus_rpc import logs
from jamulus_rpc.config import RpcConfig, get_config
from jamulus_rpc.exceptions import (
    InvalidParamsError,
    JsonRpcError,
    JsonRpcErrorCode,
    generate_error_response,
)
from jamulus_rpc.protocols import MediaServer
from jamulus_rpc.registry import MethodRegistry
from jamulus_rpc.signals import (
    rpc_method_completed,
    rpc_method_failed,
    rpc_method_started,
)
from jamulus_rpc.utils import create_json_rpc_response, is_notification
from jamulus_rpc.validation import validate_request

logger = logging.getLogger("jamulus_rpc")


class RequestDispatcher:
    """Dispatches decoded JSON-RPC requests to registered handlers.

    Errors:

    - -32600
      Invalid Request
      The JSON sent is not a valid Request object.

    - -32601
      Method not found
      The method does not exist / is not available.

    - -32602
      Invalid params
      Missing, mistyped or out-of-range method parameter(s).

    - -32603
      Internal error
      The handler or the server raised an unexpected exception.

    Requests are handled synchronously on the calling thread. When the
    transport dispatches from several threads, handlers run concurrently and
    rely on the server object's own thread-safety.

    Attributes
    ----------
    server : MediaServer
        Server object passed to every handler.
    registry : MethodRegistry
        Registered methods.
    config : RpcConfig
        Logging and error-reporting options.
    """

    def __init__(
        self,
        server: MediaServer,
        registry: MethodRegistry,
        *,
        config: RpcConfig | None = None,
    ) -> None:
        self.server = server
        self.registry = registry
        self.config = config or get_config()

    def dispatch(self, data: Any) -> dict[str, Any]:
        """Handle one request and build its response.

        A response is built for notifications too; the transport decides
        whether to send it.

        Parameters
        ----------
        data : Any
            The decoded request.

        Returns
        -------
        dict[str, Any]
            Response envelope holding exactly one of ``result`` or ``error``.
        """
        try:
            params = validate_request(data)
        except JsonRpcError as e:
            return e.as_dict()

        method_name: str = data["method"]
        rpc_id = data.get("id")
        notification = is_notification(data)

        if notification:
            logger.info(logs.RPC_NOTIFICATION_START, method_name)
        else:
            logger.info(logs.RPC_METHOD_CALL_START, method_name, rpc_id)
        if self.config.log_rpc_params:
            logger.debug(logs.RPC_PARAMS, method_name, params)

        start_time = time.time()
        rpc_method_started.send_robust(
            sender=self.__class__,
            dispatcher=self,
            method_name=method_name,
            params=params,
            rpc_id=rpc_id,
        )

        try:
            result = self._execute(method_name, params, rpc_id)
        except Exception as e:
            response = self._handle_rpc_exception(e, rpc_id, method_name, start_time)
        else:
            rpc_method_completed.send_robust(
                sender=self.__class__,
                dispatcher=self,
                method_name=method_name,
                result=result,
                rpc_id=rpc_id,
                duration=time.time() - start_time,
            )
            response = create_json_rpc_response(rpc_id=rpc_id, result=result)

        if notification:
            logger.debug(logs.RPC_NOTIFICATION_END, method_name)
        else:
            logger.debug(logs.RPC_METHOD_CALL_END, rpc_id, method_name, response)
        return response

    def _execute(self, method_name: str, params: dict[str, Any], rpc_id: Any) -> Any:
        """Resolve the method and run its handler.

        Raises
        ------
        JsonRpcError
            METHOD_NOT_FOUND if nothing is registered under ``method_name``.
        """
        entry = self.registry.resolve(method_name)
        if entry is None:
            logger.info(logs.METHOD_NOT_FOUND, method_name)
            raise JsonRpcError(
                rpc_id, JsonRpcErrorCode.METHOD_NOT_FOUND, data={"method": method_name}
            )
        return entry.handler(self.server, params)

    def _handle_rpc_exception(
        self,
        exception: Exception,
        rpc_id: Any,
        method_name: str,
        start_time: float,
    ) -> dict[str, Any]:
        """Convert an exception raised while handling a request.

        Parameters
        ----------
        exception : Exception
            Exception that was raised.
        rpc_id : Any
            Request ID for the error response.
        method_name : str
            Method name for error reporting.
        start_time : float
            Start time for duration calculation.

        Returns
        -------
        dict[str, Any]
            Error response.
        """
        rpc_method_failed.send_robust(
            sender=self.__class__,
            dispatcher=self,
            method_name=method_name,
            error=exception,
            rpc_id=rpc_id,
            duration=time.time() - start_time,
        )

        if isinstance(exception, JsonRpcError):
            if isinstance(exception, InvalidParamsError):
                # Caller error, not a server fault
                logger.info(logs.INVALID_PARAMS, method_name, exception.reason)
            # Validators raise before the request ID is known
            exception.rpc_id = rpc_id
            return exception.as_dict()

        if self.config.sanitize_errors:
            # Production mode: Log without stack trace
            logger.error(
                "Unexpected error processing RPC call '%s': %s",
                method_name,
                f"{type(exception).__name__}: {str(exception)[:200]}",
            )
        else:
            # Development mode: Log with full stack trace
            logger.exception("Unexpected error processing RPC call '%s'", method_name)

        return generate_error_response(
            rpc_id=rpc_id,
            code=JsonRpcErrorCode.INTERNAL_ERROR,
            message="Internal server error",
            data=None,  # Never leak internal details
        )
