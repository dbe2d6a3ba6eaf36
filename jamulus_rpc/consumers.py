from __future__ import annotations

import json
import logging
from typing import Any

from channels.generic.websocket import JsonWebsocketConsumer

from jamulus_rpc.config import get_config
from jamulus_rpc.dispatcher import RequestDispatcher
from jamulus_rpc.exceptions import (
    JsonRpcError,
    JsonRpcErrorCode,
    RequestTooLargeError,
    generate_error_response,
)
from jamulus_rpc.utils import is_notification

logger = logging.getLogger("jamulus_rpc")


class ServerControlConsumer(JsonWebsocketConsumer):
    """WebSocket consumer exposing the server control methods.

    Each text frame carries one JSON-RPC request, which is handed to the
    dispatcher on the consumer's thread. Responses to notifications (requests
    without an ``id``) are not sent.

    Attributes
    ----------
    dispatcher : RequestDispatcher | None
        Dispatcher shared by all connections. Pass it through
        ``as_asgi(dispatcher=...)``.
    json_encoder_class : type[json.JSONEncoder] | None
        Optional custom JSON encoder class for serializing responses.

    Examples
    --------
    In ``asgi.py``::

        dispatcher = RequestDispatcher(server, build_registry())
        application = URLRouter([
            path("rpc/", ServerControlConsumer.as_asgi(dispatcher=dispatcher)),
        ])
    """

    dispatcher: RequestDispatcher | None = None
    json_encoder_class: type[json.JSONEncoder] | None = None

    def __init__(
        self, *args: Any, dispatcher: RequestDispatcher | None = None, **kwargs: Any
    ) -> None:
        super().__init__(*args, **kwargs)
        if dispatcher is not None:
            self.dispatcher = dispatcher

    def connect(self) -> None:
        """Accept the connection if a dispatcher is configured."""
        if self.dispatcher is None:
            logger.error("No dispatcher configured for %s", self.__class__.__name__)
            self.close()
            return
        logger.debug("Control client connected: %s", self.scope.get("client"))
        self.accept()

    def receive(
        self, text_data: str | None = None, bytes_data: bytes | None = None, **kwargs
    ) -> None:
        """Decode a frame and hand it to :meth:`receive_json`.

        Binary frames, oversized frames and malformed JSON are answered with
        an error response and go no further.
        """
        if text_data is None:
            self.send_json(
                generate_error_response(
                    None,
                    JsonRpcErrorCode.INVALID_REQUEST,
                    "Invalid Request: binary frames are not supported",
                )
            )
            return

        try:
            data = self.decode_json(text_data)
        except JsonRpcError as e:
            self.send_json(e.as_dict())
            return
        self.receive_json(data, **kwargs)

    @classmethod
    def decode_json(cls, text_data: str) -> Any:
        """Decode remote procedure call data.

        Parameters
        ----------
        text_data : str
            Remote procedure call data.

        Returns
        -------
        Any
            Decoded remote procedure call data.

        Raises
        ------
        RequestTooLargeError
            The frame exceeds ``MAX_MESSAGE_SIZE``. Checked before parsing.
        JsonRpcError
            PARSE_ERROR for malformed JSON.
        """
        max_size = get_config().max_message_size
        if len(text_data.encode("utf-8")) > max_size:
            raise RequestTooLargeError(None, "message_size", max_size)

        try:
            return json.loads(text_data)
        except json.JSONDecodeError as e:
            raise JsonRpcError(None, JsonRpcErrorCode.PARSE_ERROR) from e

    def encode_json(self, content: dict[str, Any]) -> str:
        """Encode a response, falling back to an error frame.

        Parameters
        ----------
        content : dict[str, Any]
            Response envelope.

        Returns
        -------
        str
            JSON-encoded string.
        """
        try:
            if self.json_encoder_class:
                return json.dumps(content, cls=self.json_encoder_class)
            return json.dumps(content)
        except (TypeError, ValueError) as e:
            logger.error("Failed to serialize RPC response: %s", e)
            error_frame = generate_error_response(
                rpc_id=content.get("id"),
                code=JsonRpcErrorCode.PARSE_RESULT_ERROR,
                message="Failed to serialize result",
                data=None,  # Don't leak details
            )
            return json.dumps(error_frame)

    def receive_json(self, content: Any, **kwargs) -> None:
        """Dispatch one request and send its response.

        Parameters
        ----------
        content : Any
            Decoded JSON message data from the WebSocket client.
        """
        response = self.dispatcher.dispatch(content)
        if is_notification(content):
            return
        self.send_json(response)
