"""JSON-RPC 2.0 control plane and event log for a Jamulus server.

This package lets an operator query and change a running server (access
control, recording, registration profile, connected clients) over JSON-RPC,
and records connection and channel events to a tab-separated log file.

Public API
----------
Dispatching:
    - RequestDispatcher: Runs one decoded request against the server
    - MethodRegistry: Method name to handler mapping
    - build_registry: Registry holding the server control methods

Transport:
    - ServerControlConsumer: Django Channels WebSocket consumer

Event log:
    - ServerEventLog: Thread-safe CONNECT / IDLE / CHANNEL log writer

Exceptions:
    - JsonRpcError: Base JSON-RPC error exception
    - JsonRpcErrorCode: Enum of JSON-RPC 2.0 error codes
    - InvalidParamsError: A method parameter failed validation

Configuration:
    Configure via Django settings::

        JAMULUS_RPC = {
            'ENABLE_FIREWALL_METHODS': True,
            'LOG_FILE': '/var/log/jamulus/server.log',
            'SANITIZE_ERRORS': True,
        }
"""

from jamulus_rpc.consumers import ServerControlConsumer
from jamulus_rpc.dispatcher import RequestDispatcher
from jamulus_rpc.exceptions import (
    InvalidParamsError,
    JsonRpcError,
    JsonRpcErrorCode,
)
from jamulus_rpc.handlers import build_registry, register_server_methods
from jamulus_rpc.protocols import ConnectedClient, HostAddress, MediaServer
from jamulus_rpc.registry import MethodRegistry
from jamulus_rpc.server_log import ServerEventLog

__all__ = [
    "ConnectedClient",
    "HostAddress",
    "InvalidParamsError",
    "JsonRpcError",
    "JsonRpcErrorCode",
    "MediaServer",
    "MethodRegistry",
    "RequestDispatcher",
    "ServerControlConsumer",
    "ServerEventLog",
    "build_registry",
    "register_server_methods",
]
