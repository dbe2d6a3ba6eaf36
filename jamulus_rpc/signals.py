"""Django signals for RPC and server lifecycle events.

RPC lifecycle signals are sent by the dispatcher around every method call
and are meant for monitoring. Server lifecycle signals are sent by the media
server itself; :class:`~jamulus_rpc.server_log.ServerEventLog` can listen to
them instead of being called directly.

Signals
-------
rpc_method_started
    Sent when an RPC method starts executing.
rpc_method_completed
    Sent when an RPC method completes successfully.
rpc_method_failed
    Sent when an RPC call ends with an error response.
client_connected
    Sent by the server when a new client connects.
server_idle
    Sent by the server when the last client has left.
channel_info_changed
    Sent by the server when a client changes its channel name or profile.

Examples
--------
Count failed calls per method::

    from collections import Counter
    from jamulus_rpc.signals import rpc_method_failed

    failures = Counter()

    def on_failure(sender, method_name, **kwargs):
        failures[method_name] += 1

    rpc_method_failed.connect(on_failure)

Notes
-----
Signals are sent synchronously in the same thread as the RPC call or the
server event. Keep receivers lightweight.
"""

from __future__ import annotations

from django.dispatch import Signal

# RPC method lifecycle signals
rpc_method_started = Signal()
"""Sent when an RPC method starts executing.

Arguments:
    sender: The dispatcher class
    dispatcher: The dispatcher instance
    method_name (str): Name of the RPC method
    params (dict): Method parameters
    rpc_id: Request ID
"""

rpc_method_completed = Signal()
"""Sent when an RPC method completes successfully.

Arguments:
    sender: The dispatcher class
    dispatcher: The dispatcher instance
    method_name (str): Name of the RPC method
    result: The method's return value
    rpc_id: Request ID
    duration (float): Execution time in seconds
"""

rpc_method_failed = Signal()
"""Sent when an RPC call ends with an error response.

Arguments:
    sender: The dispatcher class
    dispatcher: The dispatcher instance
    method_name (str): Name of the RPC method
    error (Exception): The exception that was raised
    rpc_id: Request ID
    duration (float): Time before failure in seconds
"""

# Server lifecycle signals
client_connected = Signal()
"""Sent when a client connects.

Arguments:
    sender: The server class
    address (HostAddress | str): Client address
    connected_clients (int): Number of connected clients, including this one
"""

server_idle = Signal()
"""Sent when the last client disconnects.

Arguments:
    sender: The server class
"""

channel_info_changed = Signal()
"""Sent when a client changes its channel information.

Arguments:
    sender: The server class
    address (HostAddress | str): Client address
    name (str): New channel name
"""


__all__ = [
    "channel_info_changed",
    "client_connected",
    "rpc_method_completed",
    "rpc_method_failed",
    "rpc_method_started",
    "server_idle",
]
