"""Decorator used to declare server RPC methods.

Handlers declared with :func:`rpc_method` are collected in a module-level
table at import time. Nothing is callable over the wire until the table is
copied into a :class:`~jamulus_rpc.registry.MethodRegistry`, which is where
duplicate names are rejected.
"""

from __future__ import annotations

from collections.abc import Callable

from jamulus_rpc.protocols import ServerHandler
from jamulus_rpc.registry import MethodEntry

_declared_methods: list[MethodEntry] = []


def rpc_method(name: str, *, group: str | None = None) -> Callable:
    """A decorator for declaring RPC methods.

    Parameters
    ----------
    name : str
        Wire name of the method, e.g. ``"jamulusserver/getClients"``.
    group : str | None, optional
        Feature group that can be switched off as a whole, by default None.

    Returns
    -------
    Callable
        Decorator returning the function unchanged.

    Examples
    --------
    ::

        @rpc_method("jamulusserver/resetFirewall", group="firewall")
        def reset_firewall(server: MediaServer, params: dict) -> str:
            server.firewall_reset()
            return "ok"
    """

    def wrap(func: ServerHandler) -> ServerHandler:
        _declared_methods.append(MethodEntry(name=name, handler=func, group=group))
        return func

    return wrap


def declared_methods() -> tuple[MethodEntry, ...]:
    """Return all methods declared so far, in declaration order."""
    return tuple(_declared_methods)
