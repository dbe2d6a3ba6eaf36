"""Method registry for the RPC dispatcher."""

from __future__ import annotations

from dataclasses import dataclass

from jamulus_rpc.exceptions import DuplicateMethodError
from jamulus_rpc.protocols import ServerHandler


@dataclass(frozen=True)
class MethodEntry:
    """A handler bound to a method name.

    Attributes
    ----------
    name : str
        Wire name of the method.
    handler : ServerHandler
        Callable invoked with the server object and the ``params`` object.
    group : str | None
        Optional feature group the method belongs to (e.g. "firewall").
    """

    name: str
    handler: ServerHandler
    group: str | None = None


class MethodRegistry:
    """Registry mapping method names to handlers.

    Methods are registered once at startup. After :meth:`freeze` the registry
    is read-only, so lookups from concurrent transport threads need no
    locking.

    Attributes
    ----------
    _methods : dict[str, MethodEntry]
        Registered methods in registration order.
    """

    def __init__(self) -> None:
        """Initialize the registry."""
        self._methods: dict[str, MethodEntry] = {}
        self._frozen = False

    def register(
        self, name: str, handler: ServerHandler, *, group: str | None = None
    ) -> MethodEntry:
        """Register a handler under ``name``.

        Parameters
        ----------
        name : str
            Method name, unique across the registry.
        handler : ServerHandler
            The handler.
        group : str | None, optional
            Feature group, by default None.

        Returns
        -------
        MethodEntry
            The new entry.

        Raises
        ------
        DuplicateMethodError
            If ``name`` is already registered.
        RuntimeError
            If the registry has been frozen.
        """
        if self._frozen:
            msg = f"Cannot register '{name}': the method registry is frozen"
            raise RuntimeError(msg)
        if name in self._methods:
            raise DuplicateMethodError(name)

        entry = MethodEntry(name=name, handler=handler, group=group)
        self._methods[name] = entry
        return entry

    def resolve(self, name: str) -> MethodEntry | None:
        """Get the entry registered under ``name``.

        Parameters
        ----------
        name : str
            Name of the method.

        Returns
        -------
        MethodEntry | None
            The entry if found, None otherwise.
        """
        return self._methods.get(name)

    def has_method(self, name: str) -> bool:
        """Check if a method is registered."""
        return name in self._methods

    def list_method_names(self) -> list[str]:
        """List registered method names in registration order."""
        return list(self._methods)

    def freeze(self) -> None:
        """Reject any further registration."""
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __contains__(self, name: object) -> bool:
        return name in self._methods

    def __len__(self) -> int:
        return len(self._methods)
