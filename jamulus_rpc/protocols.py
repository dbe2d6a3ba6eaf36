"""Protocol definitions for the media server the control plane drives.

The audio engine, its socket and its access-control list live outside this
package. Handlers only talk to them through the :class:`MediaServer` protocol,
which keeps them testable against an in-memory fake.

It also contains the small value types exchanged over that interface.
"""

from __future__ import annotations

import ipaddress
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar, Protocol


@dataclass(frozen=True)
class HostAddress:
    """IP address and UDP port of a client.

    Attributes
    ----------
    host : ipaddress.IPv4Address | ipaddress.IPv6Address
        Client IP address. ``0.0.0.0`` marks an unused channel slot.
    port : int
        Client UDP port.
    """

    host: ipaddress.IPv4Address | ipaddress.IPv6Address
    port: int = 0

    EMPTY_HOST: ClassVar[ipaddress.IPv4Address] = ipaddress.IPv4Address(0)

    @classmethod
    def parse(cls, value: str) -> HostAddress:
        """Parse ``ip``, ``ip:port`` or ``[ipv6]:port``."""
        if value.startswith("["):
            host, _, port = value[1:].partition("]:")
            return cls(ipaddress.ip_address(host), int(port or 0))
        if value.count(":") == 1:
            host, port = value.split(":")
            return cls(ipaddress.ip_address(host), int(port))
        return cls(ipaddress.ip_address(value))

    @property
    def is_empty(self) -> bool:
        """Whether this is the sentinel address of an unused slot."""
        return self.host == self.EMPTY_HOST

    def __str__(self) -> str:
        if self.host.version == 6:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


EMPTY_ADDRESS = HostAddress(HostAddress.EMPTY_HOST)


@dataclass(frozen=True)
class ConnectedClient:
    """One row of the server's channel table.

    Attributes
    ----------
    address : HostAddress
        Client address, :data:`EMPTY_ADDRESS` for an unused slot.
    name : str
        Fader name chosen by the musician.
    jitter_buffer_size : int
        Jitter buffer size in frames.
    audio_channels : int
        Number of audio channels the client sends (1 mono, 2 stereo).
    instrument : int
        Instrument id.
    city : str
        City entered by the musician.
    country : int
        Country id.
    skill_level : int
        Skill level id, see :class:`jamulus_rpc.status.SkillLevel`.
    """

    address: HostAddress
    name: str = ""
    jitter_buffer_size: int = 0
    audio_channels: int = 0
    instrument: int = 0
    city: str = ""
    country: int = 0
    skill_level: int = 0

    @classmethod
    def empty(cls) -> ConnectedClient:
        """An unused slot."""
        return cls(address=EMPTY_ADDRESS)


class MediaServer(Protocol):
    """Interface the RPC handlers expect from the media server.

    Implementations must be safe to call from whichever thread the transport
    dispatches on; the control plane adds no locking of its own.
    """

    # Access control
    def firewall_add(self, address: str) -> None: ...

    def firewall_remove(self, address: str) -> None: ...

    def firewall_addresses(self) -> Sequence[str]: ...

    def firewall_mode(self) -> int: ...

    def set_firewall_mode(self, mode: int) -> None: ...

    def firewall_reset(self) -> None: ...

    # Recorder
    def recorder_initialised(self) -> bool: ...

    def recorder_error_message(self) -> str: ...

    def recording_enabled(self) -> bool: ...

    def recording_directory(self) -> str: ...

    def set_recording_directory(self, directory: str) -> None: ...

    def set_recording_enabled(self, enabled: bool) -> None: ...  # noqa: FBT001

    def request_new_recording(self) -> None: ...

    # Registration profile
    def server_name(self) -> str: ...

    def set_server_name(self, name: str) -> None: ...

    def server_city(self) -> str: ...

    def server_country(self) -> int: ...

    def welcome_message(self) -> str: ...

    def set_welcome_message(self, message: str) -> None: ...

    def directory_type(self) -> int: ...

    def directory_address(self) -> str: ...

    def registration_status(self) -> int: ...

    # Connected clients
    def connected_clients(self) -> Sequence[ConnectedClient]: ...

    def instrument_name(self, instrument: int) -> str: ...

    def country_name(self, country: int) -> str: ...


ServerHandler = Callable[[MediaServer, dict[str, Any]], Any]
"""Handler signature: the server object and the decoded ``params`` object."""
