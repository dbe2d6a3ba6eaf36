"""Server control methods.

Each handler receives the media server object and the request's ``params``
object, decodes its parameters, calls into the server and shapes the result
into JSON-compatible values. Validation always completes before the server
is touched.
"""

from __future__ import annotations

from typing import Any

from jamulus_rpc.config import get_config
from jamulus_rpc.decorators import declared_methods, rpc_method
from jamulus_rpc.params import (
    AddressListParams,
    AddressParams,
    FirewallModeParams,
    RecordingDirectoryParams,
    ServerNameParams,
    WelcomeMessageParams,
)
from jamulus_rpc.protocols import ConnectedClient, MediaServer
from jamulus_rpc.registry import MethodRegistry
from jamulus_rpc.status import (
    directory_address,
    serialize_registration_status,
    skill_level_name,
)

FIREWALL = "firewall"

OK = "ok"
ACKNOWLEDGED = "acknowledged"


@rpc_method("jamulus/getMode")
def get_mode(server: MediaServer, params: dict[str, Any]) -> dict[str, str]:
    """Report that this process runs in server mode."""
    return {"mode": "server"}


# Access control


@rpc_method("jamulusserver/addFirewallAddress", group=FIREWALL)
def add_firewall_address(server: MediaServer, params: dict[str, Any]) -> str:
    """Add an address to the access-control list."""
    decoded = AddressParams.decode(params)
    server.firewall_add(decoded.address)
    return OK


@rpc_method("jamulusserver/addFirewallAddresses", group=FIREWALL)
def add_firewall_addresses(server: MediaServer, params: dict[str, Any]) -> str:
    """Add several addresses to the access-control list.

    The whole array is validated first, so a bad element adds nothing.
    """
    decoded = AddressListParams.decode(params)
    for address in decoded.addresses:
        server.firewall_add(address)
    return OK


@rpc_method("jamulusserver/removeFirewallAddress", group=FIREWALL)
def remove_firewall_address(server: MediaServer, params: dict[str, Any]) -> str:
    """Remove an address from the access-control list."""
    decoded = AddressParams.decode(params)
    server.firewall_remove(decoded.address)
    return OK


@rpc_method("jamulusserver/setFirewallMode", group=FIREWALL)
def set_firewall_mode(server: MediaServer, params: dict[str, Any]) -> str:
    """Set the access-control mode, 0 for open and 1 for closed."""
    decoded = FirewallModeParams.decode(params)
    server.set_firewall_mode(decoded.mode)
    return OK


@rpc_method("jamulusserver/resetFirewall", group=FIREWALL)
def reset_firewall(server: MediaServer, params: dict[str, Any]) -> str:
    """Open the access-control list and remove every address from it."""
    server.firewall_reset()
    return OK


@rpc_method("jamulusserver/getFirewallStatus", group=FIREWALL)
def get_firewall_status(server: MediaServer, params: dict[str, Any]) -> dict:
    return {
        "mode": int(server.firewall_mode()),
        "addresses": list(server.firewall_addresses()),
    }


# Recorder


@rpc_method("jamulusserver/getRecorderStatus")
def get_recorder_status(server: MediaServer, params: dict[str, Any]) -> dict:
    return {
        "initialised": server.recorder_initialised(),
        "errorMessage": server.recorder_error_message(),
        "enabled": server.recording_enabled(),
        "recordingDirectory": server.recording_directory(),
    }


@rpc_method("jamulusserver/setRecordingDirectory")
def set_recording_directory(server: MediaServer, params: dict[str, Any]) -> str:
    """Ask the recorder to use a new directory.

    The change is not confirmed; call ``getRecorderStatus`` to check it.
    """
    decoded = RecordingDirectoryParams.decode(params)
    server.set_recording_directory(decoded.recording_directory)
    return ACKNOWLEDGED


@rpc_method("jamulusserver/startRecording")
def start_recording(server: MediaServer, params: dict[str, Any]) -> str:
    server.set_recording_enabled(True)
    return ACKNOWLEDGED


@rpc_method("jamulusserver/stopRecording")
def stop_recording(server: MediaServer, params: dict[str, Any]) -> str:
    server.set_recording_enabled(False)
    return ACKNOWLEDGED


@rpc_method("jamulusserver/restartRecording")
def restart_recording(server: MediaServer, params: dict[str, Any]) -> str:
    """Start recording into a new directory."""
    server.request_new_recording()
    return ACKNOWLEDGED


# Clients and profile


def _client_row(server: MediaServer, slot: int, client: ConnectedClient) -> dict:
    return {
        "id": slot,
        "address": str(client.address),
        "name": client.name,
        "jitterBufferSize": client.jitter_buffer_size,
        "channels": client.audio_channels,
        "instrumentCode": client.instrument,
        "instrumentName": server.instrument_name(client.instrument),
        "city": client.city,
        "countryCode": client.country,
        "countryName": server.country_name(client.country),
        "skillLevelCode": client.skill_level,
        "skillLevelName": skill_level_name(client.skill_level),
    }


@rpc_method("jamulusserver/getClients")
def get_clients(server: MediaServer, params: dict[str, Any]) -> dict:
    """List connected clients, skipping unused channel slots."""
    clients = [
        _client_row(server, slot, client)
        for slot, client in enumerate(server.connected_clients())
        if not client.address.is_empty
    ]
    return {"connections": len(clients), "clients": clients}


@rpc_method("jamulusserver/getServerProfile")
def get_server_profile(server: MediaServer, params: dict[str, Any]) -> dict:
    return {
        "name": server.server_name(),
        "city": server.server_city(),
        "countryId": server.server_country(),
        "welcomeMessage": server.welcome_message(),
        "directoryServer": directory_address(
            server.directory_type(), server.directory_address()
        ),
        "registrationStatus": serialize_registration_status(
            server.registration_status()
        ),
    }


@rpc_method("jamulusserver/setServerName")
def set_server_name(server: MediaServer, params: dict[str, Any]) -> str:
    decoded = ServerNameParams.decode(params)
    server.set_server_name(decoded.server_name)
    return OK


@rpc_method("jamulusserver/setWelcomeMessage")
def set_welcome_message(server: MediaServer, params: dict[str, Any]) -> str:
    decoded = WelcomeMessageParams.decode(params)
    server.set_welcome_message(decoded.welcome_message)
    return OK


def register_server_methods(
    registry: MethodRegistry, *, enable_firewall: bool | None = None
) -> MethodRegistry:
    """Register the server control methods.

    Parameters
    ----------
    registry : MethodRegistry
        Registry to fill.
    enable_firewall : bool | None, optional
        Whether to register the access-control methods. None reads
        ``ENABLE_FIREWALL_METHODS`` from the configuration.

    Returns
    -------
    MethodRegistry
        The same registry, for chaining.
    """
    if enable_firewall is None:
        enable_firewall = get_config().enable_firewall_methods

    for entry in declared_methods():
        if entry.group == FIREWALL and not enable_firewall:
            continue
        registry.register(entry.name, entry.handler, group=entry.group)
    return registry


def build_registry(*, enable_firewall: bool | None = None) -> MethodRegistry:
    """Create a frozen registry holding the server control methods."""
    registry = register_server_methods(
        MethodRegistry(), enable_firewall=enable_firewall
    )
    registry.freeze()
    return registry
