"""Typed parameter objects for the server methods.

Each class declares its fields as :class:`ParamField` entries and is decoded
once from the request's ``params`` object. Fields are checked in declaration
order and the first violation wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, NamedTuple

from jamulus_rpc.validation import ParamKind, expect


class ParamField(NamedTuple):
    """One declared parameter.

    Attributes
    ----------
    attribute : str
        Dataclass attribute receiving the value.
    json_name : str
        Member name in the request's ``params`` object.
    kind : ParamKind
        Expected kind of value.
    element : str | None
        Name of one element of an array parameter, used in error messages.
    """

    attribute: str
    json_name: str
    kind: ParamKind
    element: str | None = None


@dataclass(frozen=True)
class RpcParams:
    """Base class for decoded method parameters."""

    schema: ClassVar[tuple[ParamField, ...]] = ()

    @classmethod
    def decode(cls, params: dict[str, Any]) -> RpcParams:
        """Validate ``params`` and build an instance.

        Raises
        ------
        InvalidParamsError
            On the first field that is missing or has the wrong kind.
        """
        values = {
            field.attribute: expect(
                params, field.json_name, field.kind, element=field.element
            )
            for field in cls.schema
        }
        return cls(**values)


@dataclass(frozen=True)
class AddressParams(RpcParams):
    address: str

    schema = (ParamField("address", "address", ParamKind.STRING),)


@dataclass(frozen=True)
class AddressListParams(RpcParams):
    addresses: tuple[str, ...]

    schema = (
        ParamField("addresses", "addresses", ParamKind.STRING_ARRAY, "address"),
    )


@dataclass(frozen=True)
class FirewallModeParams(RpcParams):
    mode: int

    schema = (ParamField("mode", "mode", ParamKind.BINARY_FLAG),)


@dataclass(frozen=True)
class ServerNameParams(RpcParams):
    server_name: str

    schema = (ParamField("server_name", "serverName", ParamKind.STRING),)


@dataclass(frozen=True)
class WelcomeMessageParams(RpcParams):
    welcome_message: str

    schema = (ParamField("welcome_message", "welcomeMessage", ParamKind.STRING),)


@dataclass(frozen=True)
class RecordingDirectoryParams(RpcParams):
    recording_directory: str

    schema = (
        ParamField("recording_directory", "recordingDirectory", ParamKind.STRING),
    )
