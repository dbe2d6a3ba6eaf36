"""Server state enumerations and their wire representations."""

from __future__ import annotations

from enum import IntEnum


class FirewallMode(IntEnum):
    """Access-control list mode."""

    OPEN = 0
    CLOSED = 1


class RegistrationStatus(IntEnum):
    """State of the server's registration with a directory."""

    NOT_REGISTERED = 0
    BAD_ADDRESS = 1
    REQUESTED = 2
    TIME_OUT = 3
    UNKNOWN_RESP = 4
    REGISTERED = 5
    SERVER_LIST_FULL = 6
    VERSION_TOO_OLD = 7
    NOT_FULFILL_REQUIREMENTS = 8


_REGISTRATION_STATUS_NAMES: dict[int, str] = {
    RegistrationStatus.NOT_REGISTERED: "not_registered",
    RegistrationStatus.BAD_ADDRESS: "bad_address",
    RegistrationStatus.REQUESTED: "requested",
    RegistrationStatus.TIME_OUT: "time_out",
    RegistrationStatus.UNKNOWN_RESP: "unknown_resp",
    RegistrationStatus.REGISTERED: "registered",
    RegistrationStatus.SERVER_LIST_FULL: "directory_server_full",
    RegistrationStatus.VERSION_TOO_OLD: "server_version_too_old",
    RegistrationStatus.NOT_FULFILL_REQUIREMENTS: "requirements_not_fulfilled",
}


def serialize_registration_status(status: int) -> str:
    """Return the wire name of a registration status.

    Parameters
    ----------
    status : int
        A :class:`RegistrationStatus` or any integer reported by the server.

    Returns
    -------
    str
        The status name, or ``unknown(<n>)`` for values outside the enum.

    Examples
    --------
    >>> serialize_registration_status(RegistrationStatus.REGISTERED)
    'registered'
    >>> serialize_registration_status(999)
    'unknown(999)'
    """
    name = _REGISTRATION_STATUS_NAMES.get(status)
    if name is None:
        return f"unknown({int(status)})"
    return name


class DirectoryType(IntEnum):
    """Directory a server registers with."""

    NONE = -1
    ANY_GENRE_1 = 0
    ANY_GENRE_2 = 1
    ANY_GENRE_3 = 2
    ROCK = 3
    JAZZ = 4
    CLASSICAL_FOLK = 5
    CHORAL = 6
    CUSTOM = 7


DIRECTORY_ADDRESSES: dict[int, str] = {
    DirectoryType.ANY_GENRE_1: "anygenre1.jamulus.io:22124",
    DirectoryType.ANY_GENRE_2: "anygenre2.jamulus.io:22224",
    DirectoryType.ANY_GENRE_3: "anygenre3.jamulus.io:22624",
    DirectoryType.ROCK: "rock.jamulus.io:22424",
    DirectoryType.JAZZ: "jazz.jamulus.io:22324",
    DirectoryType.CLASSICAL_FOLK: "classical.jamulus.io:22524",
    DirectoryType.CHORAL: "choral.jamulus.io:22724",
}


def directory_address(directory_type: int, custom_address: str = "") -> str:
    """Resolve the address of the directory a server registers with.

    Returns an empty string when no directory is configured.
    """
    if directory_type == DirectoryType.NONE:
        return ""
    if directory_type == DirectoryType.CUSTOM:
        return custom_address
    return DIRECTORY_ADDRESSES.get(
        directory_type, DIRECTORY_ADDRESSES[DirectoryType.ANY_GENRE_1]
    )


class SkillLevel(IntEnum):
    """Musician skill level chosen by a client."""

    NOT_SET = 0
    BEGINNER = 1
    INTERMEDIATE = 2
    EXPERT = 3


_SKILL_LEVEL_NAMES: dict[int, str] = {
    SkillLevel.BEGINNER: "Beginner",
    SkillLevel.INTERMEDIATE: "Intermediate",
    SkillLevel.EXPERT: "Expert",
}


def skill_level_name(skill_level: int) -> str:
    """Display name of a skill level; "None" when unset or unknown."""
    return _SKILL_LEVEL_NAMES.get(skill_level, "None")
