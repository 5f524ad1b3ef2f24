"""
Connection Events
=================

Event names and payloads exchanged between the connection manager
and ConnectionSettingsListener.
"""

from dataclasses import dataclass
from typing import Any, Protocol


class ConnectionEvents(str):
    """Names of the connection lifecycle events."""
    POST_CONNECT = "postConnect"
    FAIL_CONNECT = "failConnect"


class ConnectionHandle(Protocol):
    """Statement-execution surface of an open connection."""

    def execute(self, statement: str) -> None:
        ...

    def register_type_mapping(self, db_type: str, type_: Any) -> None:
        ...


@dataclass(frozen=True)
class ConnectionFailedEvent:
    """A connection attempt raised before a connection existed."""
    driver_name: str
    cause: BaseException


@dataclass(frozen=True)
class ConnectionEstablishedEvent:
    """A connection was opened against ``platform_name``."""
    connection: ConnectionHandle
    platform_name: str
