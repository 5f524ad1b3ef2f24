"""
Connection Settings Listener
============================

Handlers for the connection lifecycle:
- failConnect: log the failure and raise DatabaseConnectionError
- postConnect: apply per-platform session settings

Configured charset and collation are interpolated into the MySQL
``SET NAMES`` statement without escaping. They must come from trusted
local configuration.
"""

import logging
from typing import Callable, Dict

from sqlalchemy.types import String

from dbsession.config import ConfigReader
from dbsession.core.exceptions import DatabaseConnectionError
from dbsession.infrastructure.database.events import (
    ConnectionEstablishedEvent,
    ConnectionEvents,
    ConnectionFailedEvent,
)
from dbsession.infrastructure.database.platforms import DatabasePlatform

# MySQL defaults to 1024 bytes, which truncates GROUP_CONCAT() results
# that aggregate many related rows into one value.
GROUP_CONCAT_MAX_LEN = 100000


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
        quote = value[0]
        return value[1:-1].replace(quote * 2, quote)
    return value


class EnumAsString(String):
    """
    Reflected ENUM column treated as a plain string.

    Reflection passes the quoted enum labels positionally and the column's
    charset options as keywords; only the longest label survives, as the
    VARCHAR length.
    """

    def __init__(self, *values: str, length: int | None = None, **kw: object):
        if values:
            length = max(len(_unquote(str(v))) for v in values)
        super().__init__(length=length)


class ConnectionSettingsListener:
    """
    Listener for connection lifecycle events.

    Holds no per-connection state; the same instance handles every
    connection attempt of an engine.
    """

    def __init__(self, config: ConfigReader, logger: logging.Logger):
        self._config = config
        self._logger = logger

    def fail_connect(self, event: ConnectionFailedEvent) -> None:
        """
        Event fired on database connection failure.

        Raises:
            DatabaseConnectionError: Always
        """
        error = event.cause
        message = str(error)
        self._logger.debug(message, extra={"event": "exception"}, exc_info=error)

        raise DatabaseConnectionError(event.driver_name, message, error) from error

    def post_connect(self, event: ConnectionEstablishedEvent) -> None:
        """After connecting, update this connection's session settings."""
        db = event.connection
        platform = DatabasePlatform.from_name(event.platform_name)

        if platform is DatabasePlatform.SQLITE:
            db.execute("PRAGMA synchronous = OFF")
        elif platform is DatabasePlatform.MYSQL:
            # Reflect ENUM columns as plain strings
            db.register_type_mapping("enum", EnumAsString)

            charset = self._config_value("general/database/charset")
            collation = self._config_value("general/database/collate")
            db.execute(f"SET NAMES {charset} COLLATE {collation}")

            db.execute(f"SET SESSION group_concat_max_len = {GROUP_CONCAT_MAX_LEN}")
        elif platform is DatabasePlatform.POSTGRESQL:
            db.execute("SET NAMES 'utf8'")

    def subscribed_events(self) -> Dict[str, Callable]:
        """Map of event name to handler."""
        return {
            ConnectionEvents.POST_CONNECT: self.post_connect,
            ConnectionEvents.FAIL_CONNECT: self.fail_connect,
        }

    def _config_value(self, path: str) -> str:
        value = self._config.get(path)
        return "" if value is None else str(value)
