"""
SQLAlchemy Bridge
=================

Wires ConnectionSettingsListener handlers onto SQLAlchemy engine events:

- postConnect -> pool ``connect`` (raw DBAPI connection just opened)
- failConnect -> ``handle_error`` for errors raised while establishing
  a connection
"""

from typing import Any, Callable, Dict, List, Tuple, Union

from sqlalchemy import event
from sqlalchemy.engine import Dialect, Engine
from sqlalchemy.ext.asyncio import AsyncEngine

from dbsession.core.exceptions import ConfigurationException
from dbsession.infrastructure.database.events import (
    ConnectionEstablishedEvent,
    ConnectionEvents,
    ConnectionFailedEvent,
)
from dbsession.infrastructure.database.listeners import ConnectionSettingsListener
from dbsession.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class DBAPIConnectionHandle:
    """Executes session statements on a raw DBAPI connection."""

    def __init__(self, dbapi_connection: Any, dialect: Dialect):
        self.dbapi_connection = dbapi_connection
        self.dialect = dialect

    def execute(self, statement: str) -> None:
        cursor = self.dbapi_connection.cursor()
        try:
            cursor.execute(statement)
        finally:
            cursor.close()

    def register_type_mapping(self, db_type: str, type_: Any) -> None:
        """
        Reflect ``db_type`` columns as ``type_`` for this engine only.

        ``ischema_names`` is a class attribute shared by every engine of
        the dialect, so the instance gets its own copy.
        """
        names = dict(getattr(self.dialect, "ischema_names", {}))
        names[db_type.lower()] = type_
        self.dialect.ischema_names = names

    def commit(self) -> None:
        # Keeps transactional SET statements (PostgreSQL) past the
        # pool's reset-on-return rollback.
        self.dbapi_connection.commit()


def _post_connect_hook(engine: Engine, handler: Callable) -> Callable:
    def on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        handle = DBAPIConnectionHandle(dbapi_connection, engine.dialect)
        handler(ConnectionEstablishedEvent(handle, engine.dialect.name))
        handle.commit()

    return on_connect


def _fail_connect_hook(engine: Engine, handler: Callable) -> Callable:
    def on_error(context: Any) -> None:
        # A Connection only exists once establishment succeeded; pre-ping
        # failures are recovered by the pool itself.
        if context.connection is not None or context.is_pre_ping:
            return
        cause = context.original_exception
        if cause is None:
            return
        handler(ConnectionFailedEvent(context.dialect.driver, cause))

    return on_error


_HOOKS: Dict[str, Tuple[str, Callable[[Engine, Callable], Callable]]] = {
    ConnectionEvents.POST_CONNECT: ("connect", _post_connect_hook),
    ConnectionEvents.FAIL_CONNECT: ("handle_error", _fail_connect_hook),
}


def attach_connection_listeners(
    engine: Union[Engine, AsyncEngine],
    listener: ConnectionSettingsListener,
) -> List[Tuple[str, Callable]]:
    """
    Register the listener's subscribed events on an engine.

    Args:
        engine: Sync or async engine
        listener: Listener providing the event -> handler mapping

    Returns:
        The (SQLAlchemy event name, hook) pairs that were registered

    Raises:
        ConfigurationException: If the listener subscribes to an unknown event
    """
    if isinstance(engine, AsyncEngine):
        engine = engine.sync_engine

    registered = []
    for name, handler in listener.subscribed_events().items():
        if name not in _HOOKS:
            raise ConfigurationException(
                f"Unsupported connection event: {name}",
                {"event": name},
            )
        sa_event, factory = _HOOKS[name]
        hook = factory(engine, handler)
        event.listen(engine, sa_event, hook)
        registered.append((sa_event, hook))
        logger.debug(f"Attached {name} to '{sa_event}'", extra={"dialect": engine.dialect.name})

    return registered
