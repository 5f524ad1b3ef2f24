"""
Database Platforms
==================

Closed set of platform families the connection listener knows about.
"""

from enum import Enum


class DatabasePlatform(str, Enum):
    """Platform family resolved from a dialect or platform name."""

    SQLITE = "sqlite"
    MYSQL = "mysql"
    POSTGRESQL = "postgresql"
    OTHER = "other"

    @classmethod
    def from_name(cls, name: str | None) -> "DatabasePlatform":
        """
        Resolve a platform name such as ``mariadb`` or ``postgresql``.

        Unknown or empty names resolve to OTHER.
        """
        if not name:
            return cls.OTHER
        return _ALIASES.get(name.strip().lower(), cls.OTHER)


_ALIASES = {
    "sqlite": DatabasePlatform.SQLITE,
    "mysql": DatabasePlatform.MYSQL,
    "mariadb": DatabasePlatform.MYSQL,
    "postgresql": DatabasePlatform.POSTGRESQL,
    "postgres": DatabasePlatform.POSTGRESQL,
}
