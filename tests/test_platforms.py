"""Tests for DatabasePlatform resolution."""

from __future__ import annotations

import pytest

from dbsession.infrastructure.database.platforms import DatabasePlatform


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("sqlite", DatabasePlatform.SQLITE),
        ("mysql", DatabasePlatform.MYSQL),
        ("mariadb", DatabasePlatform.MYSQL),
        ("postgresql", DatabasePlatform.POSTGRESQL),
        ("PostgreSQL", DatabasePlatform.POSTGRESQL),
        ("mssql", DatabasePlatform.OTHER),
        ("", DatabasePlatform.OTHER),
        (None, DatabasePlatform.OTHER),
    ],
)
def test_from_name(name: str | None, expected: DatabasePlatform) -> None:
    assert DatabasePlatform.from_name(name) is expected
