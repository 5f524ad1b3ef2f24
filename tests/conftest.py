"""Shared fixtures for connection listener tests."""

from __future__ import annotations

import logging
from typing import Any

import pytest

from dbsession.config import DatabaseSettings, GeneralSettings, Settings
from dbsession.infrastructure.database.listeners import ConnectionSettingsListener


class RecordingConnection:
    """Connection handle that records what the listener asks of it."""

    def __init__(self) -> None:
        self.statements: list[str] = []
        self.type_mappings: list[tuple[str, Any]] = []
        self.actions: list[tuple[str, Any]] = []

    def execute(self, statement: str) -> None:
        self.statements.append(statement)
        self.actions.append(("execute", statement))

    def register_type_mapping(self, db_type: str, type_: Any) -> None:
        self.type_mappings.append((db_type, type_))
        self.actions.append(("type_mapping", db_type))


def make_settings(**database: Any) -> Settings:
    return Settings(general=GeneralSettings(database=DatabaseSettings(**database)))


@pytest.fixture
def connection() -> RecordingConnection:
    return RecordingConnection()


@pytest.fixture
def settings() -> Settings:
    return make_settings(charset="utf8mb4", collate="utf8mb4_unicode_ci")


@pytest.fixture
def listener(settings: Settings) -> ConnectionSettingsListener:
    return ConnectionSettingsListener(settings, logging.getLogger("tests.connection"))
