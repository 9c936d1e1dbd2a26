"""Pytest configuration and fixtures for test suite."""

import sqlite3

import pytest
from sqlalchemy import event

from core.db.database import database
from core.processing.dedup import DEDUP_WINDOW
from core.services.observation_manager import observation_manager


@pytest.fixture(autouse=True)
def fresh_database():
    """Run every test against an empty in-memory SQLite database.

    The engine uses a StaticPool, so all sessions share the one connection
    and the data lives for exactly one test.
    """
    database.init("sqlite://")
    observation_manager.dedup_window = DEDUP_WINDOW

    yield database

    database.dispose()
    observation_manager.dedup_window = DEDUP_WINDOW


@pytest.fixture
def rec_csv(tmp_path):
    """A small REC input file with two buildings in one space."""
    path = tmp_path / "rec.csv"
    path.write_text(
        "space;building;sensor\n"
        "space-1;building-1;sensor-1\n"
        "space-1;building-1;sensor-2\n"
        "space-1;building-2;sensor-3\n"
    )
    return path


@pytest.fixture
def failing_second_insert():
    """Fail every second INSERT into observations, as a lost connection would.

    Yields the list of attempted inserts.
    """
    inserts = []

    def fail(conn, cursor, statement, parameters, context, executemany):
        if statement.startswith("INSERT INTO observations"):
            inserts.append(statement)
            if len(inserts) % 2 == 0:
                raise sqlite3.OperationalError("disk I/O error")

    event.listen(database.engine, "before_cursor_execute", fail)
    yield inserts
    event.remove(database.engine, "before_cursor_execute", fail)
