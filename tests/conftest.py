from __future__ import annotations

import sqlite3
from collections.abc import Generator
from pathlib import Path

import pytest

from querycraft import Dialect

here = Path(__file__).parent
root_path = here.parent


@pytest.fixture(params=[Dialect.POSTGRES, Dialect.MYSQL, Dialect.MARIADB], ids=str)
def dialect(request: pytest.FixtureRequest) -> Dialect:
    """Every supported dialect."""
    return request.param  # type: ignore[no-any-return]


@pytest.fixture
def sqlite_connection() -> Generator[sqlite3.Connection, None, None]:
    """In-memory SQLite database with a populated ``users`` table.

    SQLite accepts ``?`` markers and backtick quoted identifiers, so it runs
    MySQL-family output unchanged.
    """
    connection = sqlite3.connect(":memory:")
    connection.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL, age INTEGER)")
    connection.executemany(
        "INSERT INTO users (name, age) VALUES (?, ?)",
        [("alice", 31), ("bob", 25), ("carol", 47), ("dave", 25)],
    )
    connection.commit()
    try:
        yield connection
    finally:
        connection.close()
