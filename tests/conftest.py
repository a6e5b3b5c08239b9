"""Shared pytest fixtures for clauseQL unit and integration tests."""
from __future__ import annotations

import sqlite3
from collections.abc import Iterator

import pytest

from clauseql.builder import SqlBuilder
from tests.fixtures import DEPARTMENTS, EMPLOYEES, load_ddl


@pytest.fixture()
def builder() -> SqlBuilder:
    """A fresh, empty builder."""
    return SqlBuilder()


@pytest.fixture()
def db() -> Iterator[sqlite3.Connection]:
    """In-memory SQLite database seeded with departments and employees."""
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    conn.executescript(load_ddl())
    conn.executemany("INSERT INTO departments VALUES (?,?)", DEPARTMENTS)
    conn.executemany("INSERT INTO employees VALUES (?,?,?,?,?,?,?)", EMPLOYEES)
    yield conn
    conn.close()
