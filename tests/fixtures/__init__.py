"""Test fixtures: sample SQLite DDL and seed rows."""

from __future__ import annotations

from pathlib import Path

_FIXTURES_DIR = Path(__file__).parent

DEPARTMENTS = [
    (1, "Engineering"),
    (2, "Sales"),
]

EMPLOYEES = [
    (1, "acme", 1, "Alice", "Smith", 95000.0, 1),
    (2, "acme", 1, "Bob", "Jones", 45000.0, 1),
    (3, "acme", 2, "Charlie", "Brown", None, 0),
    (4, "acme", None, "Diana", "Prince", 120000.0, 1),
    (5, "beta", 2, "Frank", "Miller", 80000.0, 1),
]


def load_ddl() -> str:
    """Return the sample SQLite DDL string."""
    return (_FIXTURES_DIR / "ddl_sqlite.sql").read_text()
