# Area: Cache
"""
trivia_duel._cache.store - Key-value stores for local state
===========================================================

The response cache talks to a small key-value interface so it can be
backed by memory in tests and by SQLite on a device. Values are lists
(of option indices or category ids) stored as JSON.
"""

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

logger = logging.getLogger("trivia_duel.cache.store")

# Path to schema file
SCHEMA_PATH = Path(__file__).parent / "schema.sql"


class KeyValueStore(Protocol):
    """Interface for the local list store."""

    def get(self, key: str) -> Optional[List[Any]]:
        ...

    def set(self, key: str, value: List[Any]) -> None:
        ...

    def remove(self, key: str) -> None:
        ...


class InMemoryStore:
    """Dictionary-backed store."""

    def __init__(self):
        self._data: Dict[str, List[Any]] = {}

    def get(self, key: str) -> Optional[List[Any]]:
        value = self._data.get(key)
        return list(value) if value is not None else None

    def set(self, key: str, value: List[Any]) -> None:
        self._data[key] = list(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


def get_connection(db_path: str = "trivia_duel.db") -> sqlite3.Connection:
    """
    Get a database connection.

    Args:
        db_path: Path to the SQLite database file

    Returns:
        SQLite connection with row factory set
    """
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def init_database(db_path: str = "trivia_duel.db") -> None:
    """
    Initialize the database with schema.

    Args:
        db_path: Path to the SQLite database file
    """
    conn = get_connection(db_path)
    try:
        with open(SCHEMA_PATH, "r", encoding="utf-8") as f:
            schema = f.read()
        conn.executescript(schema)
        conn.commit()
        logger.info(f"Database initialized at {db_path}")
    finally:
        conn.close()


class SQLiteStore:
    """
    Persistent store backed by a single SQLite table.

    The schema is created on first use, so pointing the store at a new
    file is enough.
    """

    def __init__(self, db_path: str = "trivia_duel.db"):
        """
        Initialize store.

        Args:
            db_path: Path to the SQLite database file
        """
        self.db_path = db_path
        init_database(db_path)

    def _get_conn(self) -> sqlite3.Connection:
        return get_connection(self.db_path)

    def _execute(
        self, query: str, params: tuple = (), fetch: bool = False
    ) -> Optional[list]:
        """
        Execute a query.

        Args:
            query: SQL query string
            params: Query parameters
            fetch: If True, fetch and return results

        Returns:
            Query results if fetch=True, else None
        """
        conn = self._get_conn()
        try:
            cursor = conn.execute(query, params)
            if fetch:
                return [dict(row) for row in cursor.fetchall()]
            conn.commit()
            return None
        finally:
            conn.close()

    def get(self, key: str) -> Optional[List[Any]]:
        query = "SELECT value FROM cached_values WHERE key = ?"
        rows = self._execute(query, (key,), fetch=True)
        if not rows:
            return None
        try:
            value = json.loads(rows[0]["value"])
        except json.JSONDecodeError:
            logger.warning(f"Discarding unreadable cache entry {key}")
            return None
        return value if isinstance(value, list) else None

    def set(self, key: str, value: List[Any]) -> None:
        query = """
            INSERT OR REPLACE INTO cached_values (key, value, updated_at)
            VALUES (?, ?, CURRENT_TIMESTAMP)
        """
        self._execute(query, (key, json.dumps(list(value))))

    def remove(self, key: str) -> None:
        self._execute("DELETE FROM cached_values WHERE key = ?", (key,))

    def keys(self) -> List[str]:
        rows = self._execute("SELECT key FROM cached_values ORDER BY key", fetch=True)
        return [row["key"] for row in rows or []]
