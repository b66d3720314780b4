from __future__ import annotations

import os
import sqlite3
from datetime import datetime
from typing import Dict, Optional

SCHEMA_PATH = os.path.join(os.path.dirname(__file__), "schema.sql")


class StoreError(RuntimeError):
    """Key-value store could not be read or written."""


class SqliteStore:
    """
    Key-value snapshot store on top of a single sqlite table.

    No transactions across calls: every get/set opens its own connection.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        try:
            dirname = os.path.dirname(self.db_path)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            conn = sqlite3.connect(self.db_path)
        except (sqlite3.Error, OSError) as e:
            raise StoreError(f"cannot open {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        return conn

    def init(self) -> None:
        conn = self._connect()
        try:
            with open(SCHEMA_PATH, "r", encoding="utf-8") as f:
                conn.executescript(f.read())
            conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"cannot create schema: {e}") from e
        finally:
            conn.close()

    def get(self, key: str) -> Optional[str]:
        conn = self._connect()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            return str(row["value"]) if row else None
        except sqlite3.Error as e:
            raise StoreError(f"read {key!r} failed: {e}") from e
        finally:
            conn.close()

    def set(self, key: str, value: str) -> None:
        conn = self._connect()
        try:
            updated_at = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            conn.execute(
                "INSERT INTO kv(key, value, updated_at) VALUES(?,?,?) "
                "ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at",
                (key, value, updated_at),
            )
            conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"write {key!r} failed: {e}") from e
        finally:
            conn.close()


class MemoryStore:
    """Dict-backed store for tests and throwaway sessions."""

    def __init__(self, data: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(data or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value
