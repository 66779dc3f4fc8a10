"""Хранилища сериализованных коллекций."""
from __future__ import annotations

import sqlite3
from contextlib import closing
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional, Protocol

from list_sync.errors import StorageError

ISO_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


class Store(Protocol):
    """Ключ-значение для сериализованных коллекций."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStore:
    """Хранилище в памяти процесса."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._data


class SqliteStore:
    """Обёртка над SQLite, повторяющая интерфейс localStorage."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        try:
            self._conn = sqlite3.connect(self._path)
        except sqlite3.Error as exc:
            raise StorageError(f"Не удалось открыть хранилище {self._path}: {exc}") from exc
        self._init_schema()

    def close(self) -> None:
        self._conn.close()

    # region schema
    def _init_schema(self) -> None:
        try:
            with closing(self._conn.cursor()) as cursor:
                cursor.executescript(
                    """
                    CREATE TABLE IF NOT EXISTS kv (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL,
                        updated_at TEXT
                    );
                    """
                )
                self._conn.commit()
        except sqlite3.Error as exc:
            raise StorageError(f"Не удалось подготовить хранилище {self._path}: {exc}") from exc

    # endregion

    def get(self, key: str) -> Optional[str]:
        try:
            row = self._conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(f"Ошибка чтения ключа {key}: {exc}") from exc
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        now = datetime.now(timezone.utc).strftime(ISO_FORMAT)
        try:
            self._conn.execute(
                "INSERT INTO kv (key, value, updated_at) VALUES (?, ?, ?)\n"
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at",
                (key, value, now),
            )
            self._conn.commit()
        except sqlite3.Error as exc:
            raise StorageError(f"Ошибка записи ключа {key}: {exc}") from exc

    def remove(self, key: str) -> None:
        try:
            self._conn.execute("DELETE FROM kv WHERE key = ?", (key,))
            self._conn.commit()
        except sqlite3.Error as exc:
            raise StorageError(f"Ошибка удаления ключа {key}: {exc}") from exc

    def keys(self) -> list[str]:
        try:
            rows = self._conn.execute("SELECT key FROM kv ORDER BY key").fetchall()
        except sqlite3.Error as exc:
            raise StorageError(f"Ошибка чтения списка ключей: {exc}") from exc
        return [row[0] for row in rows]


__all__ = ["Store", "MemoryStore", "SqliteStore"]
