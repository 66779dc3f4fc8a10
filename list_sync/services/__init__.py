"""Сервисный слой приложения."""

from .list_sync import ListSyncController
from .location import LocationStore
from .profiles import ProfileIterator
from .record_mapper import RecordMapper
from .remote_sync import RemoteSyncController
from .store import MemoryStore, SqliteStore, Store

__all__ = [
    "ListSyncController",
    "RemoteSyncController",
    "RecordMapper",
    "Store",
    "MemoryStore",
    "SqliteStore",
    "LocationStore",
    "ProfileIterator",
]
