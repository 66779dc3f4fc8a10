"""Ошибки слоя синхронизации списков."""
from __future__ import annotations


class ListSyncError(Exception):
    """Базовое исключение приложения."""


class ValidationError(ListSyncError):
    """Обязательное поле не заполнено или имеет неверный формат."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class NotFoundError(ListSyncError):
    """Запись с указанным идентификатором отсутствует."""

    def __init__(self, record_id: int) -> None:
        super().__init__(f"Запись #{record_id} не найдена")
        self.record_id = record_id


class TransportError(ListSyncError, RuntimeError):
    """Сбой хранилища или сети."""


class StorageError(TransportError):
    """Ошибка чтения или записи хранилища."""


class HttpClientError(TransportError):
    """Ошибка HTTP-запроса."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


__all__ = [
    "ListSyncError",
    "ValidationError",
    "NotFoundError",
    "TransportError",
    "StorageError",
    "HttpClientError",
]
