"""Синхронизация списка записей с REST API."""
from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from list_sync.clients.http import JsonHttpClient
from list_sync.errors import HttpClientError, NotFoundError, TransportError, ValidationError
from list_sync.models import FormMode, ListSchema, MessageKind, Record
from list_sync.services.record_mapper import RecordMapper
from list_sync.ui.renderer import Renderer

LOGGER = logging.getLogger(__name__)

TRANSPORT_ERROR_TEXT = "Сервер недоступен, попробуйте позже"

NOT_FOUND = 404


class RemoteSyncController:
    """Тот же контракт, что у ListSyncController, поверх HTTP API.

    Локальная копия никогда не меняется оптимистично: после каждой успешной
    мутации коллекция заново запрашивается с сервера.
    """

    def __init__(
        self,
        schema: ListSchema,
        client: JsonHttpClient,
        renderer: Renderer,
        mapper: Optional[RecordMapper] = None,
    ) -> None:
        if not schema.resource:
            raise ValueError(f"Для списка {schema.name} не задан resource")
        self._schema = schema
        self._client = client
        self._renderer = renderer
        self._mapper = mapper or RecordMapper(schema)
        self._records: List[Record] = []
        self._current_id: Optional[int] = None

    @property
    def records(self) -> List[Record]:
        return list(self._records)

    @property
    def current_selection(self) -> Optional[int]:
        return self._current_id

    @property
    def form_mode(self) -> FormMode:
        return FormMode.ADDING if self._current_id is None else FormMode.EDITING

    def get(self, record_id: int) -> Optional[Record]:
        return next((record for record in self._records if record.id == record_id), None)

    def _item_url(self, record_id: int) -> str:
        return f"{self._schema.resource}/{record_id}"

    # region public API
    def load(self) -> List[Record]:
        try:
            payload = self._client.get(self._schema.resource)
            self._records = self._mapper.map_records(payload or [])
        except (TransportError, KeyError, TypeError, ValueError) as exc:
            self._fail("загрузки", exc)
            return self.records
        self._renderer.render(self.records)
        return self.records

    def add(self, fields: Mapping[str, Any]) -> bool:
        try:
            cleaned = self._mapper.clean(fields)
        except ValidationError as exc:
            self._renderer.show_message(str(exc), MessageKind.ERROR)
            return False
        try:
            self._client.post(self._schema.resource, self._mapper.to_payload(cleaned))
        except TransportError as exc:
            self._fail("создания", exc)
            return False
        self._renderer.show_message(self._schema.added_text, MessageKind.SUCCESS)
        self._renderer.clear_inputs()
        self.load()
        return True

    def update(self, record_id: int, fields: Mapping[str, Any]) -> bool:
        if self._current_id != record_id:
            LOGGER.debug("Обновление записи %s пропущено: выбрана %s", record_id, self._current_id)
            return False
        try:
            cleaned = self._mapper.clean(fields)
        except ValidationError as exc:
            self._renderer.show_message(str(exc), MessageKind.ERROR)
            return False
        try:
            self._client.put(self._item_url(record_id), self._mapper.to_payload(cleaned))
        except HttpClientError as exc:
            if exc.status_code != NOT_FOUND:
                self._fail("обновления", exc)
                return False
            LOGGER.warning("%s", NotFoundError(record_id))
            self._current_id = None
            self._renderer.clear_inputs()
            self.load()
            return False
        except TransportError as exc:
            self._fail("обновления", exc)
            return False
        self._current_id = None
        self._renderer.show_message(self._schema.updated_text, MessageKind.SUCCESS)
        self._renderer.clear_inputs()
        self.load()
        return True

    def delete(self, record_id: int) -> bool:
        """Удаляет запись; если сервер её уже не знает, это не ошибка."""
        removed = True
        try:
            self._client.delete(self._item_url(record_id))
        except HttpClientError as exc:
            if exc.status_code != NOT_FOUND:
                self._fail("удаления", exc)
                return False
            LOGGER.debug("Запись %s отсутствует в списке %s", record_id, self._schema.name)
            removed = False
        except TransportError as exc:
            self._fail("удаления", exc)
            return False
        if self._current_id == record_id:
            self._current_id = None
        if removed:
            self._renderer.show_message(self._schema.removed_text, MessageKind.SUCCESS)
        self.load()
        return True

    def set_current_selection(self, record_id: Optional[int]) -> None:
        if record_id is None:
            self.cancel_edit()
            return
        record = self.get(record_id)
        if record is None:
            LOGGER.warning("%s", NotFoundError(record_id))
            return
        self._current_id = record_id
        self._renderer.fill_inputs(record)

    def cancel_edit(self) -> None:
        self._current_id = None
        self._renderer.clear_inputs()

    # endregion

    def _fail(self, action: str, exc: Exception) -> None:
        LOGGER.error("Ошибка %s списка %s: %s", action, self._schema.name, exc)
        self._renderer.show_message(TRANSPORT_ERROR_TEXT, MessageKind.ERROR)


__all__ = ["RemoteSyncController", "TRANSPORT_ERROR_TEXT"]
