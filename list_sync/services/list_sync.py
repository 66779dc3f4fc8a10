"""Синхронизация списка записей с локальным хранилищем."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from list_sync.errors import NotFoundError, TransportError, ValidationError
from list_sync.models import FormMode, ListSchema, MessageKind, Record
from list_sync.services.record_mapper import RecordMapper
from list_sync.services.store import Store
from list_sync.ui.renderer import Renderer

LOGGER = logging.getLogger(__name__)

TRANSPORT_ERROR_TEXT = "Не удалось сохранить изменения, попробуйте позже"


class ListSyncController:
    """Держит коллекцию в памяти согласованной с хранилищем и отображением.

    Коллекция хранится как упорядоченный словарь ``id -> Record``; порядок
    вставки совпадает с порядком отображения. После каждой мутации коллекция
    целиком записывается в хранилище под ключом ``schema.store_key``.
    """

    def __init__(
        self,
        schema: ListSchema,
        store: Store,
        renderer: Renderer,
        mapper: Optional[RecordMapper] = None,
    ) -> None:
        if not schema.store_key:
            raise ValueError(f"Для списка {schema.name} не задан store_key")
        self._schema = schema
        self._store = store
        self._renderer = renderer
        self._mapper = mapper or RecordMapper(schema)
        self._items: Dict[int, Record] = {}
        self._current_id: Optional[int] = None

    # region state
    @property
    def records(self) -> List[Record]:
        return list(self._items.values())

    @property
    def current_selection(self) -> Optional[int]:
        return self._current_id

    @property
    def form_mode(self) -> FormMode:
        return FormMode.ADDING if self._current_id is None else FormMode.EDITING

    def get(self, record_id: int) -> Optional[Record]:
        return self._items.get(record_id)

    def __len__(self) -> int:
        return len(self._items)

    # endregion

    # region public API
    def load(self) -> List[Record]:
        """Перечитывает коллекцию из хранилища; отсутствие ключа означает пустой список."""
        try:
            records = self._read()
        except TransportError:
            LOGGER.exception("Не удалось прочитать список %s", self._schema.name)
            self._renderer.show_message(TRANSPORT_ERROR_TEXT, MessageKind.ERROR)
            return self.records
        self._items = {record.id: record for record in records}
        LOGGER.debug("Загружено %s записей списка %s", len(self._items), self._schema.name)
        self._renderer.render(self.records)
        return self.records

    def add(self, fields: Mapping[str, Any]) -> Optional[Record]:
        try:
            cleaned = self._mapper.clean(fields)
        except ValidationError as exc:
            LOGGER.info("Запись не добавлена в %s: %s", self._schema.name, exc)
            self._renderer.show_message(str(exc), MessageKind.ERROR)
            return None

        record = Record(id=self._next_id(), fields=cleaned)
        self._items[record.id] = record
        LOGGER.debug("Добавлена запись %s в список %s", record.id, self._schema.name)
        self._renderer.render(self.records)
        if not self._persist():
            return record
        self._renderer.show_message(self._schema.added_text, MessageKind.SUCCESS)
        self._renderer.clear_inputs()
        return record

    def update(self, record_id: int, fields: Mapping[str, Any]) -> Optional[Record]:
        if self._current_id != record_id:
            LOGGER.debug(
                "Обновление записи %s пропущено: выбрана %s", record_id, self._current_id
            )
            return None
        record = self._items.get(record_id)
        if record is None:
            LOGGER.warning("%s", NotFoundError(record_id))
            return None
        try:
            cleaned = self._mapper.clean(fields)
        except ValidationError as exc:
            LOGGER.info("Запись %s не обновлена: %s", record_id, exc)
            self._renderer.show_message(str(exc), MessageKind.ERROR)
            return None

        record.fields.update(cleaned)
        self._current_id = None
        self._renderer.render(self.records)
        if not self._persist():
            return record
        self._renderer.show_message(self._schema.updated_text, MessageKind.SUCCESS)
        self._renderer.clear_inputs()
        return record

    def delete(self, record_id: int) -> bool:
        """Удаляет запись; отсутствующий id не считается ошибкой."""
        if self._items.pop(record_id, None) is None:
            LOGGER.debug("Запись %s отсутствует в списке %s", record_id, self._schema.name)
            return False
        if self._current_id == record_id:
            self._current_id = None
        self._renderer.render(self.records)
        if self._persist():
            self._renderer.show_message(self._schema.removed_text, MessageKind.SUCCESS)
        return True

    def clear(self) -> None:
        """Очищает коллекцию и удаляет ключ из хранилища целиком."""
        self._items = {}
        self._current_id = None
        self._renderer.render(self.records)
        try:
            self._store.remove(self._schema.store_key)
        except TransportError:
            LOGGER.exception("Не удалось очистить список %s", self._schema.name)
            self._renderer.show_message(TRANSPORT_ERROR_TEXT, MessageKind.ERROR)

    def set_current_selection(self, record_id: Optional[int]) -> None:
        if record_id is None:
            self.cancel_edit()
            return
        record = self._items.get(record_id)
        if record is None:
            LOGGER.warning("%s", NotFoundError(record_id))
            return
        self._current_id = record_id
        self._renderer.fill_inputs(record)

    def cancel_edit(self) -> None:
        self._current_id = None
        self._renderer.clear_inputs()

    def total_of(self, field: str) -> int:
        return sum(int(record.fields.get(field) or 0) for record in self._items.values())

    def filter(self, text: str) -> List[Record]:
        """Записи, в полях которых встречается text без учёта регистра."""
        needle = text.lower()
        return [
            record
            for record in self._items.values()
            if any(needle in str(value).lower() for value in record.fields.values())
        ]

    # endregion

    # region helpers
    def _next_id(self) -> int:
        if not self._items:
            return 0
        return max(self._items) + 1

    def _read(self) -> List[Record]:
        raw = self._store.get(self._schema.store_key)
        try:
            return self._mapper.loads(raw)
        except (ValueError, KeyError, TypeError) as exc:
            raise TransportError(f"Повреждены данные списка {self._schema.name}: {exc}") from exc

    def _persist(self) -> bool:
        try:
            self._store.set(self._schema.store_key, self._mapper.dumps(self._items.values()))
        except TransportError:
            LOGGER.exception("Не удалось сохранить список %s", self._schema.name)
            self._renderer.show_message(TRANSPORT_ERROR_TEXT, MessageKind.ERROR)
            return False
        return True

    # endregion


__all__ = ["ListSyncController", "TRANSPORT_ERROR_TEXT"]
