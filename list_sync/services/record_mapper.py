"""Проверка полей и маппинг записей между хранилищем и моделями."""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Mapping, Optional

from list_sync.errors import ValidationError
from list_sync.models import ListSchema, Record


class RecordMapper:
    """Конвертация данных формы и сериализованных коллекций в записи."""

    def __init__(self, schema: ListSchema) -> None:
        self._schema = schema

    @staticmethod
    def _is_empty(value: Any) -> bool:
        return value is None or (isinstance(value, str) and value.strip() == "")

    @staticmethod
    def _to_int(value: Any) -> Optional[int]:
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        try:
            return int(str(value).strip())
        except ValueError:
            return None

    def clean(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        """Проверяет поля формы и приводит числовые поля к int."""
        for name in self._schema.required:
            if self._is_empty(fields.get(name)):
                raise ValidationError(self._schema.invalid_text, field=name)

        cleaned: Dict[str, Any] = {}
        for name in self._schema.fields:
            value = fields.get(name)
            if name in self._schema.numeric and not self._is_empty(value):
                number = self._to_int(value)
                if number is None:
                    raise ValidationError(f"Поле {name} должно быть целым числом", field=name)
                value = number
            cleaned[name] = value if value is not None else ""
        return cleaned

    def map_record(self, payload: Mapping[str, Any]) -> Record:
        record_id = int(payload["id"])
        fields = {name: payload.get(name, "") for name in self._schema.fields}
        for name in self._schema.numeric:
            number = self._to_int(fields[name])
            fields[name] = number if number is not None else 0
        return Record(id=record_id, fields=fields)

    def map_records(self, payload: Iterable[Mapping[str, Any]]) -> List[Record]:
        return [self.map_record(item) for item in payload]

    def to_payload(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        return {name: fields.get(name, "") for name in self._schema.fields}

    @staticmethod
    def dumps(records: Iterable[Record]) -> str:
        return json.dumps([record.to_dict() for record in records], ensure_ascii=False)

    def loads(self, raw: Optional[str]) -> List[Record]:
        if not raw:
            return []
        return self.map_records(json.loads(raw))


__all__ = ["RecordMapper"]
