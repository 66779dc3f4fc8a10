"""Определения доменных сущностей."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class FormMode(str, Enum):
    """Режим формы ввода."""

    ADDING = "add"
    EDITING = "edit"


class MessageKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(slots=True)
class Record:
    """Элемент списка: идентификатор и доменные поля."""

    id: int
    fields: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, **self.fields}

    def __getitem__(self, name: str) -> Any:
        if name == "id":
            return self.id
        return self.fields[name]


@dataclass(frozen=True, slots=True)
class ListSchema:
    """Описание виджета-списка."""

    name: str
    title: str
    fields: Tuple[str, ...]
    required: Tuple[str, ...] = ()
    numeric: Tuple[str, ...] = ()
    store_key: Optional[str] = None
    resource: Optional[str] = None
    added_text: str = "Запись добавлена"
    updated_text: str = "Запись обновлена"
    removed_text: str = "Запись удалена"
    invalid_text: str = "Заполните все поля"

    @property
    def is_remote(self) -> bool:
        return self.resource is not None


@dataclass(slots=True)
class Message:
    """Всплывающее сообщение пользователю."""

    text: str
    kind: MessageKind
    expires_at: float


@dataclass(slots=True)
class Location:
    city: str
    state: str


@dataclass(slots=True)
class Profile:
    """Анкета для просмотра в скроллере профилей."""

    name: str
    age: int
    gender: str
    looking_for: str
    location: str
    image: str


__all__ = ["FormMode", "MessageKind", "Record", "ListSchema", "Message", "Location", "Profile"]
