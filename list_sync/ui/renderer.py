"""Интерфейс отображения и учёт всплывающих сообщений."""
from __future__ import annotations

import time
from typing import Callable, Optional, Protocol, Sequence

from list_sync.models import Message, MessageKind, Record


class Renderer(Protocol):
    """Поверхность, на которой отображается коллекция."""

    def render(self, records: Sequence[Record]) -> None: ...

    def show_message(self, text: str, kind: MessageKind | str) -> None: ...

    def clear_inputs(self) -> None: ...

    def fill_inputs(self, record: Record) -> None: ...


class MessageBoard:
    """Единственное видимое сообщение, скрывающееся по таймауту.

    Новое сообщение заменяет текущее.
    """

    def __init__(self, timeout: float = 3.0, clock: Callable[[], float] = time.monotonic) -> None:
        self._timeout = timeout
        self._clock = clock
        self._message: Optional[Message] = None

    def post(self, text: str, kind: MessageKind | str) -> Message:
        self._message = Message(text=text, kind=MessageKind(kind), expires_at=self._clock() + self._timeout)
        return self._message

    @property
    def current(self) -> Optional[Message]:
        if self._message is not None and self._clock() >= self._message.expires_at:
            self._message = None
        return self._message


__all__ = ["Renderer", "MessageBoard"]
