"""Отображение списков в терминале."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence

import typer

from list_sync.models import ListSchema, MessageKind, Record
from list_sync.ui.renderer import MessageBoard

_COLORS = {
    MessageKind.SUCCESS: typer.colors.GREEN,
    MessageKind.ERROR: typer.colors.RED,
}


def format_table(title: str, columns: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    rows = [list(row) for row in rows]
    if not rows:
        return f"{title}: нет данных"
    widths = [max(len(column), *(len(row[idx]) for row in rows)) for idx, column in enumerate(columns)]
    header = "  |  ".join(column.ljust(width) for column, width in zip(columns, widths))
    separator = "--+-".join("-" * width for width in widths)
    body = "\n".join(
        "  " + "  |  ".join(cell.ljust(width) for cell, width in zip(row, widths)).rstrip() for row in rows
    )
    return f"{title}:\n  {header}\n  {separator}\n{body}"


class ConsoleRenderer:
    """Renderer, печатающий коллекцию таблицей через typer.echo.

    Поля формы хранятся в ``inputs``: fill_inputs заполняет их значениями
    редактируемой записи, clear_inputs очищает.
    """

    def __init__(
        self,
        schema: ListSchema,
        *,
        board: Optional[MessageBoard] = None,
        total_field: Optional[str] = None,
        show_tables: bool = True,
    ) -> None:
        self._schema = schema
        self._board = board or MessageBoard()
        self._total_field = total_field
        self._show_tables = show_tables
        self.inputs: Dict[str, Any] = {}

    @property
    def board(self) -> MessageBoard:
        return self._board

    @contextmanager
    def muted(self) -> Iterator[None]:
        """Временно отключает вывод таблиц (сообщения по-прежнему печатаются)."""
        previous = self._show_tables
        self._show_tables = False
        try:
            yield
        finally:
            self._show_tables = previous

    def render(self, records: Sequence[Record]) -> None:
        if not self._show_tables:
            return
        columns = ["ID", *self._schema.fields]
        rows: List[List[str]] = [
            [str(record.id), *(str(record.fields.get(name, "")) for name in self._schema.fields)]
            for record in records
        ]
        typer.echo(format_table(self._schema.title, columns, rows))
        if self._total_field:
            total = sum(int(record.fields.get(self._total_field) or 0) for record in records)
            typer.echo(f"Итого {self._total_field}: {total}")

    def show_message(self, text: str, kind: MessageKind | str) -> None:
        message = self._board.post(text, kind)
        typer.secho(message.text, fg=_COLORS[message.kind], err=message.kind is MessageKind.ERROR)

    def clear_inputs(self) -> None:
        self.inputs = {}

    def fill_inputs(self, record: Record) -> None:
        self.inputs = {"id": record.id, **record.fields}
        typer.echo(f"Редактирование записи #{record.id}")


__all__ = ["ConsoleRenderer", "format_table"]
