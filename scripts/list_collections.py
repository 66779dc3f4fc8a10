"""Утилита для вывода всех сохранённых списков."""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Iterable, List

from list_sync.config import AppConfig
from list_sync.models import ListSchema
from list_sync.services import RecordMapper, SqliteStore
from list_sync.ui import format_table
from list_sync.widgets import LOCAL_WIDGETS


def collect_rows(store: SqliteStore, schema: ListSchema) -> List[List[str]]:
    records = RecordMapper(schema).loads(store.get(schema.store_key))
    return [[str(record.id), *(str(record.fields.get(name, "")) for name in schema.fields)] for record in records]


def render_all(store: SqliteStore, schemas: Iterable[ListSchema]) -> str:
    outputs = []
    for schema in schemas:
        rows = collect_rows(store, schema)
        outputs.append(format_table(schema.title, ["ID", *schema.fields], rows))
    return "\n\n".join(outputs)


def main() -> None:
    parser = argparse.ArgumentParser(description="Выводит сохранённые списки задач, калорий и книг")
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("config.yaml"),
        help="Путь к YAML конфигурации",
    )
    parser.add_argument(
        "--widget",
        choices=[*LOCAL_WIDGETS, "all"],
        default="all",
        help="Какой список вывести",
    )
    args = parser.parse_args()

    config = AppConfig.load(args.config)
    schemas = LOCAL_WIDGETS.values() if args.widget == "all" else [LOCAL_WIDGETS[args.widget]]
    store = SqliteStore(config.state_db)
    try:
        print(render_all(store, schemas))
    finally:
        store.close()


if __name__ == "__main__":
    main()
