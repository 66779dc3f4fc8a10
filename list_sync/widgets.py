"""Реестр виджетов-списков."""
from __future__ import annotations

from typing import Dict

from list_sync.models import ListSchema

TASKS = ListSchema(
    name="tasks",
    title="Задачи",
    fields=("task",),
    required=("task",),
    store_key="tasks",
    added_text="Задача добавлена",
    updated_text="Задача обновлена",
    removed_text="Задача удалена",
    invalid_text="Введите задачу",
)

CALORIES = ListSchema(
    name="calories",
    title="Приёмы пищи",
    fields=("name", "calories"),
    required=("name", "calories"),
    numeric=("calories",),
    store_key="items",
    added_text="Блюдо добавлено",
    updated_text="Блюдо обновлено",
    removed_text="Блюдо удалено",
)

BOOKS = ListSchema(
    name="books",
    title="Книги",
    fields=("title", "author", "isbn"),
    required=("title", "author", "isbn"),
    store_key="books",
    added_text="Книга добавлена",
    updated_text="Книга обновлена",
    removed_text="Книга удалена",
)

POSTS = ListSchema(
    name="posts",
    title="Посты",
    fields=("title", "body"),
    required=("title", "body"),
    resource="/posts",
    added_text="Пост добавлен",
    updated_text="Пост обновлён",
    removed_text="Пост удалён",
    invalid_text="У поста должны быть заголовок и текст",
)

WIDGETS: Dict[str, ListSchema] = {schema.name: schema for schema in (TASKS, CALORIES, BOOKS, POSTS)}

LOCAL_WIDGETS: Dict[str, ListSchema] = {name: schema for name, schema in WIDGETS.items() if not schema.is_remote}


__all__ = ["TASKS", "CALORIES", "BOOKS", "POSTS", "WIDGETS", "LOCAL_WIDGETS"]
