"""CLI-интерфейс виджетов."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, NoReturn, Optional

import typer
import yaml
from tqdm import tqdm

from list_sync.clients import JsonHttpClient, WeatherAPIError, WeatherClient, format_weather
from list_sync.config import AppConfig
from list_sync.errors import TransportError
from list_sync.models import ListSchema, Profile
from list_sync.services import (
    ListSyncController,
    LocationStore,
    ProfileIterator,
    RemoteSyncController,
    SqliteStore,
)
from list_sync.services.profiles import DEFAULT_PROFILES, format_profile, load_profiles
from list_sync.ui import ConsoleRenderer, MessageBoard
from list_sync.widgets import BOOKS, CALORIES, POSTS, TASKS

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

app = typer.Typer(help="Списки задач, калорий, книг и постов с сохранением состояния")

ConfigOption = typer.Option(Path("config.yaml"), "--config", "-c", help="Путь к YAML конфигурации")
VerbosityOption = typer.Option(0, "--verbose", "-v", count=True, help="Уровень логирования")


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format=LOG_FORMAT)


def parse_fields(pairs: List[str]) -> Dict[str, str]:
    """Разбирает аргументы вида key=value."""
    fields: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Ожидалось поле=значение, получено {pair!r}")
        fields[key.strip()] = value
    return fields


def build_local(
    config_path: Path, schema: ListSchema, *, show_tables: bool = True
) -> tuple[ListSyncController, ConsoleRenderer, SqliteStore]:
    config = AppConfig.load(config_path)
    config.ensure_runtime_dirs()
    store = SqliteStore(config.state_db)
    renderer = ConsoleRenderer(
        schema,
        board=MessageBoard(config.ui.message_timeout),
        total_field=schema.numeric[0] if schema.numeric else None,
        show_tables=show_tables,
    )
    controller = ListSyncController(schema, store, renderer)
    with renderer.muted():
        controller.load()
    return controller, renderer, store


def build_remote(config_path: Path, schema: ListSchema) -> tuple[RemoteSyncController, ConsoleRenderer]:
    config = AppConfig.load(config_path)
    client = JsonHttpClient(config.api.base_url, timeout=config.api.timeout)
    renderer = ConsoleRenderer(schema, board=MessageBoard(config.ui.message_timeout))
    controller = RemoteSyncController(schema, client, renderer)
    return controller, renderer


def _local_app(schema: ListSchema) -> typer.Typer:
    sub = typer.Typer(help=f"{schema.title}: поля {', '.join(schema.fields)}")

    @sub.command("list")
    def list_records(config_path: Path = ConfigOption, verbosity: int = VerbosityOption) -> None:
        """Выводит сохранённый список."""
        configure_logging(verbosity)
        controller, renderer, store = build_local(config_path, schema)
        try:
            renderer.render(controller.records)
        finally:
            store.close()

    @sub.command("add")
    def add(
        fields: List[str] = typer.Argument(..., help="Поля записи в виде key=value"),
        config_path: Path = ConfigOption,
        verbosity: int = VerbosityOption,
    ) -> None:
        """Добавляет запись."""
        configure_logging(verbosity)
        values = parse_fields(fields)
        controller, _, store = build_local(config_path, schema)
        try:
            if controller.add(values) is None:
                raise typer.Exit(code=1)
        finally:
            store.close()

    @sub.command("update")
    def update(
        record_id: int = typer.Argument(..., help="ID записи"),
        fields: List[str] = typer.Argument(..., help="Изменяемые поля в виде key=value"),
        config_path: Path = ConfigOption,
        verbosity: int = VerbosityOption,
    ) -> None:
        """Редактирует запись: выбирает её и перезаписывает указанные поля."""
        configure_logging(verbosity)
        values = parse_fields(fields)
        controller, renderer, store = build_local(config_path, schema)
        try:
            controller.set_current_selection(record_id)
            if controller.current_selection is None:
                typer.secho(f"Запись #{record_id} не найдена", fg=typer.colors.RED, err=True)
                raise typer.Exit(code=1)
            current = {key: value for key, value in renderer.inputs.items() if key != "id"}
            if controller.update(record_id, {**current, **values}) is None:
                raise typer.Exit(code=1)
        finally:
            store.close()

    @sub.command("delete")
    def delete(
        record_id: int = typer.Argument(..., help="ID записи"),
        config_path: Path = ConfigOption,
        verbosity: int = VerbosityOption,
    ) -> None:
        """Удаляет запись (отсутствующий ID не считается ошибкой)."""
        configure_logging(verbosity)
        controller, _, store = build_local(config_path, schema)
        try:
            controller.delete(record_id)
        finally:
            store.close()

    @sub.command("clear")
    def clear(
        yes: bool = typer.Option(False, "--yes", "-y", help="Не спрашивать подтверждение"),
        config_path: Path = ConfigOption,
        verbosity: int = VerbosityOption,
    ) -> None:
        """Удаляет весь список."""
        configure_logging(verbosity)
        if not yes and not typer.confirm("Вы уверены?"):
            raise typer.Abort()
        controller, _, store = build_local(config_path, schema)
        try:
            controller.clear()
        finally:
            store.close()

    @sub.command("filter")
    def filter_records(
        text: str = typer.Argument(..., help="Подстрока для поиска"),
        config_path: Path = ConfigOption,
        verbosity: int = VerbosityOption,
    ) -> None:
        """Показывает записи, содержащие подстроку."""
        configure_logging(verbosity)
        controller, renderer, store = build_local(config_path, schema)
        try:
            renderer.render(controller.filter(text))
        finally:
            store.close()

    @sub.command("seed")
    def seed(
        source: Path = typer.Argument(..., exists=True, dir_okay=False, help="YAML-список записей"),
        config_path: Path = ConfigOption,
        verbosity: int = VerbosityOption,
    ) -> None:
        """Массово добавляет записи из YAML-файла."""
        configure_logging(verbosity)
        items = yaml.safe_load(source.read_text(encoding="utf-8")) or []
        if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
            raise typer.BadParameter(f"Ожидался YAML-список записей в {source}")
        controller, renderer, store = build_local(config_path, schema, show_tables=False)
        added = 0
        try:
            for item in tqdm(items, desc=schema.title):
                if controller.add(item) is not None:
                    added += 1
        finally:
            store.close()
        typer.echo(f"Добавлено записей: {added} из {len(items)}")

    if schema.numeric:
        field_name = schema.numeric[0]

        @sub.command("total")
        def total(config_path: Path = ConfigOption, verbosity: int = VerbosityOption) -> None:
            """Сумма числового поля по всему списку."""
            configure_logging(verbosity)
            controller, _, store = build_local(config_path, schema)
            try:
                typer.echo(controller.total_of(field_name))
            finally:
                store.close()

    return sub


def _remote_app(schema: ListSchema) -> typer.Typer:
    sub = typer.Typer(help=f"{schema.title} на удалённом API: поля {', '.join(schema.fields)}")

    @sub.command("list")
    def list_records(config_path: Path = ConfigOption, verbosity: int = VerbosityOption) -> None:
        """Запрашивает список с сервера."""
        configure_logging(verbosity)
        controller, _ = build_remote(config_path, schema)
        controller.load()

    @sub.command("add")
    def add(
        fields: List[str] = typer.Argument(..., help="Поля записи в виде key=value"),
        config_path: Path = ConfigOption,
        verbosity: int = VerbosityOption,
    ) -> None:
        """Создаёт запись на сервере."""
        configure_logging(verbosity)
        controller, _ = build_remote(config_path, schema)
        if not controller.add(parse_fields(fields)):
            raise typer.Exit(code=1)

    @sub.command("update")
    def update(
        record_id: int = typer.Argument(..., help="ID записи"),
        fields: List[str] = typer.Argument(..., help="Изменяемые поля в виде key=value"),
        config_path: Path = ConfigOption,
        verbosity: int = VerbosityOption,
    ) -> None:
        """Заменяет запись на сервере."""
        configure_logging(verbosity)
        controller, renderer = build_remote(config_path, schema)
        with renderer.muted():
            controller.load()
        controller.set_current_selection(record_id)
        if controller.current_selection is None:
            typer.secho(f"Запись #{record_id} не найдена", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)
        current = {key: value for key, value in renderer.inputs.items() if key != "id"}
        if not controller.update(record_id, {**current, **parse_fields(fields)}):
            raise typer.Exit(code=1)

    @sub.command("delete")
    def delete(
        record_id: int = typer.Argument(..., help="ID записи"),
        config_path: Path = ConfigOption,
        verbosity: int = VerbosityOption,
    ) -> None:
        """Удаляет запись на сервере."""
        configure_logging(verbosity)
        controller, _ = build_remote(config_path, schema)
        if not controller.delete(record_id):
            raise typer.Exit(code=1)

    return sub


weather_app = typer.Typer(help="Текущая погода для сохранённого места")


@weather_app.command("show")
def weather_show(config_path: Path = ConfigOption, verbosity: int = VerbosityOption) -> None:
    """Показывает погоду для сохранённого города."""
    configure_logging(verbosity)
    config = AppConfig.load(config_path)
    config.ensure_runtime_dirs()
    try:
        store = SqliteStore(config.state_db)
        try:
            location = LocationStore(store, config.weather).get_location()
        finally:
            store.close()
    except TransportError as exc:
        _storage_failed(exc)
    _print_weather(config, location.city, location.state)


@weather_app.command("set-location")
def weather_set_location(
    city: str = typer.Argument(..., help="Город"),
    state: str = typer.Argument(..., help="Штат или регион"),
    config_path: Path = ConfigOption,
    verbosity: int = VerbosityOption,
) -> None:
    """Сохраняет новое место и показывает погоду для него."""
    configure_logging(verbosity)
    config = AppConfig.load(config_path)
    config.ensure_runtime_dirs()
    try:
        store = SqliteStore(config.state_db)
        try:
            location = LocationStore(store, config.weather).set_location(city, state)
        finally:
            store.close()
    except TransportError as exc:
        _storage_failed(exc)
    _print_weather(config, location.city, location.state)


def _storage_failed(exc: TransportError) -> NoReturn:
    logging.getLogger(__name__).error("%s", exc)
    typer.secho("Не удалось прочитать или сохранить место", fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1) from exc


def _print_weather(config: AppConfig, city: str, state: str) -> None:
    client = WeatherClient(config.weather)
    try:
        payload = client.get_weather(city, state)
    except WeatherAPIError as exc:
        logging.getLogger(__name__).error("%s", exc)
        typer.secho("Не удалось получить погоду", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc
    typer.echo("\n".join(format_weather(payload, config.weather.units)))


profiles_app = typer.Typer(help="Просмотр анкет по одной")


@profiles_app.command("browse")
def profiles_browse(config_path: Path = ConfigOption, verbosity: int = VerbosityOption) -> None:
    """Показывает анкеты по очереди; после последней начинает сначала."""
    configure_logging(verbosity)
    config = AppConfig.load(config_path)
    profiles = load_profiles(config.profiles_file) if config.profiles_file else DEFAULT_PROFILES
    iterator = ProfileIterator(profiles)
    while True:
        profile: Optional[Profile] = next(iterator, None)
        if profile is None:
            iterator.reset()
            profile = next(iterator, None)
            if profile is None:
                typer.echo("Анкет нет")
                return
        typer.echo("\n".join(format_profile(profile)))
        if not typer.confirm("Следующая анкета?", default=True):
            return


app.add_typer(_local_app(TASKS), name=TASKS.name)
app.add_typer(_local_app(CALORIES), name=CALORIES.name)
app.add_typer(_local_app(BOOKS), name=BOOKS.name)
app.add_typer(_remote_app(POSTS), name=POSTS.name)
app.add_typer(weather_app, name="weather")
app.add_typer(profiles_app, name="profiles")


if __name__ == "__main__":
    app()
