"""End-to-end tests for the typer application."""
from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from list_sync import cli
from list_sync.clients import JsonHttpClient, WeatherClient
from list_sync.services import SqliteStore

runner = CliRunner()


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        f"state_db: {tmp_path / 'state.sqlite'}\n"
        "api:\n  base_url: http://api.test\n"
        "weather:\n  api_key: secret\n",
        encoding="utf-8",
    )
    return path


def stored(tmp_path, key):
    store = SqliteStore(tmp_path / "state.sqlite")
    try:
        raw = store.get(key)
    finally:
        store.close()
    return None if raw is None else json.loads(raw)


def invoke(*args):
    return runner.invoke(cli.app, [str(arg) for arg in args])


def test_calories_add_update_delete_total(config_path, tmp_path):
    assert invoke("calories", "add", "-c", config_path, "name=Eggs", "calories=300").exit_code == 0
    assert invoke("calories", "add", "-c", config_path, "name=Toast", "calories=150").exit_code == 0
    assert stored(tmp_path, "items") == [
        {"id": 0, "name": "Eggs", "calories": 300},
        {"id": 1, "name": "Toast", "calories": 150},
    ]

    result = invoke("calories", "update", "-c", config_path, "1", "calories=120")
    assert result.exit_code == 0, result.output
    assert stored(tmp_path, "items")[1] == {"id": 1, "name": "Toast", "calories": 120}

    assert invoke("calories", "delete", "-c", config_path, "0").exit_code == 0
    result = invoke("calories", "total", "-c", config_path)
    assert result.exit_code == 0
    assert result.output.strip() == "120"


def test_add_with_empty_field_fails(config_path, tmp_path):
    result = invoke("calories", "add", "-c", config_path, "name=", "calories=100")

    assert result.exit_code == 1
    assert "Заполните все поля" in result.output
    assert stored(tmp_path, "items") is None


def test_malformed_field_argument(config_path):
    result = invoke("tasks", "add", "-c", config_path, "no-equals-sign")
    assert result.exit_code != 0


def test_update_unknown_record(config_path):
    result = invoke("books", "update", "-c", config_path, "5", "title=X")
    assert result.exit_code == 1
    assert "не найдена" in result.output


def test_tasks_filter_and_clear(config_path, tmp_path):
    invoke("tasks", "add", "-c", config_path, "task=Walk the dog")
    invoke("tasks", "add", "-c", config_path, "task=Buy milk")

    result = invoke("tasks", "filter", "-c", config_path, "DOG")
    assert "Walk the dog" in result.output
    assert "Buy milk" not in result.output

    result = invoke("tasks", "clear", "-c", config_path, "--yes")
    assert result.exit_code == 0
    assert stored(tmp_path, "tasks") is None


def test_seed_imports_yaml_records(config_path, tmp_path):
    source = tmp_path / "meals.yaml"
    source.write_text(
        "- {name: Steak Dinner, calories: 1200}\n- {name: Cookie, calories: 400}\n- {name: '', calories: 10}\n",
        encoding="utf-8",
    )

    result = invoke("calories", "seed", "-c", config_path, source)

    assert result.exit_code == 0, result.output
    assert "2 из 3" in result.output
    assert [item["name"] for item in stored(tmp_path, "items")] == ["Steak Dinner", "Cookie"]


def test_posts_commands_use_api(config_path, json_server, monkeypatch):
    json_server.resources["posts"] = [{"id": 1, "title": "Hello", "body": "World"}]
    monkeypatch.setattr(
        cli,
        "JsonHttpClient",
        lambda base_url, timeout: JsonHttpClient(base_url, session=json_server, timeout=timeout),
    )

    result = invoke("posts", "add", "-c", config_path, "title=Second", "body=Post")
    assert result.exit_code == 0, result.output
    assert "Second" in result.output

    result = invoke("posts", "update", "-c", config_path, "1", "body=Everyone")
    assert result.exit_code == 0, result.output
    assert json_server.resources["posts"][0] == {"id": 1, "title": "Hello", "body": "Everyone"}

    assert invoke("posts", "delete", "-c", config_path, "2").exit_code == 0
    assert [item["id"] for item in json_server.resources["posts"]] == [1]


def test_weather_set_location_and_show(config_path, tmp_path, fake_session, response_factory, monkeypatch):
    payload = {
        "name": "Boston",
        "weather": [{"main": "Rain"}],
        "main": {"temp": 50, "humidity": 90, "feels_like": 47},
        "wind": {"speed": 12, "gust": 20},
    }
    fake_session.queue(response_factory(200, payload))
    fake_session.queue(response_factory(200, payload))
    monkeypatch.setattr(cli, "WeatherClient", lambda options: WeatherClient(options, session=fake_session))

    result = invoke("weather", "set-location", "-c", config_path, "Boston", "MA")
    assert result.exit_code == 0, result.output
    assert "Rain" in result.output

    result = invoke("weather", "show", "-c", config_path)
    assert result.exit_code == 0
    assert fake_session.calls[-1]["params"]["q"] == "Boston,MA"


def test_profiles_browse_starts_over(config_path):
    result = runner.invoke(cli.app, ["profiles", "browse", "-c", str(config_path)], input="y\ny\ny\nn\n")

    assert result.exit_code == 0
    assert result.output.count("Name: John Doe") == 2
    assert "Name: William Johnson" in result.output


def test_seed_rejects_non_list_yaml(config_path, tmp_path):
    source = tmp_path / "seed.yaml"
    source.write_text("task: Buy milk\n", encoding="utf-8")

    result = invoke("tasks", "seed", "-c", config_path, source)

    assert result.exit_code == 2
    assert isinstance(result.exception, SystemExit)
    assert stored(tmp_path, "tasks") is None


def test_weather_storage_failure_is_reported(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(f"state_db: {tmp_path}\nweather:\n  api_key: secret\n", encoding="utf-8")

    result = invoke("weather", "show", "-c", path)

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
    assert "Не удалось прочитать или сохранить место" in result.output
