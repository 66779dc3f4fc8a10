"""Tests for RemoteSyncController against an in-memory json-server."""
from __future__ import annotations

import pytest
import requests

from list_sync.clients import JsonHttpClient
from list_sync.models import FormMode, MessageKind
from list_sync.services import RemoteSyncController
from list_sync.services.remote_sync import TRANSPORT_ERROR_TEXT
from list_sync.widgets import CALORIES, POSTS


@pytest.fixture
def posts(json_server, renderer):
    json_server.resources["posts"] = [
        {"id": 1, "title": "Post One", "body": "First body"},
        {"id": 2, "title": "Post Two", "body": "Second body"},
    ]
    client = JsonHttpClient("http://api.test", session=json_server)
    return RemoteSyncController(POSTS, client, renderer)


def methods(server):
    return [(call["method"], call["url"]) for call in server.calls]


def test_load_fetches_and_renders(posts, renderer):
    records = posts.load()

    assert [r.id for r in records] == [1, 2]
    assert renderer.renders[-1][0] == {"id": 1, "title": "Post One", "body": "First body"}


def test_add_posts_then_refetches(posts, json_server, renderer):
    assert posts.add({"title": "Post Three", "body": "Third body"}) is True

    assert methods(json_server) == [
        ("POST", "http://api.test/posts"),
        ("GET", "http://api.test/posts"),
    ]
    assert json_server.calls[0]["json"] == {"title": "Post Three", "body": "Third body"}
    assert [r.id for r in posts.records] == [1, 2, 3]
    assert renderer.messages == [(POSTS.added_text, MessageKind.SUCCESS)]
    assert renderer.cleared == 1


def test_add_validation_error_makes_no_request(posts, json_server, renderer):
    assert posts.add({"title": "Only title", "body": ""}) is False

    assert json_server.calls == []
    assert renderer.last_message == (POSTS.invalid_text, MessageKind.ERROR)


def test_update_requires_selection(posts, json_server):
    posts.load()
    json_server.calls.clear()

    assert posts.update(1, {"title": "Changed", "body": "Changed"}) is False
    assert json_server.calls == []


def test_update_puts_and_returns_to_adding(posts, json_server, renderer):
    posts.load()
    posts.set_current_selection(2)
    assert posts.form_mode is FormMode.EDITING
    assert renderer.filled[-1].fields == {"title": "Post Two", "body": "Second body"}
    json_server.calls.clear()

    assert posts.update(2, {"title": "Post Two v2", "body": "Edited"}) is True

    assert methods(json_server) == [
        ("PUT", "http://api.test/posts/2"),
        ("GET", "http://api.test/posts"),
    ]
    assert posts.get(2).fields == {"title": "Post Two v2", "body": "Edited"}
    assert posts.form_mode is FormMode.ADDING
    assert renderer.last_message == (POSTS.updated_text, MessageKind.SUCCESS)


def test_delete_removes_and_refetches(posts, json_server, renderer):
    posts.load()

    assert posts.delete(1) is True

    assert [r.id for r in posts.records] == [2]
    assert renderer.last_message == (POSTS.removed_text, MessageKind.SUCCESS)


def test_delete_absent_id_is_idempotent(posts, json_server, renderer):
    posts.load()

    assert posts.delete(99) is True

    assert [r.id for r in posts.records] == [1, 2]
    assert renderer.messages == []
    assert methods(json_server)[-1] == ("GET", "http://api.test/posts")


def test_update_of_record_gone_from_server_is_logged(posts, json_server, renderer, caplog):
    posts.load()
    posts.set_current_selection(1)
    json_server.resources["posts"] = []

    with caplog.at_level("WARNING"):
        assert posts.update(1, {"title": "Changed", "body": "Changed"}) is False

    assert "не найдена" in caplog.text
    assert renderer.messages == []
    assert posts.form_mode is FormMode.ADDING
    assert posts.records == []


def test_server_error_on_delete_is_reported(posts, json_server, renderer, response_factory):
    posts.load()
    json_server.request = lambda method, url, **kwargs: response_factory(500, {}, text="boom")

    assert posts.delete(1) is False

    assert renderer.last_message == (TRANSPORT_ERROR_TEXT, MessageKind.ERROR)


def test_network_failure_is_not_fatal(posts, json_server, renderer):
    posts.load()
    json_server.error = requests.ConnectionError("connection refused")

    assert posts.add({"title": "T", "body": "B"}) is False
    assert posts.load() == posts.records

    assert [r.id for r in posts.records] == [1, 2]
    assert renderer.last_message == (TRANSPORT_ERROR_TEXT, MessageKind.ERROR)


def test_local_schema_is_rejected(json_server, renderer):
    with pytest.raises(ValueError):
        RemoteSyncController(CALORIES, JsonHttpClient("http://api.test", session=json_server), renderer)
