from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

import pytest

from list_sync.models import MessageKind, Record
from list_sync.services import MemoryStore


class RecordingRenderer:
    """Renderer, запоминающий все вызовы."""

    def __init__(self) -> None:
        self.renders: List[List[Dict[str, Any]]] = []
        self.messages: List[Tuple[str, MessageKind]] = []
        self.cleared = 0
        self.filled: List[Record] = []

    def render(self, records) -> None:
        self.renders.append([record.to_dict() for record in records])

    def show_message(self, text: str, kind) -> None:
        self.messages.append((text, MessageKind(kind)))

    def clear_inputs(self) -> None:
        self.cleared += 1

    def fill_inputs(self, record: Record) -> None:
        self.filled.append(record)

    @property
    def last_message(self) -> Optional[Tuple[str, MessageKind]]:
        return self.messages[-1] if self.messages else None


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else repr(payload)

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    """Подмена requests.Session с заранее заданными ответами."""

    def __init__(self, responses: Optional[List[Any]] = None) -> None:
        self.headers: Dict[str, str] = {}
        self.calls: List[Dict[str, Any]] = []
        self._responses = list(responses or [])

    def queue(self, response: Any) -> None:
        self._responses.append(response)

    def request(self, method: str, url: str, **kwargs) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeJsonServer(FakeSession):
    """Минимальный аналог json-server: коллекции ресурсов в памяти."""

    def __init__(self) -> None:
        super().__init__()
        self.resources: Dict[str, List[Dict[str, Any]]] = {}
        self.error: Optional[Exception] = None

    def request(self, method: str, url: str, **kwargs) -> FakeResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.error is not None:
            raise self.error
        path = url.split("://", 1)[-1].split("/", 1)[1]
        parts = path.strip("/").split("/")
        items = self.resources.setdefault(parts[0], [])
        body = kwargs.get("json")
        if len(parts) == 1:
            if method == "GET":
                return FakeResponse(200, [dict(item) for item in items])
            if method == "POST":
                created = {"id": max((item["id"] for item in items), default=0) + 1, **body}
                items.append(created)
                return FakeResponse(201, dict(created))
            return FakeResponse(405, {})
        item_id = int(parts[1])
        match = next((item for item in items if item["id"] == item_id), None)
        if match is None:
            return FakeResponse(404, {}, text="Not Found")
        if method == "PUT":
            match.clear()
            match.update({"id": item_id, **body})
            return FakeResponse(200, dict(match))
        if method == "DELETE":
            items.remove(match)
            return FakeResponse(200, {})
        return FakeResponse(405, {})


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def json_server() -> FakeJsonServer:
    return FakeJsonServer()


@pytest.fixture
def response_factory():
    return FakeResponse
