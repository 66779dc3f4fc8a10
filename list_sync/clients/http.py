"""Минимальный JSON-клиент для REST API."""
from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from list_sync.errors import HttpClientError

LOGGER = logging.getLogger(__name__)

DELETED_TEXT = "Ресурс удалён"


class JsonHttpClient:
    """Обёртка над requests с методами get/post/put/delete."""

    def __init__(
        self,
        base_url: str = "",
        session: Optional[requests.Session] = None,
        timeout: float = 30,
    ) -> None:
        self._base_url = base_url
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "User-Agent": "list-sync/0.1",
                "Accept": "application/json",
            }
        )

    @property
    def base_url(self) -> str:
        return self._base_url.rstrip("/")

    def _url(self, endpoint: str) -> str:
        if endpoint.startswith(("http://", "https://")) or not self.base_url:
            return endpoint
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def _request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        url = self._url(endpoint)
        headers = kwargs.pop("headers", {})
        headers.setdefault("Content-Type", "application/json")
        LOGGER.debug("%s %s", method, url)
        try:
            response = self._session.request(method, url, headers=headers, timeout=self._timeout, **kwargs)
        except requests.RequestException as exc:
            raise HttpClientError(f"Сбой запроса {method} {url}: {exc}") from exc
        if response.status_code >= 400:
            raise HttpClientError(
                f"Ошибка API {response.status_code} при запросе {method} {url}: {response.text}",
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def _json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise HttpClientError(f"Ответ не является JSON: {response.text[:200]}") from exc

    def get(self, endpoint: str, **params: Any) -> Any:
        response = self._request("GET", endpoint, params=params or None)
        return self._json(response)

    def post(self, endpoint: str, data: Any) -> Any:
        response = self._request("POST", endpoint, json=data)
        return self._json(response)

    def put(self, endpoint: str, data: Any) -> Any:
        response = self._request("PUT", endpoint, json=data)
        return self._json(response)

    def delete(self, endpoint: str) -> str:
        self._request("DELETE", endpoint)
        return DELETED_TEXT


__all__ = ["JsonHttpClient", "DELETED_TEXT"]
