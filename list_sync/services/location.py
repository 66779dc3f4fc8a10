"""Хранение выбранного места для прогноза погоды."""
from __future__ import annotations

from list_sync.config import WeatherOptions
from list_sync.models import Location
from list_sync.services.store import Store

CITY_KEY = "city"
STATE_KEY = "state"


class LocationStore:
    def __init__(self, store: Store, options: WeatherOptions) -> None:
        self._store = store
        self._options = options

    def get_location(self) -> Location:
        """Город и штат из хранилища; каждый ключ по отдельности падает на значение по умолчанию."""
        city = self._store.get(CITY_KEY) or self._options.default_city
        state = self._store.get(STATE_KEY) or self._options.default_state
        return Location(city=city, state=state)

    def set_location(self, city: str, state: str) -> Location:
        self._store.set(CITY_KEY, city)
        self._store.set(STATE_KEY, state)
        return Location(city=city, state=state)


__all__ = ["LocationStore"]
