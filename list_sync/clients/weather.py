"""HTTP-клиент для OpenWeatherMap."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from list_sync.clients.http import JsonHttpClient
from list_sync.config import WeatherOptions
from list_sync.errors import HttpClientError


class WeatherAPIError(HttpClientError):
    """Ошибка API погоды."""


class WeatherClient:
    """Запрос текущей погоды по городу и штату."""

    def __init__(self, config: WeatherOptions, session: Optional[requests.Session] = None) -> None:
        self._config = config
        self._http = JsonHttpClient(config.base_url, session=session, timeout=config.timeout)

    def get_weather(self, city: str, state: str) -> Dict[str, Any]:
        if not self._config.api_key:
            raise WeatherAPIError("Необходимо задать weather.api_key в конфигурации")
        try:
            return self._http.get(
                "/weather",
                q=f"{city},{state}",
                units=self._config.units,
                appid=self._config.api_key,
            )
        except HttpClientError as exc:
            raise WeatherAPIError(str(exc), status_code=exc.status_code) from exc


def format_weather(payload: Dict[str, Any], units: str = "imperial") -> List[str]:
    """Строки для вывода погоды: место, описание, температура и ветер."""
    degree = "F" if units == "imperial" else "C"
    speed = "mph" if units == "imperial" else "m/s"
    conditions = (payload.get("weather") or [{}])[0]
    main = payload.get("main", {})
    wind = payload.get("wind", {})
    return [
        str(payload.get("name", "")),
        str(conditions.get("main", "")),
        f"{main.get('temp')}° {degree}",
        f"Relative Humidity: {main.get('humidity')}%",
        f"Feels Like: {main.get('feels_like')}°",
        f"Wind: {wind.get('speed')} {speed}",
        f"Gust: {wind.get('gust', 0)} {speed}",
    ]


__all__ = ["WeatherClient", "WeatherAPIError", "format_weather"]
