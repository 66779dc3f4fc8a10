"""HTTP-клиенты внешних сервисов."""

from .http import JsonHttpClient
from .weather import WeatherAPIError, WeatherClient, format_weather

__all__ = ["JsonHttpClient", "WeatherClient", "WeatherAPIError", "format_weather"]
