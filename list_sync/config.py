"""Загрузка и валидация конфигурации приложения."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator


class ApiOptions(BaseModel):
    """Настройки подключения к REST API постов."""

    base_url: str = Field("http://localhost:3000", description="Базовый URL API, например http://localhost:3000")
    timeout: float = Field(30.0, description="Таймаут HTTP-запроса в секундах")


class WeatherOptions(BaseModel):
    """Настройки сервиса погоды."""

    api_key: str = Field("", description="Ключ OpenWeatherMap (appid)")
    base_url: str = Field("http://api.openweathermap.org/data/2.5", description="Базовый URL API погоды")
    units: str = Field("imperial", description="Система единиц: imperial или metric")
    default_city: str = Field("Fort Worth", description="Город по умолчанию")
    default_state: str = Field("Texas", description="Штат или регион по умолчанию")
    timeout: float = Field(30.0, description="Таймаут HTTP-запроса в секундах")


class UIOptions(BaseModel):
    """Параметры отображения."""

    message_timeout: float = Field(3.0, description="Через сколько секунд сообщение скрывается")


class AppConfig(BaseModel):
    """Корневая конфигурация приложения."""

    state_db: Path = Field(Path(".list_sync.sqlite"), description="Путь к SQLite-базе с сохранёнными списками")
    api: ApiOptions = Field(default_factory=ApiOptions)
    weather: WeatherOptions = Field(default_factory=WeatherOptions)
    ui: UIOptions = Field(default_factory=UIOptions)
    profiles_file: Optional[Path] = Field(None, description="YAML-файл с анкетами для скроллера")

    @field_validator("state_db", mode="before")
    @classmethod
    def _state_db_path(cls, value: Path | str) -> Path:
        return Path(value)

    @classmethod
    def load(cls, path: Path | str) -> "AppConfig":
        """Загружает конфигурацию из YAML-файла.

        Отсутствующий файл означает конфигурацию по умолчанию.
        """
        path = Path(path)
        if not path.exists():
            return cls()
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        try:
            return cls.model_validate(raw)
        except ValidationError as exc:
            raise ValueError(f"Конфигурация {path} некорректна: {exc}") from exc

    def ensure_runtime_dirs(self) -> None:
        """Создаёт недостающие служебные каталоги."""
        self.state_db.parent.mkdir(parents=True, exist_ok=True)


__all__ = ["AppConfig", "ApiOptions", "WeatherOptions", "UIOptions"]
