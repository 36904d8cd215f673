# === FILE: text_crawler/config.py ===
"""
Модуль для загрузки и валидации конфигурации краулера TextCrawler.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

MIB = 1024 * 1024


class CrawlerConfig(BaseModel):
    """Конфигурация для одного запуска обхода."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    seed_url: HttpUrl = Field(..., description="Стартовый URL обхода.")
    max_cache_mb: float = Field(30.0, gt=0, description="Порог буфера текста (МиБ) до сброса в файл.")
    output_dir: Path = Field(Path("."), description="Каталог для выходных файлов.")
    concurrency: int = Field(8, ge=1, le=64, description="Число одновременных загрузок.")
    timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    user_agent: str = Field("TextCrawlerBot/1.0", min_length=1, description="Заголовок User-Agent.")
    retry_times: int = Field(2, ge=0, description="Число повторных попыток при 5xx/429.")
    retry_backoff: float = Field(0.5, ge=0, description="Базовая задержка между попытками (секунд).")
    same_host_only: bool = Field(False, description="Переходить только по ссылкам исходного хоста.")
    max_pages: Optional[int] = Field(None, ge=1, description="Лимит по числу загрузок.")
    max_depth: Optional[int] = Field(None, ge=0, description="Лимит глубины обхода ссылок.")
    crawl_timeout: Optional[float] = Field(None, gt=0, description="Таймаут всего обхода (секунд).")

    @field_validator("output_dir", mode="before")
    def _expand_output_dir(cls, v: Any) -> Any:
        if isinstance(v, (str, Path)):
            return Path(v).expanduser()
        return v

    @property
    def max_cache_bytes(self) -> int:
        return int(self.max_cache_mb * MIB)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def read_config_file(path: Union[str, Path]) -> dict[str, Any]:
    """Читает YAML или JSON и возвращает сырой словарь настроек (без валидации)."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")


def load_config(path: Union[str, Path]) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.
    При отсутствии файла бросает FileNotFoundError.
    """
    return CrawlerConfig(**read_config_file(path))


def build_config(path: Union[str, Path, None] = None, **overrides: Any) -> CrawlerConfig:
    """
    Собирает конфигурацию: значения из файла (если задан), поверх них
    переданные явно параметры. ``None`` в overrides означает «не задано».
    """
    data: dict[str, Any] = read_config_file(path) if path is not None else {}
    data.update({key: value for key, value in overrides.items() if value is not None})
    return CrawlerConfig(**data)
