# === FILE: sitemap_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации SitemapScout.
Используется Pydantic для описания схемы и проверки данных.
Конфиг передаётся явно в Transport, SitemapResolver и CrawlScheduler.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Literal, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_USER_AGENTS: List[str] = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64)",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7)",
    "Mozilla/5.0 (X11; Linux x86_64)",
]
DEFAULT_ACCEPT = "application/xml,text/xml,text/html,*/*"


class CrawlerConfig(BaseModel):
    """Конфигурация одного запуска: сеть, вежливые задержки, пул воркеров."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    timeout: float = Field(30.0, gt=0, description="Таймаут на один HTTP-запрос (секунд).")
    user_agents: List[str] = Field(
        default_factory=lambda: list(DEFAULT_USER_AGENTS),
        description="Набор User-Agent для ротации.",
    )
    accept: str = Field(DEFAULT_ACCEPT, min_length=1, description="Заголовок Accept.")
    workers: int = Field(5, ge=1, description="Число воркеров в пуле.")
    child_delay: float = Field(1.0, ge=0, description="Пауза перед каждым дочерним sitemap.")
    page_delay: float = Field(0.3, ge=0, description="Пауза воркера после каждой страницы.")
    delay_jitter: float = Field(0.0, ge=0, description="Случайная добавка к паузам.")
    delay_mode: Literal["fixed", "min_interval"] = Field(
        "fixed",
        description="fixed: пауза на каждом вызове; min_interval: общий минимальный интервал между запросами.",
    )
    max_sitemap_depth: int = Field(5, ge=0, description="Максимальная вложенность sitemap index.")
    queue_size: int = Field(100, ge=1, description="Размер буфера очереди результатов.")

    @field_validator("user_agents")
    def _check_user_agents(cls, v: List[str]) -> List[str]:
        agents = [ua.strip() for ua in v]
        if not agents:
            raise ValueError("user_agents must not be empty")
        if any(not ua for ua in agents):
            raise ValueError("user_agents must not contain blank entries")
        return agents


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


def load_config(path: Union[str, Path, None] = None) -> CrawlerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект CrawlerConfig.
    Без пути возвращает конфиг по умолчанию; отсутствующий файл — FileNotFoundError.
    """
    if path is None:
        return CrawlerConfig()

    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    try:
        return CrawlerConfig(**data)
    except ValidationError:
        raise


__all__ = ["CrawlerConfig", "load_config", "DEFAULT_USER_AGENTS", "DEFAULT_ACCEPT"]
