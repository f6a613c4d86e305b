# === FILE: a11y_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации A11yScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import logging
import os
from pathlib import Path
from typing import Any, Literal, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from a11y_scout.crawler.models import CrawlOptions

__all__ = ["AuditConfig", "load_config", "DEFAULT_CONFIG_PATH"]

logger = logging.getLogger("A11yScout")

WaitUntil = Literal["load", "domcontentloaded", "networkidle", "commit"]


class AuditConfig(BaseModel):
    """Конфигурация запуска: обход сайта, HTTP-клиент и браузер."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    crawl: CrawlOptions = Field(default_factory=CrawlOptions, description="Границы обхода сайта.")
    timeout: int = Field(30000, gt=0, description="Таймаут аудита одной страницы (мс).")
    user_agent: str = Field("A11yScoutBot/1.0", min_length=1, description="Заголовок User-Agent.")
    request_timeout: float = Field(10.0, gt=0, description="Таймаут HTTP-запроса краулера (секунд).")
    retry_times: int = Field(0, ge=0, description="Число повторных попыток при 5xx/429.")
    headless: bool = Field(True, description="Запускать браузер без окна.")
    wait_until: WaitUntil = Field(
        "domcontentloaded", description="Событие загрузки, после которого запускается аудит."
    )

    def with_overrides(self, **overrides: Any) -> AuditConfig:
        """Возвращает копию с применёнными значениями, отличными от ``None``.

        Ключи ``max_pages``, ``max_depth``, ``delay_ms`` и ``same_origin``
        относятся к вложенной секции ``crawl``.
        """
        crawl_fields = set(CrawlOptions.model_fields)
        crawl_updates = {k: v for k, v in overrides.items() if k in crawl_fields and v is not None}
        top_updates = {k: v for k, v in overrides.items() if k not in crawl_fields and v is not None}
        data = self.model_dump()
        data.update(top_updates)
        data["crawl"] = {**data["crawl"], **crawl_updates}
        return AuditConfig(**data)


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


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


def load_config(path: Union[str, Path, None] = None) -> AuditConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект AuditConfig.

    Без ``path`` используется ``configs/default.yaml``, а если его нет, то
    значения по умолчанию. Явно указанный, но отсутствующий файл даёт
    FileNotFoundError.
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            logger.debug("No %s, using built-in defaults", DEFAULT_CONFIG_PATH)
            return AuditConfig()
        path_obj = DEFAULT_CONFIG_PATH
    else:
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
        return AuditConfig(**data)
    except ValidationError:
        logger.error("Invalid configuration in %s", path_obj)
        raise
