"""Настройки приложения из переменных окружения.

CART_LOG_LEVEL     - уровень логирования (по умолчанию WARNING)
CART_CATALOG_PATH  - JSON-каталог для витрины
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

DEFAULT_SETTINGS: dict[str, Any] = {
    "log_level": "WARNING",
    "catalog_path": "data/catalog.json",
}

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    log_level: str = DEFAULT_SETTINGS["log_level"]
    catalog_path: str = DEFAULT_SETTINGS["catalog_path"]


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ

    level = env.get("CART_LOG_LEVEL", DEFAULT_SETTINGS["log_level"]).upper()
    if not isinstance(logging.getLevelName(level), int):
        level = DEFAULT_SETTINGS["log_level"]

    return Settings(
        log_level=level,
        catalog_path=env.get("CART_CATALOG_PATH") or DEFAULT_SETTINGS["catalog_path"],
    )


def configure_logging(settings: Settings) -> None:
    """Вызывается только точкой входа (app/main.py)"""
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
