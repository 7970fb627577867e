"""Настройки интерфейса: последний email, геометрия окон, открытая вкладка.

Всё хранится одним JSON-файлом в каталоге настроек пользователя и
кешируется в памяти после первого чтения.
"""

import copy
import json
import logging
from pathlib import Path

from appdirs import user_config_dir

from config import APP_NAME

logger = logging.getLogger(__name__)

SETTINGS_PATH = Path(user_config_dir(APP_NAME)) / "ui_settings.json"
_CACHE: dict | None = None


def _read_file() -> dict:
    if not SETTINGS_PATH.exists():
        return {}
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("⚠️ Настройки интерфейса повреждены, используются пустые: %s", e)
        return {}
    return data if isinstance(data, dict) else {}


def _load_data() -> dict:
    global _CACHE
    if _CACHE is None:
        _CACHE = _read_file()
    return copy.deepcopy(_CACHE)


def _save_data(data: dict) -> None:
    global _CACHE
    _CACHE = copy.deepcopy(data)
    try:
        SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
        SETTINGS_PATH.write_text(
            json.dumps(_CACHE, ensure_ascii=False, indent=2), encoding="utf-8"
        )
    except OSError as e:
        logger.error("Не удалось сохранить настройки интерфейса: %s", e)


def _section(section: str, name: str | None = None) -> dict:
    data = _load_data().get(section, {})
    if name is None:
        return data
    return data.get(name, {})


def _store(section: str, value: dict, name: str | None = None) -> None:
    data = _load_data()
    if name is None:
        data[section] = value
    else:
        data.setdefault(section, {})[name] = value
    _save_data(data)


def get_app_settings() -> dict:
    """Общие настройки приложения (например, ``last_email``)."""
    return _section("app")


def set_app_settings(settings: dict) -> None:
    _store("app", settings)


def get_window_settings(name: str) -> dict:
    """Сохранённые геометрия и состояние окна *name*."""
    return _section("windows", name)


def set_window_settings(name: str, settings: dict) -> None:
    _store("windows", settings, name)
