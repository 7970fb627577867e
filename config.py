from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from appdirs import user_data_dir, user_log_dir
from dotenv import load_dotenv

APP_NAME = "isofos"
DEFAULT_API_BASE_URL = "http://localhost:3001/api"
AUTH_ROUTE_VARIANTS = {"auth", "managers"}


def _default_storage_path() -> str:
    return str(Path(user_data_dir(APP_NAME)) / "storage.sqlite3")


@dataclass
class Settings:
    api_base_url: str = DEFAULT_API_BASE_URL
    auth_routes: str = "auth"
    warehouse_endpoint: str = "warehouse-racks"
    storage_path: str = field(default_factory=_default_storage_path)
    log_dir: str = field(default_factory=lambda: user_log_dir(APP_NAME))
    log_level: str = "INFO"
    detailed_logging: bool = False
    low_stock_threshold: int = 10
    recent_projects_limit: int = 5


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@lru_cache()
def get_settings() -> Settings:
    dotenv_path = Path(__file__).resolve().parent / ".env"
    load_dotenv(dotenv_path)

    auth_routes = os.getenv("AUTH_ROUTES", "auth").strip().lower()
    if auth_routes not in AUTH_ROUTE_VARIANTS:
        auth_routes = "auth"

    warehouse_endpoint = (
        os.getenv("WAREHOUSE_ENDPOINT", "").strip().strip("/") or "warehouse-racks"
    )

    return Settings(
        api_base_url=(os.getenv("API_BASE_URL") or DEFAULT_API_BASE_URL).rstrip("/"),
        auth_routes=auth_routes,
        warehouse_endpoint=warehouse_endpoint,
        storage_path=os.getenv("STORAGE_PATH") or _default_storage_path(),
        log_dir=os.getenv("LOG_DIR") or user_log_dir(APP_NAME),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        detailed_logging=os.getenv("DETAILED_LOGGING", "0").lower()
        in {"1", "true", "yes", "on"},
        low_stock_threshold=_int_env("LOW_STOCK_THRESHOLD", 10),
        recent_projects_limit=_int_env("RECENT_PROJECTS_LIMIT", 5),
    )
