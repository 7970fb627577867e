"""Единое место для инициализации Peewee-Proxy `db`.
Вызывайте :func:`init_from_path` в начале entry-point'а.
"""

from __future__ import annotations

import logging
from pathlib import Path

from peewee import SqliteDatabase

from .db import db  # тот самый Proxy
from .models import ALL_MODELS

logger = logging.getLogger(__name__)

MEMORY_PATH = ":memory:"


def init_from_path(path: str | Path) -> SqliteDatabase:
    """Привязать ``db`` к SQLite-файлу *path* и создать таблицы."""

    path_str = str(path)
    if path_str != MEMORY_PATH:
        Path(path_str).expanduser().parent.mkdir(parents=True, exist_ok=True)
        path_str = str(Path(path_str).expanduser())

    database = SqliteDatabase(path_str, pragmas={"journal_mode": "wal"})
    db.initialize(database)
    database.connect(reuse_if_open=True)
    database.create_tables(ALL_MODELS, safe=True)
    logger.debug("Локальное хранилище: %s", path_str)
    return database
