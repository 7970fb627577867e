from __future__ import annotations

import logging
from datetime import datetime

from database.db import db
from database.models import StorageItem

logger = logging.getLogger(__name__)

TOKEN_KEY = "auth_token"
MANAGER_KEY = "manager"


class LocalStorage:
    """Постоянное хранилище строк по ключу (аналог ``localStorage``)."""

    def get_item(self, key: str) -> str | None:
        item = StorageItem.get_or_none(StorageItem.key == key)
        return item.value if item else None

    def set_item(self, key: str, value: str) -> None:
        with db.atomic():
            (
                StorageItem.insert(key=key, value=str(value), updated_at=datetime.now())
                .on_conflict(
                    conflict_target=[StorageItem.key],
                    update={
                        StorageItem.value: str(value),
                        StorageItem.updated_at: datetime.now(),
                    },
                )
                .execute()
            )
        logger.debug("💾 Сохранён ключ %s", key)

    def remove_item(self, key: str) -> None:
        deleted = StorageItem.delete().where(StorageItem.key == key).execute()
        if deleted:
            logger.debug("🗑️ Удалён ключ %s", key)

    def clear(self) -> None:
        StorageItem.delete().execute()

    def keys(self) -> list[str]:
        return [item.key for item in StorageItem.select(StorageItem.key)]
