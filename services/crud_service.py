"""Универсальный сервис CRUD поверх REST-ресурса."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Generic, TypeVar

from infrastructure.api_client import ApiClient, RecordId
from services.query_utils import SearchField, filter_records

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResourceService(Generic[T]):
    """Список, карточка, создание, изменение и удаление записей ресурса.

    Ответы сервера приводятся к DTO класса ``dto_class``; конверты вида
    ``{"clients": [...]}`` разворачивает :class:`ApiClient`.
    """

    resource: str = ""
    collection_key: str | None = None
    record_key: str | None = None
    dto_class: Any = None
    search_fields: Sequence[SearchField] = ()
    entity_name: str = "запись"

    def __init__(self, api: ApiClient, *, resource: str | None = None) -> None:
        self.api = api
        if resource:
            self.resource = resource

    def _to_dto(self, data: Mapping[str, Any]) -> T:
        return self.dto_class.from_api(data)

    def list_all(self) -> list[T]:
        rows = self.api.get_all(self.resource, key=self.collection_key)
        return [self._to_dto(row) for row in rows if isinstance(row, Mapping)]

    def get(self, record_id: RecordId) -> T:
        data = self.api.get_by_id(self.resource, record_id, key=self.record_key)
        return self._to_dto(data)

    def create(self, payload: Mapping[str, Any]) -> T | None:
        data = self.api.create(self.resource, dict(payload), key=self.record_key)
        logger.info("➕ Создан(а) %s: %s", self.entity_name, data.get("id", "—"))
        return self._to_dto(data) if data.get("id") is not None else None

    def update(self, record_id: RecordId, payload: Mapping[str, Any]) -> T | None:
        data = self.api.update(
            self.resource, record_id, dict(payload), key=self.record_key
        )
        logger.info("✏️ Обновлен(а) %s id=%s", self.entity_name, record_id)
        return self._to_dto(data) if data.get("id") is not None else None

    def delete(self, record_id: RecordId) -> None:
        self.api.delete(self.resource, record_id)
        logger.info("🗑️ Удален(а) %s id=%s", self.entity_name, record_id)

    def search(self, records: Sequence[T], text: str | None) -> list[T]:
        return filter_records(records, text, self.search_fields)
