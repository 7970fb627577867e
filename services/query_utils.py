"""Клиентская фильтрация списков по строке поиска."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any, TypeVar

T = TypeVar("T")

SearchField = str | Callable[[Any], Any]


def _field_value(record: Any, field: SearchField) -> Any:
    if callable(field):
        return field(record)
    if isinstance(record, dict):
        return record.get(field)
    return getattr(record, field, None)


def record_matches(record: Any, needle: str, fields: Sequence[SearchField]) -> bool:
    """True, если *needle* (уже в нижнем регистре) входит хотя бы в одно поле."""
    for field in fields:
        value = _field_value(record, field)
        if value is None:
            continue
        if needle in str(value).lower():
            return True
    return False


def filter_records(
    records: Iterable[T], text: str | None, fields: Sequence[SearchField]
) -> list[T]:
    """Оставить записи, где *text* — подстрока хотя бы одного из *fields*.

    Сравнение без учёта регистра, пробелы значимы; пустая строка поиска
    оставляет всё.
    """
    items = list(records)
    if not text:
        return items
    needle = text.lower()
    return [r for r in items if record_matches(r, needle, fields)]
