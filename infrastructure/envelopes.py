"""Приведение ответов API к единой форме.

Сервер отдаёт коллекции по-разному: голым массивом, объектом
``{"projects": [...]}`` или ``{"data": [...]}``. Всё это разворачивается
здесь, чтобы сервисы и экраны видели только списки и словари.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

SINGLE_RECORD_KEYS = ("assignment",)

EnvelopeKey = str | Sequence[str] | None


def _keys(key: EnvelopeKey) -> tuple[str, ...]:
    if key is None:
        return ()
    if isinstance(key, str):
        return (key,)
    return tuple(key)


def unwrap_collection(payload: Any, key: EnvelopeKey = None) -> list[dict]:
    """Вернуть список записей из ответа любой из известных форм."""

    if isinstance(payload, list):
        return payload
    if not isinstance(payload, dict):
        return []

    for name in _keys(key):
        if name not in payload:
            continue
        inner = payload[name]
        if isinstance(inner, list):
            return inner
        if isinstance(inner, dict):
            return [inner]

    data = payload.get("data")
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        return unwrap_collection(data, key)

    for single_key in SINGLE_RECORD_KEYS:
        inner = payload.get(single_key)
        if isinstance(inner, dict):
            return [inner]
    return []


def unwrap_record(payload: Any, key: EnvelopeKey = None) -> dict:
    """Вернуть одну запись из ``{key: {...}}``, ``{data: {...}}`` или самого объекта."""

    if not isinstance(payload, dict):
        return {}
    for name in _keys(key):
        if isinstance(payload.get(name), dict):
            return payload[name]
    data = payload.get("data")
    if isinstance(data, dict):
        return unwrap_record(data, key)
    return payload


def unwrap_total(payload: Any) -> int:
    """Достать счётчик из ответов ``/reports/total-*``."""

    if isinstance(payload, bool):
        return 0
    if isinstance(payload, (int, float)):
        return int(payload)
    if isinstance(payload, str):
        try:
            return int(float(payload))
        except ValueError:
            return 0
    if isinstance(payload, dict):
        for name in ("total", "count"):
            if name in payload and payload[name] is not None:
                return unwrap_total(payload[name])
        if "data" in payload:
            return unwrap_total(payload["data"])
    return 0
