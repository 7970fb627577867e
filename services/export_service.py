import csv
import datetime
import logging
from collections.abc import Callable, Sequence
from decimal import Decimal
from typing import Any

logger = logging.getLogger(__name__)

Column = tuple[str, str | Callable[[Any], Any]]


def _cell_value(record: Any, accessor: str | Callable[[Any], Any]) -> Any:
    if callable(accessor):
        value = accessor(record)
    elif isinstance(record, dict):
        value = record.get(accessor)
    else:
        value = getattr(record, accessor, None)
    if value is None:
        return ""
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.strftime("%d.%m.%Y")
    if isinstance(value, Decimal):
        return f"{value:.2f}"
    return value


def export_records_to_csv(path, records: Sequence[Any], columns: Sequence[Column]) -> int:
    """Export records to a ``;``-separated CSV file, returning the row count."""
    headers = [header for header, _ in columns]
    logger.debug("Заголовки CSV: %s", headers)
    logger.debug("Количество записей для экспорта: %d", len(records))
    with open(path, "w", newline="", encoding="utf-8-sig") as f:
        writer = csv.writer(f, delimiter=";")
        writer.writerow(headers)
        for record in records:
            writer.writerow([_cell_value(record, accessor) for _, accessor in columns])
    logger.info("📤 Экспортировано %d записей в %s", len(records), path)
    return len(records)
