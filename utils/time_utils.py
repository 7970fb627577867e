from datetime import date, datetime, tzinfo

from dateutil import parser as date_parser

TIME_FORMAT = "%d.%m.%Y %H:%M"
DATE_FORMAT = "%d.%m.%Y"


def now_str(tz: tzinfo | None = None) -> str:
    """Return current timestamp as string in the common format."""
    return datetime.now(tz).strftime(TIME_FORMAT)


def parse_datetime(value) -> datetime | None:
    """Разобрать дату/время из ответа API (ISO-строка, date или datetime)."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return date_parser.isoparse(str(value))
    except (ValueError, OverflowError):
        try:
            return date_parser.parse(str(value))
        except (ValueError, OverflowError):
            return None


def parse_date(value) -> date | None:
    parsed = parse_datetime(value)
    return parsed.date() if parsed else None


def format_date(value) -> str:
    """Дата в формате ``dd.mm.yyyy`` или ``—``."""
    if isinstance(value, (str, type(None))):
        value = parse_datetime(value)
    if value is None:
        return "—"
    return value.strftime(DATE_FORMAT)


def sort_key(value) -> float:
    """Ключ сортировки по дате; пустые даты уходят в конец при reverse=True."""
    parsed = parse_datetime(value)
    if parsed is None:
        return float("-inf")
    return parsed.timestamp()
