"""Простая конфигурация логирования для приложения бэк-офиса."""

import logging
import re
from pathlib import Path
from logging.handlers import RotatingFileHandler

from config import Settings, get_settings

_BEARER_RE = re.compile(r"(Bearer\s+)[^\s'\"]+", re.IGNORECASE)


class PeeweeFilter(logging.Filter):
    """Фильтрует SELECT-запросы peewee к локальному хранилищу."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401 - short doc
        """True, если SQL-запрос не начинается с ``SELECT``."""
        if hasattr(record, "sql"):
            msg = record.sql
        else:
            msg = record.getMessage()
        return not str(msg).lstrip().startswith("SELECT")


class TokenMaskFilter(logging.Filter):
    """Заменяет bearer-токены в сообщениях на ``***``."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        masked = _BEARER_RE.sub(r"\1***", message)
        if masked != message:
            record.msg = masked
            record.args = None
        return True


def setup_logging(settings: Settings | None = None) -> None:
    """Настраивает вывод логов в консоль и файл ``isofos.log``."""
    settings = settings or get_settings()
    logs_dir = Path(settings.log_dir).expanduser()
    logs_dir.mkdir(parents=True, exist_ok=True)

    level_name = settings.log_level
    level = getattr(logging, level_name, logging.INFO)
    if settings.detailed_logging:
        level = logging.DEBUG

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s │ %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    token_filter = TokenMaskFilter()

    file_h = RotatingFileHandler(
        logs_dir / "isofos.log",
        maxBytes=2_000_000,  # 2 MB
        backupCount=3,
        encoding="utf-8",
    )
    file_h.setFormatter(fmt)
    file_h.setLevel(level)
    file_h.addFilter(token_filter)

    console_h = logging.StreamHandler()
    console_h.setFormatter(fmt)
    console_h.setLevel(level)
    console_h.addFilter(token_filter)

    logging.basicConfig(
        level=level,
        handlers=[file_h, console_h],
        force=True,
    )

    logging.getLogger().setLevel(level)

    # urllib3 слишком многословен на DEBUG
    logging.getLogger("urllib3").setLevel(max(level, logging.INFO))

    peewee_logger = logging.getLogger("peewee")
    if not settings.detailed_logging:
        peewee_logger.addFilter(PeeweeFilter())
