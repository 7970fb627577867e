import logging

import pytest

from config import Settings
from utils.logging_config import PeeweeFilter, TokenMaskFilter, setup_logging


def _record(msg, args=None):
    return logging.LogRecord("test", logging.INFO, __file__, 1, msg, args, None)


def test_peewee_filter_drops_select():
    f = PeeweeFilter()
    assert not f.filter(_record("SELECT * FROM storageitem"))
    assert f.filter(_record("INSERT INTO storageitem VALUES (?)"))


def test_peewee_filter_uses_sql_attribute():
    record = _record("что-то")
    record.sql = "  SELECT 1"
    assert not PeeweeFilter().filter(record)


def test_token_mask_in_message():
    record = _record("Authorization: Bearer abc.def.ghi")

    assert TokenMaskFilter().filter(record)
    assert record.getMessage() == "Authorization: Bearer ***"


def test_token_mask_in_args():
    record = _record("headers=%s", ({"Authorization": "Bearer secret-token"},))

    TokenMaskFilter().filter(record)

    assert "secret-token" not in record.getMessage()
    assert "Bearer ***" in record.getMessage()


def test_plain_message_untouched():
    record = _record("Загружено %d записей", (3,))

    TokenMaskFilter().filter(record)

    assert record.args == (3,)
    assert record.getMessage() == "Загружено 3 записей"


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("peewee").filters.clear()


def test_setup_logging_writes_file(tmp_path, restore_root_logger):
    settings = Settings(log_dir=str(tmp_path / "logs"), log_level="WARNING")

    setup_logging(settings)
    logging.getLogger("isofos.test").warning("Bearer top-secret")
    for handler in logging.getLogger().handlers:
        handler.flush()

    text = (tmp_path / "logs" / "isofos.log").read_text(encoding="utf-8")
    assert "Bearer ***" in text
    assert "top-secret" not in text
    assert logging.getLogger().level == logging.WARNING
    assert any(isinstance(f, PeeweeFilter) for f in logging.getLogger("peewee").filters)


def test_detailed_logging_forces_debug(tmp_path, restore_root_logger):
    setup_logging(Settings(log_dir=str(tmp_path), detailed_logging=True))

    assert logging.getLogger().level == logging.DEBUG
