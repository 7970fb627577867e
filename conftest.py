import json
import os
import sys
from pathlib import Path

import pytest
import requests

# ensure project root is on sys.path when running tests
sys.path.append(str(Path(__file__).resolve().parent))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from config import Settings
from core.app_context import AppContext
from database.db import db
from database.init import MEMORY_PATH, init_from_path
from infrastructure.api_client import ApiClient
from infrastructure.local_storage import LocalStorage

BASE_URL = "http://api.test/api"


class FakeResponse:
    """Минимальная замена ``requests.Response``."""

    def __init__(self, status_code=200, json_data=None, content=None):
        self.status_code = status_code
        if content is None:
            content = b"" if json_data is None else json.dumps(json_data).encode("utf-8")
        self.content = content

    def json(self):
        return json.loads(self.content.decode("utf-8"))


class FakeSession:
    """Записывает запросы и отдаёт заранее поставленные ответы по очереди."""

    def __init__(self):
        self.calls: list[dict] = []
        self.responses: list = []

    def queue(self, status_code=200, json_data=None, content=None):
        self.responses.append(FakeResponse(status_code, json_data, content))
        return self

    def queue_error(self, exc: Exception | None = None):
        self.responses.append(exc or requests.ConnectionError("connection refused"))
        return self

    def request(self, method, url, headers=None, data=None):
        self.calls.append(
            {
                "method": method,
                "url": url,
                "headers": dict(headers or {}),
                "data": data,
                "json": json.loads(data) if data else None,
            }
        )
        if not self.responses:
            raise AssertionError(f"Неожиданный запрос {method} {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def last(self) -> dict:
        return self.calls[-1]


@pytest.fixture()
def qapp():
    """QApplication для UI-тестов (offscreen)."""
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture(autouse=True)
def ui_settings_temp_path(tmp_path, monkeypatch):
    """Настройки интерфейса пишутся во временный каталог теста."""
    from ui import settings as ui_settings

    monkeypatch.setattr(ui_settings, "SETTINGS_PATH", tmp_path / "ui_settings.json")
    monkeypatch.setattr(ui_settings, "_CACHE", None)


@pytest.fixture()
def storage():
    database = init_from_path(MEMORY_PATH)
    try:
        yield LocalStorage()
    finally:
        database.close()
        db.initialize(None)


@pytest.fixture()
def session():
    return FakeSession()


@pytest.fixture()
def api_client(storage, session):
    return ApiClient(BASE_URL, storage, session=session)


@pytest.fixture()
def settings(tmp_path):
    return Settings(
        api_base_url=BASE_URL,
        storage_path=MEMORY_PATH,
        log_dir=str(tmp_path / "logs"),
    )


@pytest.fixture()
def context(settings, storage, api_client):
    return AppContext(settings).override(storage=storage, api_client=api_client)


@pytest.fixture()
def toasts(monkeypatch):
    """Собирает уведомления вместо показа всплывающих окон."""
    shown: list[tuple[str, str]] = []

    def fake_show_toast(message, level="info", parent=None, timeout_ms=0):
        shown.append((level, message))

    import ui.base.base_detail_view as detail_mod
    import ui.base.base_edit_form as form_mod
    import ui.base.base_table_view as table_mod
    import ui.forms.login_dialog as login_mod
    import ui.views.assignment_view as assignment_mod
    import ui.views.client_detail_view as client_detail_mod
    import ui.views.dashboard_tab as dashboard_mod
    import ui.views.project_detail_view as project_detail_mod

    for module in (
        detail_mod,
        form_mod,
        table_mod,
        login_mod,
        assignment_mod,
        client_detail_mod,
        dashboard_mod,
        project_detail_mod,
    ):
        monkeypatch.setattr(module, "show_toast", fake_show_toast)
    return shown
