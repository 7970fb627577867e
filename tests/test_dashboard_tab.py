from datetime import datetime

import pytest

from infrastructure.api_client import HttpError
from services.dto import InventoryItemDTO, ProjectDTO
from ui.main_window import MainWindow, apply_main_window_settings
from ui.views.dashboard_tab import LOAD_ERROR_TEXT, DashboardTab


class StubReports:
    def __init__(self, error=None):
        self.error = error

    def _value(self, value):
        if self.error:
            raise self.error
        return value

    def total_projects(self):
        return self._value(2)

    def total_clients(self):
        return self._value(7)

    def total_employees(self):
        return self._value(3)

    def total_suppliers(self):
        return self._value(1)


class StubList:
    def __init__(self, items):
        self.items = items

    def list_all(self):
        return list(self.items)


@pytest.fixture()
def dashboard_context(context):
    projects = [
        ProjectDTO(id=1, name="Дом", status="in_progress", created_at=datetime(2024, 1, 5)),
        ProjectDTO(id=2, name="Офис", status="completed", client_name="Иванов",
                   created_at=datetime(2024, 2, 5)),
    ]
    return context.override(
        reports=StubReports(),
        inventory=StubList([InventoryItemDTO(id=1, quantity=1)]),
        projects=StubList(projects),
    )


def test_dashboard_shows_counters(qapp, dashboard_context, toasts):
    tab = DashboardTab(context=dashboard_context)

    assert tab.cards["total_clients"].value_text() == "7"
    assert tab.cards["active_projects"].value_text() == "1"
    assert tab.cards["low_stock_items"].value_text() == "1"
    assert tab.recent_list.count() == 2
    assert tab.recent_list.item(0).text().startswith("Офис — Завершён — Иванов")
    assert toasts == []


def test_dashboard_error_shows_toast(qapp, dashboard_context, toasts):
    ctx = dashboard_context.override(reports=StubReports(HttpError("Ошибка", 500)))

    tab = DashboardTab(context=ctx)

    assert tab.data is None
    assert toasts == [("error", LOAD_ERROR_TEXT)]


def test_main_window_loads_first_tab_and_logs_out(qapp, dashboard_context, session, toasts):
    auth = dashboard_context.auth
    auth.restore()
    session.queue(200, {"token": "tok", "manager": {"id": 1, "email": "anna@isofos.test"}})
    auth.login("anna@isofos.test", "secret")
    window = MainWindow(context=dashboard_context)

    assert window.tab_widget.count() == 10
    assert window.dashboard_tab.data is not None
    assert not window.logged_out

    auth.logout()

    assert window.logged_out


def test_apply_main_window_settings(qapp, dashboard_context, session, toasts):
    window = MainWindow(context=dashboard_context)
    session.queue(200, {"clients": []})

    apply_main_window_settings({"last_tab": "99"}, window, window.tab_widget)
    assert window.tab_widget.currentIndex() == 0

    apply_main_window_settings({"last_tab": "2", "geometry": "%%%"}, window, window.tab_widget)
    assert window.tab_widget.currentIndex() == 2
