import pytest

import ui.base.base_table_view as table_mod
from ui.views.assignment_view import AssignmentView
from ui.views.client_table_view import ClientTableView

BASE_URL = "http://api.test/api"

CLIENTS = {
    "clients": [
        {"id": 1, "name": "ООО Ромашка", "email": "info@romashka.ru"},
        {"id": 2, "name": "Стройдвор", "email": "hello@dvor.ru"},
    ]
}


def _select(view, name):
    names = [c.name for c in view.visible_items()]
    view.table.selectRow(names.index(name))


@pytest.fixture()
def view(qapp, context, session, toasts):
    session.queue(200, CLIENTS)
    return ClientTableView(context=context)


def test_loads_rows_and_counts(view):
    assert view.proxy.rowCount() == 2
    assert view.state_label.isHidden()
    assert sorted(c.name for c in view.visible_items()) == ["ООО Ромашка", "Стройдвор"]


def test_search_filters_loaded_rows(view, session):
    view.search_box.set_text("ДВОР")

    assert [c.name for c in view.visible_items()] == ["Стройдвор"]
    assert len(session.calls) == 1

    view.search_box.set_text("нет такого")
    assert view.proxy.rowCount() == 0
    assert view.state_label.text() == "Ничего не найдено"


def test_empty_list_shows_placeholder(qapp, context, session, toasts):
    session.queue(200, [])

    view = ClientTableView(context=context)

    assert not view.state_label.isHidden()
    assert view.state_label.text() == "Нет записей"


def test_load_error_shows_message(qapp, context, session, toasts):
    session.queue(500, {"error": "База недоступна"})

    view = ClientTableView(context=context)

    assert view.proxy.rowCount() == 0
    assert "Не удалось загрузить" in view.state_label.text()
    assert toasts == [("error", "База недоступна")]


def test_delete_confirmed(view, session, toasts, monkeypatch):
    monkeypatch.setattr(table_mod, "confirm", lambda *a, **k: True)
    _select(view, "Стройдвор")
    session.queue(204).queue(200, {"clients": CLIENTS["clients"][:1]})

    view.delete_selected()

    assert session.calls[1]["method"] == "DELETE"
    assert session.calls[1]["url"] == f"{BASE_URL}/clients/2"
    assert view.proxy.rowCount() == 1
    assert toasts[-1] == ("success", "Удалено: Стройдвор")


def test_delete_declined(view, session, monkeypatch):
    monkeypatch.setattr(table_mod, "confirm", lambda *a, **k: False)
    _select(view, "ООО Ромашка")

    view.delete_selected()

    assert len(session.calls) == 1


def test_delete_error_keeps_rows(view, session, toasts, monkeypatch):
    monkeypatch.setattr(table_mod, "confirm", lambda *a, **k: True)
    _select(view, "ООО Ромашка")
    session.queue(409, {"message": "У клиента есть проекты"})

    view.delete_selected()

    assert view.proxy.rowCount() == 2
    assert toasts[-1] == ("error", "У клиента есть проекты")


def test_export_visible_rows(view, tmp_path, toasts):
    view.search_box.set_text("ромашка")
    path = tmp_path / "clients.csv"

    assert view.export_csv(str(path)) == 1

    text = path.read_text(encoding="utf-8-sig")
    assert text.splitlines()[0] == "Название;Email;Телефон;Адрес;Создан"
    assert "ООО Ромашка;info@romashka.ru" in text


def test_stale_record_shows_error_instead_of_form(view, session, toasts):
    session.queue(404, {"message": "Клиент не найден"})

    view.open_detail(view.visible_items()[0])

    assert toasts[-1] == ("error", "Клиент не найден")


def test_assignment_view_assigns_checked_employees(qapp, context, session, toasts):
    from PySide6.QtCore import Qt

    view = AssignmentView(context=context, autoload=False)
    session.queue(200, [{"id": 5, "name": "Дом"}])
    session.queue(200, [{"id": 10, "first_name": "Иван", "last_name": "Петров"},
                        {"id": 11, "first_name": "Анна", "last_name": "Смирнова"}])
    session.queue(200, [])
    view.load_data()

    assert view.assign() == 0
    assert toasts[-1][0] == "error"

    view.project_combo.setCurrentIndex(1)
    view.employee_list.item(0).setCheckState(Qt.Checked)
    view.employee_list.item(1).setCheckState(Qt.Checked)
    view.role_edit.setText("Каменщик")
    session.queue(201, {"id": 1}).queue(201, {"id": 2})
    session.queue(200, [{"id": 1, "project_name": "Дом", "first_name": "Иван"}])

    assert view.assign() == 2

    posted = [c["json"] for c in session.calls if c["method"] == "POST"]
    assert posted == [
        {"project_id": 5, "employee_id": 10, "role": "Каменщик"},
        {"project_id": 5, "employee_id": 11, "role": "Каменщик"},
    ]
    assert view.selected_employee_ids() == []
    assert view.table_view.proxy.rowCount() == 1
    assert toasts[-1] == ("success", "Назначено сотрудников: 2")


def test_search_box_shows_counts(view):
    assert view.search_box.count_label.text() == "Всего: 2"

    view.search_box.set_text("ромашка")

    assert view.search_box.count_label.text() == "Найдено: 1 из 2"
