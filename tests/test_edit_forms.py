from datetime import date

import pytest

from services.dto import ClientDTO
from ui.common.date_utils import set_optional_date
from ui.forms.client_form import ClientForm, SupplierForm
from ui.forms.project_form import ProjectForm

BASE_URL = "http://api.test/api"


@pytest.fixture()
def client_form(qapp, context, toasts):
    return ClientForm(context=context)


def test_client_form_creates_record(client_form, session, toasts):
    client_form.fields["name"].setText("ООО Ромашка")
    client_form.fields["email"].setText("info@romashka.ru")
    client_form.fields["address"].setPlainText("Москва")
    session.queue(201, {"client": {"id": 1, "name": "ООО Ромашка"}})

    client_form.save()

    assert session.last["method"] == "POST"
    assert session.last["url"] == f"{BASE_URL}/clients"
    assert session.last["json"] == {
        "name": "ООО Ромашка",
        "email": "info@romashka.ru",
        "address": "Москва",
    }
    assert client_form.saved_instance.id == 1
    assert toasts[-1] == ("success", "Создано: клиент")


def test_missing_required_fields_send_nothing(client_form, session, toasts):
    client_form.fields["name"].setText("ООО Ромашка")

    client_form.save()

    assert session.calls == []
    assert toasts == [("error", "Заполните обязательные поля: Email")]
    assert client_form.saved_instance is None


def test_invalid_email_is_rejected(client_form, session, toasts):
    client_form.fields["name"].setText("Ромашка")
    client_form.fields["email"].setText("не-почта")

    client_form.save()

    assert session.calls == []
    assert toasts[0][0] == "error"


def test_server_error_keeps_dialog_open(client_form, session, toasts):
    client_form.fields["name"].setText("ООО Ромашка")
    client_form.fields["email"].setText("info@romashka.ru")
    session.queue(400, {"message": "Клиент с таким email уже есть"})

    client_form.save()

    assert toasts == [("error", "Клиент с таким email уже есть")]
    assert client_form.saved_instance is None


def test_edit_mode_sends_put_with_all_fields(qapp, context, session, toasts):
    client = ClientDTO(id=3, name="Старое имя", email="old@isofos.test", phone="123")
    form = ClientForm(client, context=context)
    assert form.fields["phone"].text() == "123"

    form.fields["name"].setText("Новое имя")
    form.fields["phone"].clear()
    session.queue(200, {"client": {"id": 3, "name": "Новое имя"}})
    form.save()

    assert session.last["method"] == "PUT"
    assert session.last["url"] == f"{BASE_URL}/clients/3"
    assert session.last["json"] == {
        "name": "Новое имя",
        "email": "old@isofos.test",
        "phone": None,
        "address": None,
    }
    assert toasts[-1] == ("success", "Изменения сохранены: клиент")


def test_supplier_email_is_optional(qapp, context, session, toasts):
    form = SupplierForm(context=context)
    form.fields["name"].setText("Кирпичный завод")
    session.queue(201, {"supplier": {"id": 2, "name": "Кирпичный завод"}})

    form.save()

    assert session.last["url"] == f"{BASE_URL}/suppliers"
    assert session.last["json"] == {"name": "Кирпичный завод"}


@pytest.fixture()
def project_form(qapp, context, session, toasts):
    session.queue(200, {"clients": [{"id": 5, "name": "Иванов"}]})
    return ProjectForm(context=context)


def test_project_form_lists_clients_and_defaults_status(project_form):
    combo = project_form.client_combo
    assert [combo.itemText(i) for i in range(combo.count())] == ["— Клиент —", "Иванов"]
    assert project_form.status_combo.currentData() == "pending"


def test_project_form_saves_payload(project_form, session):
    project_form.fields["name"].setText("Дом у озера")
    project_form.client_combo.setCurrentIndex(1)
    project_form.type_combo.setCurrentIndex(1)
    set_optional_date(project_form.fields["start_date"], date(2024, 4, 1))
    project_form.fields["budget"].setText("1 500 000")
    session.queue(201, {"project": {"id": 9, "name": "Дом у озера"}})

    project_form.save()

    assert session.last["json"] == {
        "name": "Дом у озера",
        "client_id": 5,
        "project_type_id": 1,
        "status": "pending",
        "start_date": "2024-04-01",
        "budget": 1500000.0,
    }


def test_project_end_before_start_is_rejected(project_form, session, toasts):
    project_form.fields["name"].setText("Дом")
    set_optional_date(project_form.fields["start_date"], date(2024, 4, 10))
    set_optional_date(project_form.fields["end_date"], date(2024, 4, 1))

    project_form.save()

    assert len(session.calls) == 1
    assert toasts[-1] == ("error", "Дата окончания раньше даты начала")


def test_project_form_survives_client_load_error(qapp, context, session, toasts):
    session.queue_error()

    form = ProjectForm(context=context)

    assert form.client_combo.count() == 1
    assert toasts[0][0] == "error"
