from datetime import date

import pytest

from infrastructure.api_client import HttpError
from services.assignment_service import AssignmentService, ProjectMaterialService

BASE_URL = "http://api.test/api"


def test_assign_sends_one_request_per_employee(api_client, session):
    session.queue(201, {"id": 1}).queue(201, {"id": 2})
    service = AssignmentService(api_client)

    count = service.assign(5, [10, 11], role="Каменщик")

    assert count == 2
    assert [c["json"] for c in session.calls] == [
        {"project_id": 5, "employee_id": 10, "role": "Каменщик"},
        {"project_id": 5, "employee_id": 11, "role": "Каменщик"},
    ]
    assert all(c["url"] == f"{BASE_URL}/project-employees" for c in session.calls)


def test_assign_without_role_omits_field(api_client, session):
    session.queue(201, {"id": 1})

    AssignmentService(api_client).assign(5, [10])

    assert session.last["json"] == {"project_id": 5, "employee_id": 10}


def test_assign_stops_at_first_error(api_client, session):
    session.queue(201, {"id": 1}).queue(409, {"message": "Уже назначен"})
    service = AssignmentService(api_client)

    with pytest.raises(HttpError) as exc_info:
        service.assign(5, [10, 11, 12])

    assert exc_info.value.message == "Уже назначен"
    assert len(session.calls) == 2


def test_list_for_project(api_client, session):
    session.queue(
        200,
        {
            "employees": [
                {
                    "id": 3,
                    "project_id": 5,
                    "employee_id": 10,
                    "first_name": "Иван",
                    "last_name": "Петров",
                    "position": "Прораб",
                }
            ]
        },
    )

    (assignment,) = AssignmentService(api_client).list_for_project(5)

    assert session.last["url"] == f"{BASE_URL}/project-employees/project/5"
    assert assignment.employee_label == "Иван Петров — Прораб"


def test_single_assignment_envelope(api_client, session):
    session.queue(200, {"assignment": {"id": 3, "project_id": 5, "employee_id": 10}})

    rows = AssignmentService(api_client).list_for_project(5)

    assert [r.id for r in rows] == [3]
    assert rows[0].employee_label == "Неизвестный сотрудник"


def test_remove_and_search(api_client, session):
    session.queue(
        200,
        [
            {"id": 1, "project_name": "Дом", "first_name": "Иван"},
            {"id": 2, "project_name": "Офис", "first_name": "Анна"},
        ],
    )
    service = AssignmentService(api_client)
    rows = service.list_all()

    assert service.search(rows, "анна") == [rows[1]]

    session.queue(204)
    service.remove(2)
    assert session.last["method"] == "DELETE"
    assert session.last["url"] == f"{BASE_URL}/project-employees/2"


def test_allocate_material(api_client, session):
    session.queue(201, {"id": 9})

    ProjectMaterialService(api_client).allocate(5, 7, 30, date(2024, 3, 1))

    assert session.last["url"] == f"{BASE_URL}/project-materials"
    assert session.last["json"] == {
        "project_id": 5,
        "material_id": 7,
        "quantity": 30,
        "allocated_date": "2024-03-01",
    }


def test_materials_filtered_by_project(api_client, session):
    session.queue(
        200,
        {
            "project_materials": [
                {"id": 1, "project_id": 5, "material_id": 7, "quantity": 3},
                {"id": 2, "project_id": "6", "material_id": 7, "quantity": 1},
                {"id": 3, "project_id": "5", "material_id": 8, "quantity": 2},
            ]
        },
    )

    rows = ProjectMaterialService(api_client).list_for_project(5)

    assert [r.id for r in rows] == [1, 3]
