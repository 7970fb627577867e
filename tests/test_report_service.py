import pytest

from services.report_service import ReportService

BASE_URL = "http://api.test/api"


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"total": 12}, 12),
        ({"count": "7"}, 7),
        ({"data": {"total": 3}}, 3),
        (5, 5),
        ({}, 0),
    ],
)
def test_totals_accept_any_shape(api_client, session, payload, expected):
    session.queue(200, payload)

    assert ReportService(api_client).total_clients() == expected
    assert session.last["url"] == f"{BASE_URL}/reports/total-clients"


def test_total_endpoints(api_client, session):
    service = ReportService(api_client)
    for method, name in (
        (service.total_projects, "projects"),
        (service.total_employees, "employees"),
        (service.total_suppliers, "suppliers"),
    ):
        session.queue(200, {"total": 1})
        method()
        assert session.last["url"] == f"{BASE_URL}/reports/total-{name}"


def test_project_cost(api_client, session):
    cost = {"labor_cost": 1000, "material_cost": 250.5, "total_cost": 1250.5}
    session.queue(200, {"report": cost})

    assert ReportService(api_client).project_cost(5) == cost
    assert session.last["url"] == f"{BASE_URL}/reports/project-cost/5"


def test_employee_workload(api_client, session):
    session.queue(200, {"workload": [{"employee": "Иван", "projects": 2}]})

    rows = ReportService(api_client).employee_workload()

    assert rows == [{"employee": "Иван", "projects": 2}]


def test_inventory_value_plain_number(api_client, session):
    session.queue(200, 15000)

    assert ReportService(api_client).inventory_value() == {"total_value": 15000}
