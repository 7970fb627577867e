from decimal import Decimal

from infrastructure.api_client import ApiClient
from services.client_service import ClientService, projects_of_client
from services.dto import ClientDTO, MaterialDTO, ProjectDTO, SupplierDTO, WarehouseRackDTO
from services.employee_service import EmployeeService
from services.inventory_service import (
    UNKNOWN_MATERIAL,
    UNKNOWN_RACK,
    InventoryService,
    low_stock,
    resolve_names,
)
from services.material_service import attach_supplier_names
from services.project_service import ProjectService, attach_client_names
from services.warehouse_service import WarehouseRackService

BASE_URL = "http://api.test/api"


def test_client_list_and_search(api_client, session):
    session.queue(
        200,
        {
            "clients": [
                {"id": 1, "name": "ООО Ромашка", "email": "info@romashka.ru"},
                {"id": "2", "name": "Стройдвор", "email": "hello@dvor.ru"},
            ]
        },
    )
    service = ClientService(api_client)

    clients = service.list_all()

    assert [c.id for c in clients] == [1, 2]
    assert isinstance(clients[0], ClientDTO)
    assert service.search(clients, "DVOR") == [clients[1]]
    assert service.search(clients, "") == clients


def test_create_returns_dto_or_none(api_client, session):
    service = ClientService(api_client)
    session.queue(201, {"client": {"id": 10, "name": "Новый"}})
    created = service.create({"name": "Новый"})
    assert created.id == 10
    assert session.last["method"] == "POST"

    session.queue(201, {"message": "ok"})
    assert service.create({"name": "Без id"}) is None


def test_update_and_delete(api_client, session):
    service = ProjectService(api_client)
    session.queue(200, {"project": {"id": 3, "name": "Офис", "status": "in_progress"}})

    project = service.update(3, {"status": "in_progress"})

    assert session.last["method"] == "PUT"
    assert session.last["url"] == f"{BASE_URL}/projects/3"
    assert project.status_label == "В работе"

    session.queue(204)
    service.delete(3)
    assert session.last["method"] == "DELETE"


def test_get_single_record(api_client, session):
    session.queue(200, {"data": {"id": 4, "name": "Дом", "client": {"name": "Иванов"}}})

    project = ProjectService(api_client).get(4)

    assert session.last["url"] == f"{BASE_URL}/projects/4"
    assert project.client_name == "Иванов"


def test_employee_legacy_shape_is_mapped(api_client, session):
    session.queue(
        200,
        [
            {
                "em_id": 7,
                "em_name": "Иван Петров",
                "em_roll": "Прораб",
                "em_salary": "50000",
                "mng_id": 2,
            }
        ],
    )
    service = EmployeeService(api_client)

    (employee,) = service.list_all()

    assert employee.id == 7
    assert employee.first_name == "Иван"
    assert employee.last_name == "Петров"
    assert employee.position == "Прораб"
    assert employee.base_salary == Decimal("50000")
    assert employee.manager_id == 2
    assert service.search([employee], "прораб") == [employee]
    assert service.search([employee], "иван петров") == [employee]


def test_warehouse_resource_is_configurable(storage, session):
    api = ApiClient(BASE_URL, storage, session=session)
    service = WarehouseRackService(api, resource="warehouses")
    session.queue(200, {"warehouses": [{"id": 1, "name": "A-1", "location": "Цех 2"}]})

    racks = service.list_all()

    assert session.last["url"] == f"{BASE_URL}/warehouses"
    assert racks[0].capacity is None
    assert service.search(racks, "цех") == racks


def test_inventory_names_and_low_stock(api_client, session):
    session.queue(
        200,
        [
            {"id": 1, "material_id": 10, "rack_id": 100, "quantity": 4},
            {"id": 2, "material_id": 99, "rack_id": 999, "quantity": 25},
        ],
    )
    service = InventoryService(api_client)
    items = service.list_all()

    resolve_names(
        items,
        [MaterialDTO(id=10, name="Цемент")],
        [WarehouseRackDTO(id=100, name="A-1")],
    )

    assert (items[0].material_name, items[0].rack_name) == ("Цемент", "A-1")
    assert (items[1].material_name, items[1].rack_name) == (UNKNOWN_MATERIAL, UNKNOWN_RACK)
    assert low_stock(items, 10) == [items[0]]
    assert service.search(items, "цем") == [items[0]]


def test_name_helpers():
    projects = [
        ProjectDTO(id=1, name="Дом", client_id=5),
        ProjectDTO(id=2, name="Офис", client_id=6, client_name="Уже есть"),
        ProjectDTO(id=3, name="Магазин", client_id="5"),
    ]
    clients = [ClientDTO(id=5, name="Иванов"), ClientDTO(id=6, name="Петров")]

    attach_client_names(projects, clients)

    assert [p.client_name for p in projects] == ["Иванов", "Уже есть", "Иванов"]
    assert projects_of_client(5, projects) == [projects[0], projects[2]]

    materials = [MaterialDTO(id=1, name="Кирпич", supplier_id=3)]
    attach_supplier_names(materials, [SupplierDTO(id=3, name="Кирпичный завод")])
    assert materials[0].supplier_name == "Кирпичный завод"
