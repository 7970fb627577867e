from datetime import date
from decimal import Decimal

from services.dto import (
    InventoryItemDTO,
    ManagerDTO,
    MaterialDTO,
    ProjectDTO,
    WarehouseRackDTO,
    clean_payload,
)
from utils.money import format_money
from utils.time_utils import format_date


def test_project_from_api():
    project = ProjectDTO.from_api(
        {
            "id": "12",
            "name": "Дом",
            "project_type_id": "2",
            "start_date": "2024-02-01T00:00:00.000Z",
            "budget": "15000.50",
            "status": "on_hold",
        }
    )

    assert project.id == 12
    assert project.project_type_name == "Офис"
    assert project.start_date == date(2024, 2, 1)
    assert project.budget == Decimal("15000.50")
    assert project.status_label == "on hold"


def test_project_defaults_to_pending():
    project = ProjectDTO.from_api({"id": 1, "name": "Склад"})

    assert project.status == "pending"
    assert project.status_label == "Ожидает"


def test_nested_names():
    material = MaterialDTO.from_api({"id": 1, "name": "Цемент", "supplier": {"name": "Лафарж"}})
    item = InventoryItemDTO.from_api(
        {"id": 1, "quantity": "4", "material": "Цемент", "rack": {"name": "A-1"}}
    )

    assert material.supplier_name == "Лафарж"
    assert (item.material_name, item.rack_name, item.quantity) == ("Цемент", "A-1", 4)


def test_payloads_drop_empty_values():
    rack = WarehouseRackDTO(id=1, name="A-1", location="")

    assert rack.to_payload() == {"name": "A-1"}
    assert clean_payload({"a": 0, "b": None, "c": ""}) == {"a": 0}


def test_manager_display_name_and_storage():
    manager = ManagerDTO.from_api({"id": 1, "email": "a@b.c", "role": "admin"})

    assert manager.display_name == "a@b.c"
    assert manager.to_storage()["role"] == "admin"
    assert ManagerDTO.from_api({"name": "Анна"}).display_name == "Анна"


def test_formatting_helpers():
    assert format_money(Decimal("12500")) == "$12 500.00"
    assert format_money(None) == "—"
    assert format_date("2024-03-05") == "05.03.2024"
    assert format_date(None) == "—"


def test_ids_parse_only_ascii_digits():
    assert ProjectDTO.from_api({"id": " 42 ", "name": "Дом"}).id == 42
    assert ProjectDTO.from_api({"id": "²", "name": "Дом"}).id == "²"
    assert ProjectDTO.from_api({"id": "١٢", "name": "Дом"}).id == "١٢"


def test_inventory_quantity_may_be_missing():
    item = InventoryItemDTO.from_api({"id": 1, "material_id": 2})

    assert item.quantity is None
    assert "quantity" not in item.to_payload()
