"""DTO записей, которые отдаёт REST API бэк-офиса."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Mapping

from utils.money import to_decimal
from utils.time_utils import parse_date, parse_datetime

RecordId = int | str

PROJECT_STATUSES: dict[str, str] = {
    "pending": "Ожидает",
    "in_progress": "В работе",
    "completed": "Завершён",
    "cancelled": "Отменён",
}
DEFAULT_PROJECT_STATUS = "pending"

PROJECT_TYPES: dict[int, str] = {
    1: "Дом",
    2: "Офис",
    3: "Магазин",
}

UNITS_OF_MEASURE = ["kg", "litre", "piece", "meter", "bag", "ton"]


def _record_id(value: Any) -> RecordId | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    text = str(value).strip()
    return int(text) if text.isascii() and text.isdigit() else text


def _int_or_none(value: Any) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


def _nested_name(data: Mapping[str, Any], key: str, attr: str = "name") -> str | None:
    nested = data.get(key)
    if isinstance(nested, Mapping):
        value = nested.get(attr)
        return str(value) if value is not None else None
    if isinstance(nested, str):
        return nested
    return None


def clean_payload(data: Mapping[str, Any]) -> dict[str, Any]:
    """Убрать из тела запроса пустые значения (``None`` и ``""``)."""
    return {key: value for key, value in data.items() if value not in (None, "")}


@dataclass
class ClientDTO:
    id: RecordId
    name: str
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    created_at: datetime | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "ClientDTO":
        return cls(
            id=_record_id(data.get("id")),
            name=data.get("name") or "",
            email=data.get("email"),
            phone=data.get("phone"),
            address=data.get("address"),
            created_at=parse_datetime(data.get("created_at")),
        )

    def to_payload(self) -> dict:
        return clean_payload(
            {
                "name": self.name,
                "email": self.email,
                "phone": self.phone,
                "address": self.address,
            }
        )

    def __str__(self) -> str:
        return self.name


@dataclass
class SupplierDTO(ClientDTO):
    """Поставщик: те же поля, что у клиента."""

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "SupplierDTO":
        base = ClientDTO.from_api(data)
        return cls(**base.__dict__)


@dataclass
class ProjectDTO:
    id: RecordId
    name: str
    client_id: RecordId | None = None
    project_type_id: int | None = None
    description: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    budget: Decimal | None = None
    status: str = DEFAULT_PROJECT_STATUS
    created_at: datetime | None = None
    client_name: str | None = None
    project_type_name: str | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "ProjectDTO":
        project_type_id = _int_or_none(data.get("project_type_id"))
        type_name = _nested_name(data, "project_type", "type_name")
        if type_name is None and project_type_id in PROJECT_TYPES:
            type_name = PROJECT_TYPES[project_type_id]
        return cls(
            id=_record_id(data.get("id")),
            name=data.get("name") or "",
            client_id=_record_id(data.get("client_id")),
            project_type_id=project_type_id,
            description=data.get("description"),
            start_date=parse_date(data.get("start_date")),
            end_date=parse_date(data.get("end_date")),
            budget=to_decimal(data.get("budget")),
            status=data.get("status") or DEFAULT_PROJECT_STATUS,
            created_at=parse_datetime(data.get("created_at")),
            client_name=_nested_name(data, "client") or data.get("client_name"),
            project_type_name=type_name,
        )

    @property
    def status_label(self) -> str:
        return PROJECT_STATUSES.get(self.status, self.status.replace("_", " "))

    def to_payload(self) -> dict:
        return clean_payload(
            {
                "name": self.name,
                "description": self.description,
                "client_id": self.client_id,
                "project_type_id": self.project_type_id,
                "start_date": self.start_date,
                "end_date": self.end_date,
                "budget": self.budget,
                "status": self.status,
            }
        )

    def __str__(self) -> str:
        return self.name


@dataclass
class EmployeeDTO:
    """Сотрудник в канонической форме ``first_name/last_name/position``.

    Старая форма ``em_id/em_name/em_roll/em_salary/mng_id`` принимается при
    чтении и раскладывается по тем же полям.
    """

    id: RecordId
    first_name: str = ""
    last_name: str = ""
    position: str | None = None
    base_salary: Decimal | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    hire_date: date | None = None
    manager_id: RecordId | None = None
    created_at: datetime | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "EmployeeDTO":
        first_name = data.get("first_name")
        last_name = data.get("last_name")
        if first_name is None and last_name is None and data.get("em_name"):
            first_name, _, last_name = str(data["em_name"]).strip().partition(" ")

        record_id = data.get("id")
        if record_id is None:
            record_id = data.get("em_id")

        salary = data.get("base_salary")
        if salary is None:
            salary = data.get("em_salary")

        return cls(
            id=_record_id(record_id),
            first_name=str(first_name or ""),
            last_name=str(last_name or ""),
            position=data.get("position") or data.get("em_roll"),
            base_salary=to_decimal(salary),
            email=data.get("email"),
            phone=data.get("phone"),
            address=data.get("address"),
            hire_date=parse_date(data.get("hire_date")),
            manager_id=_record_id(data.get("manager_id") or data.get("mng_id")),
            created_at=parse_datetime(data.get("created_at")),
        )

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    def to_payload(self) -> dict:
        return clean_payload(
            {
                "first_name": self.first_name,
                "last_name": self.last_name,
                "position": self.position,
                "base_salary": self.base_salary,
                "email": self.email,
                "phone": self.phone,
                "address": self.address,
                "hire_date": self.hire_date,
            }
        )

    def __str__(self) -> str:
        if self.position:
            return f"{self.full_name} — {self.position}"
        return self.full_name


@dataclass
class MaterialDTO:
    id: RecordId
    name: str
    supplier_id: RecordId | None = None
    description: str | None = None
    unit_price: Decimal | None = None
    unit_of_measure: str | None = None
    created_at: datetime | None = None
    supplier_name: str | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "MaterialDTO":
        return cls(
            id=_record_id(data.get("id")),
            name=data.get("name") or "",
            supplier_id=_record_id(data.get("supplier_id")),
            description=data.get("description"),
            unit_price=to_decimal(data.get("unit_price")),
            unit_of_measure=data.get("unit_of_measure"),
            created_at=parse_datetime(data.get("created_at")),
            supplier_name=_nested_name(data, "supplier") or data.get("supplier_name"),
        )

    def to_payload(self) -> dict:
        return clean_payload(
            {
                "name": self.name,
                "supplier_id": self.supplier_id,
                "description": self.description,
                "unit_price": self.unit_price,
                "unit_of_measure": self.unit_of_measure,
            }
        )

    def __str__(self) -> str:
        return self.name


@dataclass
class WarehouseRackDTO:
    id: RecordId
    name: str
    location: str | None = None
    capacity: int | None = None
    created_at: datetime | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "WarehouseRackDTO":
        return cls(
            id=_record_id(data.get("id")),
            name=data.get("name") or "",
            location=data.get("location"),
            capacity=_int_or_none(data.get("capacity")),
            created_at=parse_datetime(data.get("created_at")),
        )

    def to_payload(self) -> dict:
        return clean_payload(
            {"name": self.name, "location": self.location, "capacity": self.capacity}
        )

    def __str__(self) -> str:
        return self.name


@dataclass
class InventoryItemDTO:
    id: RecordId
    material_id: RecordId | None = None
    rack_id: RecordId | None = None
    quantity: int | None = None
    last_restocked: date | None = None
    material_name: str | None = None
    rack_name: str | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "InventoryItemDTO":
        return cls(
            id=_record_id(data.get("id")),
            material_id=_record_id(data.get("material_id")),
            rack_id=_record_id(data.get("rack_id")),
            quantity=_int_or_none(data.get("quantity")),
            last_restocked=parse_date(data.get("last_restocked")),
            material_name=_nested_name(data, "material") or data.get("material_name"),
            rack_name=_nested_name(data, "rack") or data.get("rack_name"),
        )

    def to_payload(self) -> dict:
        return clean_payload(
            {
                "material_id": self.material_id,
                "rack_id": self.rack_id,
                "quantity": self.quantity,
                "last_restocked": self.last_restocked,
            }
        )

    def __str__(self) -> str:
        return f"{self.material_name or self.material_id} × {self.quantity}"


@dataclass
class ProjectEmployeeDTO:
    id: RecordId
    project_id: RecordId | None = None
    employee_id: RecordId | None = None
    role: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    salary_allocation: Decimal | None = None
    project_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    position: str | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "ProjectEmployeeDTO":
        employee = data.get("employee") if isinstance(data.get("employee"), Mapping) else {}
        return cls(
            id=_record_id(data.get("id")),
            project_id=_record_id(data.get("project_id")),
            employee_id=_record_id(data.get("employee_id")),
            role=data.get("role"),
            start_date=parse_date(data.get("start_date")),
            end_date=parse_date(data.get("end_date")),
            salary_allocation=to_decimal(data.get("salary_allocation")),
            project_name=data.get("project_name") or _nested_name(data, "project"),
            first_name=data.get("first_name") or employee.get("first_name"),
            last_name=data.get("last_name") or employee.get("last_name"),
            position=data.get("position") or employee.get("position"),
        )

    @property
    def employee_label(self) -> str:
        if not self.first_name:
            return "Неизвестный сотрудник"
        name = " ".join(p for p in (self.first_name, self.last_name) if p)
        return f"{name} — {self.position}" if self.position else name

    def __str__(self) -> str:
        return f"{self.project_name or 'Неизвестный проект'}: {self.employee_label}"


@dataclass
class ProjectMaterialDTO:
    id: RecordId
    project_id: RecordId | None = None
    material_id: RecordId | None = None
    quantity: int = 0
    allocated_date: date | None = None
    material_name: str | None = None
    project_name: str | None = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "ProjectMaterialDTO":
        return cls(
            id=_record_id(data.get("id")),
            project_id=_record_id(data.get("project_id")),
            material_id=_record_id(data.get("material_id")),
            quantity=_int_or_none(data.get("quantity")) or 0,
            allocated_date=parse_date(data.get("allocated_date")),
            material_name=_nested_name(data, "material") or data.get("material_name"),
            project_name=_nested_name(data, "project") or data.get("project_name"),
        )

    def __str__(self) -> str:
        return f"{self.material_name or self.material_id} × {self.quantity}"


@dataclass
class ManagerDTO:
    """Авторизованный менеджер бэк-офиса."""

    id: RecordId | None
    email: str = ""
    first_name: str | None = None
    last_name: str | None = None
    name: str | None = None
    phone: str | None = None
    created_at: datetime | None = None
    raw: dict = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "ManagerDTO":
        return cls(
            id=_record_id(data.get("id")),
            email=data.get("email") or "",
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
            name=data.get("name"),
            phone=data.get("phone"),
            created_at=parse_datetime(data.get("created_at")),
            raw=dict(data),
        )

    @property
    def display_name(self) -> str:
        if self.name:
            return self.name
        full = " ".join(p for p in (self.first_name, self.last_name) if p)
        return full or self.email

    def to_storage(self) -> dict:
        """Словарь для сохранения в локальное хранилище."""
        return dict(self.raw) if self.raw else {
            "id": self.id,
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "name": self.name,
            "phone": self.phone,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __str__(self) -> str:
        return self.display_name
