"""Сервис сотрудников."""

from services.crud_service import ResourceService
from services.dto import EmployeeDTO


class EmployeeService(ResourceService[EmployeeDTO]):
    resource = "employees"
    record_key = "employee"
    dto_class = EmployeeDTO
    search_fields = ("full_name", "email", "position")
    entity_name = "сотрудник"
