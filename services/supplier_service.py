"""Сервис поставщиков."""

from services.crud_service import ResourceService
from services.dto import SupplierDTO


class SupplierService(ResourceService[SupplierDTO]):
    resource = "suppliers"
    record_key = "supplier"
    dto_class = SupplierDTO
    search_fields = ("name", "email")
    entity_name = "поставщик"
