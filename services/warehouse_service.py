"""Сервис складских стеллажей."""

from services.crud_service import ResourceService
from services.dto import WarehouseRackDTO


class WarehouseRackService(ResourceService[WarehouseRackDTO]):
    """Стеллажи склада.

    Путь ресурса берётся из настроек: ``warehouse-racks`` или ``warehouses``.
    """

    resource = "warehouse-racks"
    collection_key = ("racks", "warehouse_racks", "warehouses")
    record_key = "rack"
    dto_class = WarehouseRackDTO
    search_fields = ("name", "location")
    entity_name = "стеллаж"
