"""Сервис складских остатков."""

from __future__ import annotations

from collections.abc import Sequence

from services.crud_service import ResourceService
from services.dto import InventoryItemDTO, MaterialDTO, WarehouseRackDTO

UNKNOWN_MATERIAL = "Неизвестный материал"
UNKNOWN_RACK = "Неизвестный стеллаж"


class InventoryService(ResourceService[InventoryItemDTO]):
    resource = "inventory"
    record_key = "item"
    dto_class = InventoryItemDTO
    search_fields = ("material_name", "rack_name")
    entity_name = "позиция склада"


def resolve_names(
    items: Sequence[InventoryItemDTO],
    materials: Sequence[MaterialDTO],
    racks: Sequence[WarehouseRackDTO],
) -> list[InventoryItemDTO]:
    """Подставить названия материала и стеллажа по их идентификаторам."""
    material_names = {str(m.id): m.name for m in materials}
    rack_names = {str(r.id): r.name for r in racks}
    for item in items:
        item.material_name = material_names.get(
            str(item.material_id), item.material_name or UNKNOWN_MATERIAL
        )
        item.rack_name = rack_names.get(str(item.rack_id), item.rack_name or UNKNOWN_RACK)
    return list(items)


def low_stock(items: Sequence[InventoryItemDTO], threshold: int) -> list[InventoryItemDTO]:
    """Позиции, где количество известно и меньше *threshold*."""
    return [
        item for item in items if item.quantity is not None and item.quantity < threshold
    ]
