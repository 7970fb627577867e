"""Сервис материалов."""

from __future__ import annotations

from collections.abc import Sequence

from services.crud_service import ResourceService
from services.dto import MaterialDTO, SupplierDTO


class MaterialService(ResourceService[MaterialDTO]):
    resource = "materials"
    record_key = "material"
    dto_class = MaterialDTO
    search_fields = ("name", "description", "supplier_name")
    entity_name = "материал"


def attach_supplier_names(
    materials: Sequence[MaterialDTO], suppliers: Sequence[SupplierDTO]
) -> list[MaterialDTO]:
    names = {str(s.id): s.name for s in suppliers}
    for material in materials:
        if not material.supplier_name and material.supplier_id is not None:
            material.supplier_name = names.get(str(material.supplier_id))
    return list(materials)
