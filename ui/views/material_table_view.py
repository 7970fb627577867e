from core.app_context import get_app_context
from services.material_service import attach_supplier_names
from ui.base.base_table_model import Column
from ui.base.base_table_view import BaseTableView
from ui.forms.material_form import UNIT_LABELS, MaterialForm


class MaterialTableView(BaseTableView):
    COLUMNS = [
        Column("Материал", "name"),
        Column("Поставщик", "supplier_name"),
        Column("Цена", "unit_price", kind="money"),
        Column("Ед. изм.", lambda m: UNIT_LABELS.get(m.unit_of_measure, m.unit_of_measure)),
        Column("Описание", "description"),
    ]
    ENTITY_NAME = "материал"
    SEARCH_PLACEHOLDER = "Поиск по названию, описанию или поставщику…"

    def __init__(self, parent=None, *, context=None, autoload=True):
        context = context or get_app_context()
        super().__init__(
            parent,
            context=context,
            service=context.materials,
            form_class=MaterialForm,
            autoload=autoload,
        )

    def fetch_items(self) -> list:
        materials = self.service.list_all()
        if any(m.supplier_name is None and m.supplier_id is not None for m in materials):
            attach_supplier_names(materials, self.context.suppliers.list_all())
        return materials
