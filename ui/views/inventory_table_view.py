from core.app_context import get_app_context
from services.inventory_service import resolve_names
from ui.base.base_table_model import Column
from ui.base.base_table_view import BaseTableView
from ui.forms.inventory_form import InventoryForm


def _stock_label(quantity, threshold: int) -> str:
    if quantity is None:
        return ""
    return "⚠️ мало" if quantity < threshold else "норма"


def inventory_columns(threshold: int) -> list[Column]:
    """Колонки склада; «Запас» помечает позиции ниже порога *threshold*."""
    return [
        Column("Материал", "material_name"),
        Column("Стеллаж", "rack_name"),
        Column("Количество", "quantity", kind="number"),
        Column("Запас", lambda item: _stock_label(item.quantity, threshold)),
        Column("Пополнено", "last_restocked", kind="date"),
    ]


class InventoryTableView(BaseTableView):
    ENTITY_NAME = "позицию склада"
    SEARCH_PLACEHOLDER = "Поиск по материалу или стеллажу…"

    def __init__(self, parent=None, *, context=None, autoload=True):
        context = context or get_app_context()
        super().__init__(
            parent,
            context=context,
            service=context.inventory,
            form_class=InventoryForm,
            autoload=False,
        )
        self.COLUMNS = inventory_columns(context.settings.low_stock_threshold)
        if autoload:
            self.load_data()

    def fetch_items(self) -> list:
        items = self.service.list_all()
        materials = self.context.materials.list_all()
        racks = self.context.warehouse_racks.list_all()
        return resolve_names(items, materials, racks)
