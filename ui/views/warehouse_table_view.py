from core.app_context import get_app_context
from ui.base.base_table_model import Column
from ui.base.base_table_view import BaseTableView
from ui.forms.warehouse_form import WarehouseRackForm


class WarehouseTableView(BaseTableView):
    COLUMNS = [
        Column("Стеллаж", "name"),
        Column("Расположение", "location"),
        Column("Вместимость", "capacity", kind="number"),
        Column("Создан", "created_at", kind="date"),
    ]
    ENTITY_NAME = "стеллаж"
    SEARCH_PLACEHOLDER = "Поиск по названию или расположению…"

    def __init__(self, parent=None, *, context=None, autoload=True):
        context = context or get_app_context()
        super().__init__(
            parent,
            context=context,
            service=context.warehouse_racks,
            form_class=WarehouseRackForm,
            autoload=autoload,
        )
