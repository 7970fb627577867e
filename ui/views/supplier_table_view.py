from core.app_context import get_app_context
from ui.base.base_table_model import Column
from ui.base.base_table_view import BaseTableView
from ui.forms.client_form import SupplierForm


class SupplierTableView(BaseTableView):
    COLUMNS = [
        Column("Название", "name"),
        Column("Email", "email"),
        Column("Телефон", "phone"),
        Column("Адрес", "address"),
    ]
    ENTITY_NAME = "поставщика"
    SEARCH_PLACEHOLDER = "Поиск по названию или email…"

    def __init__(self, parent=None, *, context=None, autoload=True):
        context = context or get_app_context()
        super().__init__(
            parent,
            context=context,
            service=context.suppliers,
            form_class=SupplierForm,
            autoload=autoload,
        )
