from core.app_context import get_app_context
from ui.base.base_table_model import Column
from ui.base.base_table_view import BaseTableView
from ui.forms.client_form import ClientForm
from ui.views.client_detail_view import ClientDetailView


class ClientTableView(BaseTableView):
    COLUMNS = [
        Column("Название", "name"),
        Column("Email", "email"),
        Column("Телефон", "phone"),
        Column("Адрес", "address"),
        Column("Создан", "created_at", kind="date"),
    ]
    ENTITY_NAME = "клиента"
    SEARCH_PLACEHOLDER = "Поиск по названию или email…"

    def __init__(self, parent=None, *, context=None, autoload=True):
        context = context or get_app_context()
        super().__init__(
            parent,
            context=context,
            service=context.clients,
            form_class=ClientForm,
            detail_view_class=ClientDetailView,
            autoload=autoload,
        )
