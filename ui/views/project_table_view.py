from core.app_context import get_app_context
from services.project_service import attach_client_names
from ui.base.base_table_model import Column
from ui.base.base_table_view import BaseTableView
from ui.forms.project_form import ProjectForm
from ui.views.project_detail_view import ProjectDetailView


class ProjectTableView(BaseTableView):
    COLUMNS = [
        Column("Проект", "name"),
        Column("Клиент", "client_name"),
        Column("Тип", "project_type_name"),
        Column("Статус", "status_label"),
        Column("Начало", "start_date", kind="date"),
        Column("Окончание", "end_date", kind="date"),
        Column("Бюджет", "budget", kind="money"),
    ]
    ENTITY_NAME = "проект"
    SEARCH_PLACEHOLDER = "Поиск по проекту или клиенту…"

    def __init__(self, parent=None, *, context=None, autoload=True):
        context = context or get_app_context()
        super().__init__(
            parent,
            context=context,
            service=context.projects,
            form_class=ProjectForm,
            detail_view_class=ProjectDetailView,
            autoload=autoload,
        )

    def fetch_items(self) -> list:
        projects = self.service.list_all()
        if any(p.client_name is None and p.client_id is not None for p in projects):
            attach_client_names(projects, self.context.clients.list_all())
        return projects

    def load_fresh(self, obj):
        fresh = super().load_fresh(obj)
        if fresh is not None and not fresh.client_name:
            fresh.client_name = obj.client_name
        return fresh
