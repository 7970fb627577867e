import logging

from PySide6.QtWidgets import QLabel, QTableView, QVBoxLayout, QWidget

from infrastructure.api_client import ApiError
from services.client_service import projects_of_client
from ui.base.base_detail_view import BaseDetailView
from ui.base.base_table_model import BaseTableModel, Column
from ui.common.toast import show_toast
from ui.forms.client_form import ClientForm
from utils.time_utils import format_date

logger = logging.getLogger(__name__)

PROJECT_COLUMNS = [
    Column("Проект", "name"),
    Column("Статус", "status_label"),
    Column("Начало", "start_date", kind="date"),
    Column("Окончание", "end_date", kind="date"),
    Column("Бюджет", "budget", kind="money"),
]


class ClientDetailView(BaseDetailView):
    SERVICE_NAME = "clients"
    FORM_CLASS = ClientForm
    ENTITY_NAME = "клиента"

    def get_key_facts(self):
        client = self.instance
        return [
            ("Email", client.email),
            ("Телефон", client.phone),
            ("Адрес", client.address),
            ("Создан", format_date(client.created_at)),
        ]

    def build_tabs(self):
        tab = QWidget()
        layout = QVBoxLayout(tab)
        self.projects_table = QTableView()
        self.projects_table.setSelectionBehavior(QTableView.SelectRows)
        self.projects_table.setEditTriggers(QTableView.NoEditTriggers)
        self.projects_hint = QLabel()
        layout.addWidget(self.projects_hint)
        layout.addWidget(self.projects_table)
        self.add_tab(tab, "Проекты")
        self.load_projects()

    def load_projects(self):
        try:
            projects = projects_of_client(
                self.instance.id, self.context.projects.list_all()
            )
        except ApiError as exc:
            logger.error("Не удалось загрузить проекты клиента: %s", exc)
            show_toast(exc.message or "Не удалось загрузить проекты", "error", self)
            projects = []
        self.projects = projects
        self.projects_model = BaseTableModel(projects, PROJECT_COLUMNS, self)
        self.projects_table.setModel(self.projects_model)
        self.projects_table.resizeColumnsToContents()
        self.projects_hint.setText(
            f"Проектов: {len(projects)}" if projects else "У клиента нет проектов"
        )
