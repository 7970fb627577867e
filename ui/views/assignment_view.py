"""Назначение сотрудников на проекты."""

import logging

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QFormLayout,
    QGroupBox,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QVBoxLayout,
    QWidget,
)

from core.app_context import get_app_context
from infrastructure.api_client import ApiError
from ui.base.base_table_model import Column
from ui.base.base_table_view import BaseTableView
from ui.base.table_controller import TableController
from ui.common.combo_helpers import create_entity_combobox, populate_combo
from ui.common.styled_widgets import styled_button
from ui.common.toast import show_toast

logger = logging.getLogger(__name__)


class AssignmentTableView(BaseTableView):
    COLUMNS = [
        Column("Проект", lambda a: a.project_name or f"#{a.project_id}"),
        Column("Сотрудник", "employee_label"),
        Column("Роль", "role"),
        Column("С", "start_date", kind="date"),
    ]
    ENTITY_NAME = "назначение"
    SEARCH_PLACEHOLDER = "Поиск по проекту или сотруднику…"

    def __init__(self, parent=None, *, context=None, autoload=True):
        context = context or get_app_context()
        service = context.assignments
        super().__init__(
            parent,
            context=context,
            service=service,
            controller=TableController(self, service=service, delete_func=service.remove),
            autoload=autoload,
        )


class AssignmentView(QWidget):
    """Выбор проекта и нескольких сотрудников плюс список назначений."""

    def __init__(self, parent=None, *, context=None, autoload=True):
        super().__init__(parent)
        self.context = context or get_app_context()
        self.projects: list = []
        self.employees: list = []

        layout = QVBoxLayout(self)

        box = QGroupBox("Новое назначение")
        form = QFormLayout(box)
        self.project_combo = create_entity_combobox([], placeholder="— Проект —")
        form.addRow("Проект:", self.project_combo)
        self.employee_list = QListWidget()
        self.employee_list.setMaximumHeight(180)
        form.addRow("Сотрудники:", self.employee_list)
        self.role_edit = QLineEdit()
        self.role_edit.setPlaceholderText("Например: прораб")
        form.addRow("Роль:", self.role_edit)
        self.assign_btn = styled_button("Назначить", icon="👷", role="primary")
        self.assign_btn.clicked.connect(self.assign)
        form.addRow(self.assign_btn)
        layout.addWidget(box)

        self.table_view = AssignmentTableView(self, context=self.context, autoload=False)
        self.data_loaded = self.table_view.data_loaded
        layout.addWidget(self.table_view)

        if autoload:
            self.load_data()

    # ------------------------------------------------------------------
    def load_data(self):
        self.load_choices()
        self.table_view.load_data()

    def refresh(self):
        self.load_data()

    def export_csv(self, path=None):
        return self.table_view.export_csv(path)

    def load_choices(self):
        try:
            self.projects = self.context.projects.list_all()
        except ApiError as exc:
            logger.error("Не удалось загрузить проекты: %s", exc)
            show_toast(exc.message or "Не удалось загрузить проекты", "error", self)
            self.projects = []
        populate_combo(
            self.project_combo,
            self.projects,
            label_func=lambda p: p.name,
            placeholder="— Проект —",
        )

        try:
            self.employees = self.context.employees.list_all()
        except ApiError as exc:
            logger.error("Не удалось загрузить сотрудников: %s", exc)
            show_toast(exc.message or "Не удалось загрузить сотрудников", "error", self)
            self.employees = []
        self.employee_list.clear()
        for employee in self.employees:
            item = QListWidgetItem(str(employee))
            item.setData(Qt.UserRole, employee.id)
            item.setFlags(item.flags() | Qt.ItemIsUserCheckable)
            item.setCheckState(Qt.Unchecked)
            self.employee_list.addItem(item)

    def selected_employee_ids(self) -> list:
        ids = []
        for row in range(self.employee_list.count()):
            item = self.employee_list.item(row)
            if item.checkState() == Qt.Checked:
                ids.append(item.data(Qt.UserRole))
        return ids

    def assign(self) -> int:
        project_id = self.project_combo.currentData()
        employee_ids = self.selected_employee_ids()
        if project_id is None or not employee_ids:
            show_toast("Выберите проект и хотя бы одного сотрудника", "error", self)
            return 0

        role = self.role_edit.text().strip() or None
        try:
            count = self.context.assignments.assign(project_id, employee_ids, role)
        except ApiError as exc:
            logger.error("Не удалось назначить сотрудников: %s", exc)
            show_toast(exc.message or "Не удалось назначить сотрудников", "error", self)
            self.table_view.load_data()
            return 0

        show_toast(f"Назначено сотрудников: {count}", "success", self)
        for row in range(self.employee_list.count()):
            self.employee_list.item(row).setCheckState(Qt.Unchecked)
        self.role_edit.clear()
        self.table_view.load_data()
        return count
