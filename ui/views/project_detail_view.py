import logging

from PySide6.QtWidgets import (
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QTableView,
    QVBoxLayout,
    QWidget,
)

from infrastructure.api_client import ApiError
from ui.base.base_detail_view import BaseDetailView
from ui.base.base_table_model import BaseTableModel, Column
from ui.common.message_boxes import confirm
from ui.common.styled_widgets import styled_button
from ui.common.toast import show_toast
from ui.forms.project_form import ProjectForm
from ui.forms.project_material_dialog import ProjectMaterialDialog
from utils.money import format_money
from utils.time_utils import format_date

logger = logging.getLogger(__name__)

EMPLOYEE_COLUMNS = [
    Column("Сотрудник", "employee_label"),
    Column("Роль", "role"),
    Column("С", "start_date", kind="date"),
    Column("По", "end_date", kind="date"),
    Column("Ставка", "salary_allocation", kind="money"),
]

MATERIAL_COLUMNS = [
    Column("Материал", lambda pm: pm.material_name or f"#{pm.material_id}"),
    Column("Количество", "quantity", kind="number"),
    Column("Выдан", "allocated_date", kind="date"),
]

COST_LABELS = {
    "labor_cost": "Работы",
    "material_cost": "Материалы",
    "total_cost": "Итого",
}


def _make_table() -> QTableView:
    table = QTableView()
    table.setSelectionBehavior(QTableView.SelectRows)
    table.setSelectionMode(QTableView.SingleSelection)
    table.setEditTriggers(QTableView.NoEditTriggers)
    table.horizontalHeader().setStretchLastSection(True)
    return table


class ProjectDetailView(BaseDetailView):
    """Карточка проекта: сотрудники, материалы и стоимость."""

    SERVICE_NAME = "projects"
    FORM_CLASS = ProjectForm
    ENTITY_NAME = "проект"

    def get_key_facts(self):
        project = self.instance
        return [
            ("Клиент", project.client_name),
            ("Тип", project.project_type_name),
            ("Статус", project.status_label),
            ("Начало", format_date(project.start_date)),
            ("Окончание", format_date(project.end_date)),
            ("Бюджет", format_money(project.budget)),
            ("Описание", project.description),
        ]

    def reload_instance(self) -> None:
        client_name = self.instance.client_name
        super().reload_instance()
        if not self.instance.client_name:
            self.instance.client_name = client_name
            self.populate_key_facts()

    def build_tabs(self):
        self._build_employees_tab()
        self._build_materials_tab()
        self._build_cost_tab()
        self.load_employees()
        self.load_materials()

    # ------------------------------------------------------------------
    # Сотрудники
    # ------------------------------------------------------------------
    def _build_employees_tab(self):
        tab = QWidget()
        layout = QVBoxLayout(tab)
        self.employees_table = _make_table()
        self.employees_empty = QLabel("На проект никто не назначен")
        self.remove_employee_btn = styled_button("Снять с проекта", icon="➖")
        self.remove_employee_btn.clicked.connect(self.remove_selected_employee)
        btns = QHBoxLayout()
        btns.addWidget(self.remove_employee_btn)
        btns.addStretch()
        layout.addLayout(btns)
        layout.addWidget(self.employees_empty)
        layout.addWidget(self.employees_table)
        self.add_tab(tab, "Сотрудники")

    def load_employees(self):
        try:
            self.assignments = self.context.assignments.list_for_project(self.instance.id)
        except ApiError as exc:
            logger.error("Не удалось загрузить сотрудников проекта: %s", exc)
            show_toast(exc.message or "Не удалось загрузить сотрудников", "error", self)
            self.assignments = []
        self.employees_model = BaseTableModel(self.assignments, EMPLOYEE_COLUMNS, self)
        self.employees_table.setModel(self.employees_model)
        self.employees_empty.setVisible(not self.assignments)

    def remove_selected_employee(self):
        assignment = self._selected(self.employees_table, self.assignments)
        if assignment is None:
            return
        if not confirm(f"Снять «{assignment.employee_label}» с проекта?", parent=self):
            return
        try:
            self.context.assignments.remove(assignment.id)
        except ApiError as exc:
            show_toast(exc.message, "error", self)
            return
        show_toast("Сотрудник снят с проекта", "success", self)
        self.load_employees()

    # ------------------------------------------------------------------
    # Материалы
    # ------------------------------------------------------------------
    def _build_materials_tab(self):
        tab = QWidget()
        layout = QVBoxLayout(tab)
        btns = QHBoxLayout()
        self.add_material_btn = styled_button("Выделить материал", icon="➕", role="primary")
        self.add_material_btn.clicked.connect(self.add_material)
        self.remove_material_btn = styled_button("Вернуть", icon="➖")
        self.remove_material_btn.clicked.connect(self.remove_selected_material)
        btns.addWidget(self.add_material_btn)
        btns.addWidget(self.remove_material_btn)
        btns.addStretch()
        layout.addLayout(btns)
        self.materials_empty = QLabel("Материалы не выделены")
        layout.addWidget(self.materials_empty)
        self.materials_table = _make_table()
        layout.addWidget(self.materials_table)
        self.add_tab(tab, "Материалы")

    def load_materials(self):
        try:
            self.allocations = self.context.project_materials.list_for_project(
                self.instance.id
            )
        except ApiError as exc:
            logger.error("Не удалось загрузить материалы проекта: %s", exc)
            show_toast(exc.message or "Не удалось загрузить материалы", "error", self)
            self.allocations = []
        self.materials_model = BaseTableModel(self.allocations, MATERIAL_COLUMNS, self)
        self.materials_table.setModel(self.materials_model)
        self.materials_empty.setVisible(not self.allocations)

    def add_material(self):
        dlg = ProjectMaterialDialog(self.instance, context=self.context, parent=self)
        if dlg.exec():
            self.load_materials()
            self.load_cost()

    def remove_selected_material(self):
        allocation = self._selected(self.materials_table, self.allocations)
        if allocation is None:
            return
        if not confirm(f"Убрать «{allocation}» из проекта?", parent=self):
            return
        try:
            self.context.project_materials.remove(allocation.id)
        except ApiError as exc:
            show_toast(exc.message, "error", self)
            return
        self.load_materials()
        self.load_cost()

    # ------------------------------------------------------------------
    # Стоимость
    # ------------------------------------------------------------------
    def _build_cost_tab(self):
        tab = QWidget()
        self.cost_layout = QFormLayout(tab)
        refresh_btn = styled_button("Рассчитать", icon="🧮")
        refresh_btn.clicked.connect(self.load_cost)
        self.cost_layout.addRow(refresh_btn)
        self.cost_labels: dict[str, QLabel] = {}
        for key, label in COST_LABELS.items():
            value = QLabel("—")
            self.cost_labels[key] = value
            self.cost_layout.addRow(f"{label}:", value)
        self.add_tab(tab, "Стоимость")

    def load_cost(self):
        try:
            report = self.context.reports.project_cost(self.instance.id)
        except ApiError as exc:
            show_toast(exc.message or "Не удалось рассчитать стоимость", "error", self)
            return
        for key, label in self.cost_labels.items():
            label.setText(format_money(report.get(key)))

    @staticmethod
    def _selected(table: QTableView, items: list):
        index = table.currentIndex()
        if not index.isValid() or index.row() >= len(items):
            return None
        return items[index.row()]
