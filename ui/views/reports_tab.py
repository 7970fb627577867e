import logging

from PySide6.QtWidgets import (
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QTableView,
    QVBoxLayout,
    QWidget,
)

from core.app_context import AppContext, get_app_context
from infrastructure.api_client import ApiError
from ui.base.base_table_model import BaseTableModel, Column
from ui.common.styled_widgets import styled_button
from ui.common.toast import show_toast
from utils.money import format_money

logger = logging.getLogger(__name__)

WORKLOAD_HEADERS = {
    "employee_name": "Сотрудник",
    "name": "Сотрудник",
    "first_name": "Имя",
    "last_name": "Фамилия",
    "position": "Должность",
    "project_count": "Проектов",
    "projects": "Проектов",
    "total_allocation": "Загрузка",
}


def workload_columns(rows: list[dict]) -> list[Column]:
    """Колонки по ключам первой строки отчёта."""
    if not rows:
        return []
    return [
        Column(WORKLOAD_HEADERS.get(key, key.replace("_", " ").capitalize()), key)
        for key in rows[0]
        if key != "id"
    ]


class ReportsTab(QWidget):
    """Отчёты: стоимость склада и загрузка сотрудников."""

    def __init__(self, parent=None, *, context: AppContext | None = None, autoload=True):
        super().__init__(parent)
        self._context = context or get_app_context()
        self.workload: list[dict] = []

        layout = QVBoxLayout(self)
        top = QHBoxLayout()
        self.refresh_btn = styled_button("Обновить отчёты", icon="🔄")
        self.refresh_btn.clicked.connect(self.load_data)
        top.addWidget(self.refresh_btn)
        top.addStretch()
        layout.addLayout(top)

        value_box = QGroupBox("Стоимость склада")
        self.value_form = QFormLayout(value_box)
        self.total_value_label = QLabel("—")
        self.value_form.addRow("Итого:", self.total_value_label)
        layout.addWidget(value_box)

        workload_box = QGroupBox("Загрузка сотрудников")
        workload_layout = QVBoxLayout(workload_box)
        self.workload_empty = QLabel("Нет данных")
        workload_layout.addWidget(self.workload_empty)
        self.workload_table = QTableView()
        self.workload_table.setEditTriggers(QTableView.NoEditTriggers)
        workload_layout.addWidget(self.workload_table)
        layout.addWidget(workload_box)

        if autoload:
            self.load_data()

    def refresh(self):
        self.load_data()

    def load_data(self):
        reports = self._context.reports
        try:
            value = reports.inventory_value()
        except ApiError as exc:
            logger.error("Не удалось получить стоимость склада: %s", exc)
            show_toast(exc.message or "Не удалось получить стоимость склада", "error", self)
        else:
            self.total_value_label.setText(
                format_money(value.get("total_value", value.get("value")))
            )

        try:
            self.workload = reports.employee_workload()
        except ApiError as exc:
            logger.error("Не удалось получить загрузку сотрудников: %s", exc)
            show_toast(exc.message or "Не удалось получить загрузку сотрудников", "error", self)
            self.workload = []
        model = BaseTableModel(self.workload, workload_columns(self.workload), self)
        self.workload_table.setModel(model)
        self.workload_table.resizeColumnsToContents()
        self.workload_empty.setVisible(not self.workload)
