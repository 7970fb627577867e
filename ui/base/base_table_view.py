from __future__ import annotations

import logging
from typing import Any

from PySide6.QtCore import QSortFilterProxyModel, Qt, Signal
from PySide6.QtGui import QShortcut
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QTableView,
    QVBoxLayout,
    QWidget,
)

from infrastructure.api_client import ApiError
from services.export_service import export_records_to_csv
from ui.base.base_table_model import Column
from ui.base.table_controller import TableController
from ui.common.message_boxes import confirm
from ui.common.search_box import SearchBox
from ui.common.styled_widgets import styled_button
from ui.common.toast import show_toast

logger = logging.getLogger(__name__)


class BaseTableView(QWidget):
    """Таблица записей ресурса: поиск, кнопки CRUD, экспорт и карточка.

    Потомки задают ``COLUMNS``, сервис, форму и (необязательно) карточку.
    Удаление спрашивает подтверждение и после успеха перечитывает список.
    """

    row_double_clicked = Signal(object)  # объект строки по двойному клику
    data_loaded = Signal(int)  # количество показанных записей

    COLUMNS: list[Column] = []
    ENTITY_NAME = "запись"
    SEARCH_PLACEHOLDER = "Поиск…"
    EMPTY_TEXT = "Нет записей"
    EMPTY_SEARCH_TEXT = "Ничего не найдено"
    LOAD_ERROR_TEXT = "Не удалось загрузить данные"

    def __init__(
        self,
        parent=None,
        *,
        context=None,
        service=None,
        form_class=None,
        detail_view_class=None,
        controller: TableController | None = None,
        can_add=True,
        can_edit=True,
        can_delete=True,
        autoload=True,
    ):
        super().__init__(parent)
        self.context = context
        self.service = service
        self.form_class = form_class
        self.detail_view_class = detail_view_class
        self.can_add = can_add and form_class is not None
        self.can_edit = can_edit and form_class is not None
        self.can_delete = can_delete
        self.settings_id = type(self).__name__
        self.model = None

        self.controller = controller or TableController(
            self, service=service, fetch=self.fetch_items
        )

        self.outer_layout = QVBoxLayout(self)

        # Поиск
        self.search_box = SearchBox(
            self.on_search_changed, placeholder=self.SEARCH_PLACEHOLDER
        )
        self.outer_layout.addWidget(self.search_box)
        QShortcut("Ctrl+F", self, activated=self.focus_search)

        # Кнопки
        self.button_row = QHBoxLayout()
        self.button_row.setContentsMargins(0, 0, 0, 0)
        self.button_row.setSpacing(6)

        self.add_btn = styled_button("Добавить", icon="➕", role="primary", shortcut="Ctrl+N")
        self.add_btn.clicked.connect(self.add_new)
        self.add_btn.setVisible(self.can_add)
        self.button_row.addWidget(self.add_btn)

        self.edit_btn = styled_button("Редактировать", icon="✏️", shortcut="F2")
        self.edit_btn.clicked.connect(self.edit_selected)
        self.edit_btn.setVisible(self.can_edit)
        self.button_row.addWidget(self.edit_btn)

        self.delete_btn = styled_button("Удалить", icon="🗑️", role="danger", shortcut="Del")
        self.delete_btn.clicked.connect(self.delete_selected)
        self.delete_btn.setVisible(self.can_delete)
        self.button_row.addWidget(self.delete_btn)

        self.refresh_btn = styled_button("Обновить", icon="🔄", tooltip="Перечитать список")
        self.refresh_btn.clicked.connect(self.refresh)
        self.button_row.addWidget(self.refresh_btn)

        self.export_btn = styled_button("Экспорт CSV", icon="📤")
        self.export_btn.clicked.connect(lambda: self.export_csv())
        self.button_row.addWidget(self.export_btn)

        self.button_row.addStretch()
        self.outer_layout.addLayout(self.button_row)

        # Состояние: загрузка / пусто / ошибка
        self.state_label = QLabel()
        self.state_label.setAlignment(Qt.AlignCenter)
        self.state_label.setStyleSheet("color: gray; padding: 12px;")
        self.state_label.hide()
        self.outer_layout.addWidget(self.state_label)

        # Таблица
        self.table = QTableView()
        self.proxy = QSortFilterProxyModel(self)
        self.proxy.setSortRole(Qt.UserRole)
        self.proxy.setDynamicSortFilter(True)
        self.table.setModel(self.proxy)
        self.table.setSortingEnabled(True)
        self.table.setEditTriggers(QTableView.NoEditTriggers)
        self.table.setSelectionBehavior(QTableView.SelectRows)
        self.table.setSelectionMode(QTableView.SingleSelection)
        self.table.setAlternatingRowColors(True)
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.Interactive)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.doubleClicked.connect(self._on_row_double_clicked)
        self.outer_layout.addWidget(self.table)

        if self.detail_view_class is not None:
            self.row_double_clicked.connect(self.open_detail)
        elif self.can_edit:
            self.row_double_clicked.connect(self.edit_item)

        if autoload:
            self.load_data()

    # ------------------------------------------------------------------
    # Загрузка и поиск
    # ------------------------------------------------------------------
    def load_data(self):
        return self.controller.load_data()

    def refresh(self):
        return self.load_data()

    def fetch_items(self) -> list:
        """Загрузить записи таблицы; потомки дополняют связанными данными."""
        return self.service.list_all()

    def focus_search(self) -> None:
        self.search_box.search_input.setFocus()
        self.search_box.search_input.selectAll()

    def get_search_text(self) -> str:
        return self.search_box.get_text()

    def on_search_changed(self, *_):
        self.controller.apply_filter()

    def show_loading(self) -> None:
        self.state_label.setText("⏳ Загрузка…")
        self.state_label.show()

    def show_load_error(self, exc: ApiError) -> None:
        self.state_label.setText(f"⚠️ {self.LOAD_ERROR_TEXT}")
        self.state_label.show()
        show_toast(exc.message or self.LOAD_ERROR_TEXT, "error", self)

    def update_state_label(self, count: int) -> None:
        if count:
            self.state_label.hide()
            return
        text = self.EMPTY_SEARCH_TEXT if self.get_search_text() else self.EMPTY_TEXT
        self.state_label.setText(text)
        self.state_label.show()

    # ------------------------------------------------------------------
    # Выбор строк
    # ------------------------------------------------------------------
    def _source_row(self, view_index):
        return self.proxy.mapToSource(view_index).row()

    def get_selected_object(self):
        if self.model is None:
            return None
        indexes = self.table.selectionModel().selectedRows()
        if not indexes:
            index = self.table.currentIndex()
            if not index.isValid():
                return None
            indexes = [index]
        return self.model.get_item(self._source_row(indexes[0]))

    def visible_items(self) -> list[Any]:
        """Записи в порядке отображения (после поиска и сортировки)."""
        if self.model is None:
            return []
        return [
            self.model.get_item(self._source_row(self.proxy.index(row, 0)))
            for row in range(self.proxy.rowCount())
        ]

    def _on_row_double_clicked(self, index):
        if self.model is None or not index.isValid():
            return
        self.row_double_clicked.emit(self.model.get_item(self._source_row(index)))

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------
    def create_form(self, instance=None):
        return self.form_class(instance, context=self.context, parent=self)

    def add_new(self):
        if not self.can_add:
            return
        form = self.create_form()
        if form.exec():
            self.refresh()

    def edit_selected(self, _=None):
        obj = self.get_selected_object()
        if obj is not None:
            self.edit_item(obj)

    def load_fresh(self, obj):
        """Перечитать запись с сервера перед открытием формы или карточки."""
        if self.service is None:
            return obj
        try:
            return self.service.get(obj.id)
        except ApiError as exc:
            show_toast(exc.message or f"Не удалось загрузить {self.ENTITY_NAME}", "error", self)
            return None

    def edit_item(self, obj):
        if not self.can_edit:
            return
        fresh = self.load_fresh(obj)
        if fresh is None:
            return
        form = self.create_form(fresh)
        if form.exec():
            self.refresh()

    def delete_question(self, obj) -> str:
        return f"Удалить {self.ENTITY_NAME} «{obj}»?"

    def delete_selected(self):
        if not self.can_delete:
            return
        obj = self.get_selected_object()
        if obj is None:
            return
        if not confirm(self.delete_question(obj), parent=self):
            return
        try:
            self.controller.delete_items([obj])
        except ApiError as exc:
            show_toast(exc.message or f"Не удалось удалить {self.ENTITY_NAME}", "error", self)
            return
        show_toast(f"Удалено: {obj}", "success", self)
        self.refresh()

    def open_detail(self, obj):
        if self.detail_view_class is None:
            return
        fresh = self.load_fresh(obj)
        if fresh is None:
            return
        dlg = self.detail_view_class(fresh, context=self.context, parent=self)
        dlg.exec()
        if getattr(dlg, "changed", False):
            self.refresh()

    # ------------------------------------------------------------------
    # Экспорт
    # ------------------------------------------------------------------
    def export_csv(self, path: str | None = None) -> int:
        items = self.visible_items()
        if not items:
            show_toast("Нет данных для экспорта", "info", self)
            return 0
        if path is None:
            path, _ = QFileDialog.getSaveFileName(
                self, "Экспорт в CSV", f"{self.settings_id}.csv", "CSV (*.csv)"
            )
            if not path:
                return 0
        columns = [(col.header, col.accessor) for col in self.COLUMNS]
        try:
            count = export_records_to_csv(path, items, columns)
        except OSError as exc:
            logger.exception("Ошибка экспорта в %s", path)
            show_toast(f"Не удалось сохранить файл: {exc}", "error", self)
            return 0
        show_toast(f"Экспортировано записей: {count}", "success", self)
        return count
