"""ui/base/base_edit_form.py – универсальная форма создания/редактирования.

Потомок описывает поля в :meth:`build_form` через ``add_*`` и указывает
сервис. Ошибки проверки и ошибки сервера показываются уведомлением,
а диалог остаётся открытым.
"""

from __future__ import annotations

import logging

from PySide6.QtWidgets import (
    QComboBox,
    QDateEdit,
    QDialog,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPlainTextEdit,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from infrastructure.api_client import ApiError
from services.dto import clean_payload
from services.validators import (
    ValidationError,
    parse_decimal,
    parse_int,
    require_fields,
    validate_email,
)
from ui.common.combo_helpers import select_combo_data
from ui.common.date_utils import (
    create_optional_date_edit,
    get_date_or_none,
    set_optional_date,
)
from ui.common.message_boxes import confirm
from ui.common.styled_widgets import styled_button
from ui.common.toast import show_toast
from utils.screen_utils import get_scaled_size

logger = logging.getLogger(__name__)


class TwoColumnFormLayout:
    """Менеджер строк, раскладывающий поля формы по двум колонкам."""

    def __init__(self, container: QWidget):
        self.container = container
        self.grid = QGridLayout(container)
        self.grid.setContentsMargins(0, 0, 0, 0)
        self.grid.setColumnStretch(1, 1)
        self.grid.setColumnStretch(3, 1)
        self.grid.setHorizontalSpacing(24)
        self.rows: list[tuple[QWidget, QWidget]] = []

    def _normalize_label(self, label: QLabel | str | QWidget) -> QWidget:
        if isinstance(label, QWidget):
            return label
        text = str(label)
        if text and not text.endswith(":"):
            text = text + ":"
        return QLabel(text, parent=self.container)

    def addRow(self, label: QLabel | str | QWidget, field: QWidget) -> None:
        label_widget = self._normalize_label(label)
        index = len(self.rows)
        self.rows.append((label_widget, field))
        column = index % 2
        row = index // 2
        self.grid.addWidget(label_widget, row, column * 2)
        self.grid.addWidget(field, row, column * 2 + 1)


class BaseEditForm(QDialog):
    """Форма записи ресурса с проверкой обязательных полей."""

    SERVICE_NAME: str = ""
    ENTITY_NAME = "запись"

    def __init__(self, instance=None, *, context=None, parent=None):
        super().__init__(parent)
        if context is None:
            from core.app_context import get_app_context

            context = get_app_context()
        self.context = context
        self.instance = instance
        self.service = getattr(context, self.SERVICE_NAME) if self.SERVICE_NAME else None
        self.fields: dict[str, QWidget] = {}
        self.field_kinds: dict[str, str] = {}
        self.required: dict[str, str] = {}
        self.saved_instance = None
        self._dirty = False

        self.setWindowTitle(
            f"Редактировать: {self.ENTITY_NAME}"
            if instance is not None
            else f"Добавить: {self.ENTITY_NAME}"
        )
        self.setMinimumWidth(640)

        self.layout = QVBoxLayout(self)
        self.scroll_area = QScrollArea(self)
        self.scroll_area.setWidgetResizable(True)
        self.layout.addWidget(self.scroll_area)

        self.form_widget = QWidget()
        self.scroll_area.setWidget(self.form_widget)
        self.form_layout = TwoColumnFormLayout(self.form_widget)

        self.build_form()
        if self.instance is not None:
            self.fill_from_obj(self.instance)
        self._create_button_panel()
        self.adjustSize()
        self.resize(get_scaled_size(720, 420, ratio=0.5))
        self._dirty = False

    # ------------------------------------------------------------------
    # UI helpers
    # ------------------------------------------------------------------
    def _create_button_panel(self):
        btns = QHBoxLayout()
        self.save_btn = styled_button(
            "Сохранить", icon="💾", role="primary", shortcut="Ctrl+S"
        )
        self.save_btn.setDefault(True)
        self.cancel_btn = styled_button("Отмена", icon="❌", shortcut="Esc")

        self.save_btn.clicked.connect(self.save)
        self.cancel_btn.clicked.connect(self.reject)
        btns.addStretch()
        btns.addWidget(self.save_btn)
        btns.addWidget(self.cancel_btn)
        self.layout.addLayout(btns)

    def closeEvent(self, event):
        if self._dirty:
            if not confirm("Есть несохранённые изменения. Закрыть без сохранения?"):
                event.ignore()
                return
        super().closeEvent(event)

    def _mark_dirty(self, *_):
        self._dirty = True

    # ------------------------------------------------------------------
    # Построение полей
    # ------------------------------------------------------------------
    def build_form(self):
        raise NotImplementedError

    def add_field(
        self, name: str, label: str, widget: QWidget, *, kind="text", required=False
    ) -> QWidget:
        self.fields[name] = widget
        self.field_kinds[name] = kind
        if required:
            self.required[name] = label
            label = f"{label} *"
        self.form_layout.addRow(label, widget)

        if isinstance(widget, QLineEdit):
            widget.textChanged.connect(self._mark_dirty)
        elif isinstance(widget, QPlainTextEdit):
            widget.textChanged.connect(self._mark_dirty)
        elif isinstance(widget, QComboBox):
            widget.currentIndexChanged.connect(self._mark_dirty)
        elif isinstance(widget, QDateEdit):
            widget.dateChanged.connect(self._mark_dirty)
        return widget

    def add_line(self, name, label, *, required=False, kind="text", placeholder=""):
        widget = QLineEdit()
        if placeholder:
            widget.setPlaceholderText(placeholder)
        if kind == "password":
            widget.setEchoMode(QLineEdit.Password)
        return self.add_field(name, label, widget, kind=kind, required=required)

    def add_text(self, name, label, *, required=False):
        widget = QPlainTextEdit()
        widget.setMinimumHeight(70)
        return self.add_field(name, label, widget, required=required)

    def add_date(self, name, label, *, required=False):
        return self.add_field(
            name, label, create_optional_date_edit(), kind="date", required=required
        )

    def add_combo(self, name, label, combo: QComboBox, *, required=False):
        return self.add_field(name, label, combo, kind="combo", required=required)

    def load_lookup(self, fetch, what: str) -> list:
        """Загрузить справочник для выпадающего списка; при ошибке пустой список."""
        try:
            return list(fetch())
        except ApiError as exc:
            logger.error("Не удалось загрузить %s: %s", what, exc)
            show_toast(f"Не удалось загрузить {what}: {exc.message}", "error", self)
            return []

    # ------------------------------------------------------------------
    # Fill form from obj
    # ------------------------------------------------------------------
    def fill_from_obj(self, obj):
        for name, widget in self.fields.items():
            value = getattr(obj, name, None)
            if isinstance(widget, QLineEdit):
                widget.setText("" if value is None else str(value))
            elif isinstance(widget, QPlainTextEdit):
                widget.setPlainText("" if value is None else str(value))
            elif isinstance(widget, QComboBox):
                select_combo_data(widget, value)
            elif isinstance(widget, QDateEdit):
                set_optional_date(widget, value)

    # ------------------------------------------------------------------
    # Collect & Save
    # ------------------------------------------------------------------
    def collect_data(self) -> dict:
        """Собирает значения виджетов и приводит их к типам полей.

        Raises:
            ValidationError: Если число или email введены некорректно.
        """
        data: dict = {}
        for name, widget in self.fields.items():
            kind = self.field_kinds.get(name, "text")
            label = self.required.get(name) or name

            if isinstance(widget, QLineEdit):
                value = widget.text().strip() or None
                if kind == "decimal":
                    value = parse_decimal(value, label)
                elif kind == "int":
                    value = parse_int(value, label)
                elif kind == "email":
                    value = validate_email(value)
            elif isinstance(widget, QPlainTextEdit):
                value = widget.toPlainText().strip() or None
            elif isinstance(widget, QComboBox):
                value = widget.currentData()
            elif isinstance(widget, QDateEdit):
                value = get_date_or_none(widget)
            else:
                value = None
            data[name] = value
        return data

    def validate(self, data: dict) -> None:
        require_fields(data, self.required)

    def save(self):
        try:
            data = self.collect_data()
            self.validate(data)
            saved = self.save_data(data)
        except ValidationError as exc:
            show_toast(str(exc), "error", self)
            return
        except ApiError as exc:
            logger.error("❌ Ошибка при сохранении в %s: %s", type(self).__name__, exc)
            show_toast(exc.message or f"Не удалось сохранить: {self.ENTITY_NAME}", "error", self)
            return

        self.saved_instance = saved
        self._dirty = False
        show_toast(self.success_message(), "success", self.parentWidget())
        self.accept()

    def success_message(self) -> str:
        if self.instance is not None:
            return f"Изменения сохранены: {self.ENTITY_NAME}"
        return f"Создано: {self.ENTITY_NAME}"

    def save_data(self, data: dict):
        if self.instance is not None:
            return self.service.update(self.instance.id, data)
        return self.service.create(clean_payload(data))
