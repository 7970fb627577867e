import base64
import binascii
import logging

from PySide6.QtCore import QByteArray, Qt
from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QScrollArea,
    QSizePolicy,
    QSplitter,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from infrastructure.api_client import ApiError
from ui import settings as ui_settings
from ui.common.message_boxes import confirm
from ui.common.styled_widgets import styled_button
from ui.common.toast import show_toast
from utils.screen_utils import get_scaled_size

logger = logging.getLogger(__name__)


class BaseDetailView(QDialog):
    """Карточка записи: ключевые поля слева, вкладки справа.

    ``changed`` выставляется после редактирования или удаления, чтобы
    таблица-владелец перечитала список.
    """

    SETTINGS_KEY: str | None = None
    SERVICE_NAME: str = ""
    FORM_CLASS = None
    ENTITY_NAME = "запись"

    def __init__(self, instance, *, context=None, title=None, parent=None):
        super().__init__(parent)
        if context is None:
            from core.app_context import get_app_context

            context = get_app_context()
        self.context = context
        self.instance = instance
        self.service = getattr(context, self.SERVICE_NAME) if self.SERVICE_NAME else None
        self.changed = False

        self.setWindowTitle(title or f"{self.ENTITY_NAME.capitalize()} — подробнее")
        self.resize(get_scaled_size(1000, 640))
        self.setMinimumSize(760, 520)

        self.layout = QVBoxLayout(self)

        self.splitter = QSplitter(Qt.Horizontal)
        self.splitter.setChildrenCollapsible(False)
        self.layout.addWidget(self.splitter, stretch=1)

        # ───── Левая колонка ─────
        self.left_panel = QWidget()
        self.left_panel.setMinimumWidth(260)
        left_layout = QVBoxLayout(self.left_panel)
        left_layout.setContentsMargins(0, 0, 0, 0)
        left_layout.setSpacing(12)

        self.title_label = QLabel(self.get_title())
        self.title_label.setStyleSheet("font-size: 20px; font-weight: bold;")
        self.title_label.setWordWrap(True)
        left_layout.addWidget(self.title_label)

        self.key_facts_scroll = QScrollArea()
        self.key_facts_scroll.setWidgetResizable(True)
        self.key_facts_widget = QWidget()
        self.key_facts_layout = QVBoxLayout(self.key_facts_widget)
        self.key_facts_layout.setContentsMargins(0, 0, 0, 0)
        self.key_facts_layout.setSpacing(6)
        self.key_facts_scroll.setWidget(self.key_facts_widget)
        left_layout.addWidget(self.key_facts_scroll, stretch=1)

        self.splitter.addWidget(self.left_panel)

        # ───── Правая колонка ─────
        self.tabs = QTabWidget()
        self.tabs.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.splitter.addWidget(self.tabs)
        self.splitter.setStretchFactor(0, 0)
        self.splitter.setStretchFactor(1, 1)

        self.populate_key_facts()
        self.build_tabs()

        # ───── Кнопки ─────
        btns = QHBoxLayout()
        self.edit_btn = styled_button("Редактировать", icon="✏️", shortcut="F2")
        self.delete_btn = styled_button("Удалить", icon="🗑️", role="danger", shortcut="Del")
        self.edit_btn.clicked.connect(self.edit)
        self.delete_btn.clicked.connect(self.delete)
        self.edit_btn.setVisible(self.FORM_CLASS is not None)
        btns.addStretch()
        btns.addWidget(self.edit_btn)
        btns.addWidget(self.delete_btn)
        self.layout.addLayout(btns)

        self._restore_window_geometry()
        self._apply_default_splitter_sizes(self.width())

    # ------------------------------------------------------------------
    # Содержимое
    # ------------------------------------------------------------------
    def get_title(self) -> str:
        """Заголовок карточки (по умолчанию строковое представление объекта)."""
        return str(self.instance)

    def get_key_facts(self) -> list[tuple[str, object]]:
        return []

    def populate_key_facts(self):
        self._clear_layout(self.key_facts_layout)
        facts = self.get_key_facts()
        if not facts:
            self.key_facts_layout.addWidget(QLabel("Нет информации."))
        for label, value in facts:
            text = "—" if value in (None, "") else str(value)
            fact = QLabel(f"<b>{label}:</b> {text}")
            fact.setTextFormat(Qt.RichText)
            fact.setWordWrap(True)
            self.key_facts_layout.addWidget(fact)
        self.key_facts_layout.addStretch()

    def build_tabs(self):
        """Потомки добавляют вкладки через :meth:`add_tab`."""

    def add_tab(self, widget: QWidget, title: str):
        self.tabs.addTab(widget, title)

    def reload_instance(self) -> None:
        if self.service is None:
            return
        try:
            self.instance = self.service.get(self.instance.id)
        except ApiError as exc:
            show_toast(exc.message, "error", self)
            return
        self.title_label.setText(self.get_title())
        self.populate_key_facts()

    # ------------------------------------------------------------------
    # Действия
    # ------------------------------------------------------------------
    def edit(self):
        if self.FORM_CLASS is None:
            return
        form = self.FORM_CLASS(self.instance, context=self.context, parent=self)
        if form.exec():
            self.changed = True
            self.reload_instance()

    def delete(self):
        if self.service is None:
            return
        if not confirm(f"Удалить {self.ENTITY_NAME} «{self.instance}»?", parent=self):
            return
        try:
            self.service.delete(self.instance.id)
        except ApiError as exc:
            show_toast(exc.message, "error", self)
            return
        self.changed = True
        show_toast(f"Удалено: {self.instance}", "success", self.parentWidget())
        self.accept()

    # ------------------------------------------------------------------
    # Геометрия окна
    # ------------------------------------------------------------------
    def closeEvent(self, event):
        self._save_window_geometry()
        super().closeEvent(event)

    def done(self, result):
        self._save_window_geometry()
        super().done(result)

    def _apply_default_splitter_sizes(self, total_width: int | None = None) -> None:
        total = total_width or self.width() or 1
        left = int(total * 0.32)
        self.splitter.setSizes([left, max(1, total - left)])

    def _restore_window_geometry(self) -> None:
        key = self.get_settings_key()
        geometry_b64 = ui_settings.get_window_settings(key).get("geometry")
        if not geometry_b64:
            return
        try:
            geometry_bytes = base64.b64decode(geometry_b64)
        except (ValueError, binascii.Error, TypeError):
            logger.warning("Некорректные сохранённые размеры окна %s", key)
            return
        if geometry_bytes and not self.restoreGeometry(QByteArray(geometry_bytes)):
            logger.warning("Не удалось применить сохранённую геометрию окна %s", key)

    def _save_window_geometry(self) -> None:
        key = self.get_settings_key()
        settings = ui_settings.get_window_settings(key)
        settings["geometry"] = base64.b64encode(bytes(self.saveGeometry())).decode("ascii")
        ui_settings.set_window_settings(key, settings)

    def get_settings_key(self) -> str:
        return self.SETTINGS_KEY or type(self).__name__

    @staticmethod
    def _clear_layout(layout: QVBoxLayout) -> None:
        while layout.count():
            item = layout.takeAt(0)
            widget = item.widget()
            if widget:
                widget.deleteLater()
