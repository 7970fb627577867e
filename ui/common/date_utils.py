"""Помощники для необязательных дат в ``QDateEdit``."""

from __future__ import annotations

from datetime import date

from PySide6.QtCore import QDate, QEvent, QObject, Qt
from PySide6.QtWidgets import QDateEdit

# Значение, используемое в QDateEdit как «пустая» дата.
OPTIONAL_DATE_MIN = QDate(2000, 1, 1)


def get_date_or_none(widget: QDateEdit | None) -> date | None:
    if widget is None:
        return None

    qd = widget.date()
    if not qd.isValid():
        return None
    min_date = widget.minimumDate()
    if min_date.isValid() and qd == min_date:
        return None
    return qd.toPython()


def set_optional_date(widget: QDateEdit, value: date | None) -> None:
    if value is None:
        clear_optional_date(widget)
        return
    widget.setDate(QDate(value.year, value.month, value.day))


def clear_optional_date(widget: QDateEdit | None) -> None:
    """Сбрасывает QDateEdit к его минимальной дате."""
    if widget is None:
        return
    widget.setDate(widget.minimumDate())


class _ClearOnDelete(QObject):
    def __init__(self, widget: QDateEdit):
        super().__init__(widget)
        self._widget = widget
        widget.installEventFilter(self)
        if widget.lineEdit() is not None:
            widget.lineEdit().installEventFilter(self)

    def eventFilter(self, obj, event):  # noqa: N802 (Qt signature)
        if event.type() == QEvent.KeyPress and event.key() in (
            Qt.Key_Delete,
            Qt.Key_Backspace,
        ):
            clear_optional_date(self._widget)
            event.accept()
            return True
        return super().eventFilter(obj, event)


def create_optional_date_edit() -> QDateEdit:
    """QDateEdit, где минимальная дата означает «пусто» (очистка клавишей Del)."""
    widget = QDateEdit()
    widget.setCalendarPopup(True)
    widget.setDisplayFormat("dd.MM.yyyy")
    widget.setSpecialValueText("—")
    widget.setMinimumDate(OPTIONAL_DATE_MIN)
    widget.setDate(widget.minimumDate())
    widget._clear_helper = _ClearOnDelete(widget)
    return widget


__all__ = [
    "OPTIONAL_DATE_MIN",
    "clear_optional_date",
    "create_optional_date_edit",
    "get_date_or_none",
    "set_optional_date",
]
