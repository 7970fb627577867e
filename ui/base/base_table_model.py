import datetime
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Callable

from PySide6.QtCore import QAbstractTableModel, QDate, Qt

from utils.money import format_money
from utils.time_utils import format_date

logger = logging.getLogger(__name__)

TEXT_LIMIT = 40


@dataclass(frozen=True)
class Column:
    """Колонка таблицы: заголовок, способ получить значение и вид форматирования.

    ``kind`` — ``text``, ``date``, ``money`` или ``number``.
    """

    header: str
    accessor: str | Callable[[Any], Any]
    kind: str = "text"

    def value(self, obj):
        if callable(self.accessor):
            return self.accessor(obj)
        if isinstance(obj, dict):
            return obj.get(self.accessor)
        return getattr(obj, self.accessor, None)


class BaseTableModel(QAbstractTableModel):
    def __init__(self, objects: list, columns: list[Column], parent=None):
        super().__init__(parent)
        self.objects = list(objects)
        self.columns = list(columns)

    def rowCount(self, parent=None):
        return len(self.objects)

    def columnCount(self, parent=None):
        return len(self.columns)

    def headerData(self, section, orientation, role=Qt.DisplayRole):
        if role != Qt.DisplayRole:
            return None
        if orientation == Qt.Horizontal:
            if 0 <= section < len(self.columns):
                return self.columns[section].header
            return None
        return super().headerData(section, orientation, role)

    def get_item(self, row):
        return self.objects[row]

    def _value(self, obj, column: Column):
        try:
            return column.value(obj)
        except (AttributeError, KeyError, TypeError) as e:
            logger.warning(
                "⚠️ Ошибка при получении «%s» у объекта %s: %s", column.header, obj, e
            )
            return None

    def data(self, index, role=Qt.DisplayRole):
        if not index.isValid():
            return None

        obj = self.objects[index.row()]
        column = self.columns[index.column()]
        value = self._value(obj, column)

        # ─── роль сортировки ───────────────────────────
        if role == Qt.UserRole:
            if isinstance(value, datetime.date):
                return QDate(value.year, value.month, value.day)
            if isinstance(value, Decimal):
                return float(value)
            if value is None:
                return ""
            return value

        # ─── текст в ячейке ────────────────────────────
        if role == Qt.DisplayRole:
            if column.kind == "money":
                return format_money(value)
            if column.kind == "date" or isinstance(
                value, (datetime.date, datetime.datetime)
            ):
                return format_date(value)
            if isinstance(value, str) and len(value) > TEXT_LIMIT:
                return self.shorten_text(value)
            return "—" if value in (None, "") else str(value)

        # ─── подсказка при наведении ───────────────────
        if role == Qt.ToolTipRole and isinstance(value, str) and len(value) > TEXT_LIMIT:
            return value

        # ─── выравнивание ──────────────────────────────
        if role == Qt.TextAlignmentRole:
            if column.kind in ("money", "number"):
                return Qt.AlignRight | Qt.AlignVCenter

        return None

    def shorten_text(self, text, limit=TEXT_LIMIT):
        return text if len(text) <= limit else text[:limit] + "…"

    def flags(self, index):
        if not index.isValid():
            return Qt.ItemIsEnabled
        return Qt.ItemIsSelectable | Qt.ItemIsEnabled
