from __future__ import annotations

from typing import Any, Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QComboBox, QCompleter


def populate_combo(
    combo: QComboBox,
    items: list,
    label_func: Callable[[Any], str] = str,
    id_attr: str = "id",
    placeholder: str | None = None,
) -> None:
    """Заполняет существующий QComboBox элементами *items*.

    :param combo: уже созданный QComboBox.
    :param items: записи или значения.
    :param label_func: функция, превращающая элемент в отображаемую строку.
    :param id_attr: атрибут объекта, который кладётся в userData.
    :param placeholder: необязательный элемент‑заглушка (первым, с данными ``None``).
    """
    combo.clear()
    if placeholder:
        combo.addItem(placeholder, None)
    for obj in items:
        combo.addItem(label_func(obj), getattr(obj, id_attr, obj))


def setup_completer(combo: QComboBox) -> None:
    """Делает выпадающий список ищущим по подстроке (без учёта регистра)."""
    if not combo.isEditable():
        combo.setEditable(True)
    combo.setInsertPolicy(QComboBox.NoInsert)

    completer = QCompleter(combo.model(), combo)
    completer.setCompletionMode(QCompleter.PopupCompletion)
    completer.setFilterMode(Qt.MatchContains)
    completer.setCaseSensitivity(Qt.CaseInsensitive)
    combo.setCompleter(completer)


def create_entity_combobox(
    items: list,
    label_func: Callable[[Any], str] = str,
    id_attr: str = "id",
    placeholder: str | None = None,
    searchable: bool = True,
) -> QComboBox:
    """Создаёт QComboBox со списком записей и поиском по подстроке."""
    combo = QComboBox()
    populate_combo(combo, items, label_func, id_attr, placeholder)
    if searchable:
        setup_completer(combo)
    return combo


def create_choice_combobox(
    choices: dict, placeholder: str | None = None
) -> QComboBox:
    """QComboBox из словаря ``значение → подпись``."""
    combo = QComboBox()
    if placeholder:
        combo.addItem(placeholder, None)
    for value, label in choices.items():
        combo.addItem(label, value)
    return combo


def select_combo_data(combo: QComboBox, value) -> bool:
    """Выбрать элемент с данными *value*; идентификаторы сравниваются как строки."""
    if value is None:
        return False
    idx = combo.findData(value)
    if idx < 0:
        for i in range(combo.count()):
            data = combo.itemData(i)
            if data is not None and str(data) == str(value):
                idx = i
                break
    if idx >= 0:
        combo.setCurrentIndex(idx)
        return True
    return False
