from PySide6.QtCore import Qt
from PySide6.QtGui import QShortcut
from PySide6.QtWidgets import QHBoxLayout, QLabel, QLineEdit, QWidget


class SearchBox(QWidget):
    """Строка поиска по загруженному списку и счётчик найденных записей."""

    def __init__(self, search_callback, parent=None, placeholder: str = "Поиск..."):
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText(placeholder)
        self.search_input.setClearButtonEnabled(True)
        self.search_input.textChanged.connect(search_callback)
        layout.addWidget(self.search_input, stretch=1)

        self.count_label = QLabel()
        self.count_label.setStyleSheet("color: gray;")
        self.count_label.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        layout.addWidget(self.count_label)

        # Esc внутри поля очищает поиск
        clear_shortcut = QShortcut("Esc", self.search_input, activated=self.search_input.clear)
        clear_shortcut.setContext(Qt.WidgetShortcut)

    def get_text(self) -> str:
        return self.search_input.text()

    def set_text(self, text: str):
        self.search_input.setText(text)

    def set_result_count(self, shown: int, total: int) -> None:
        if self.get_text():
            self.count_label.setText(f"Найдено: {shown} из {total}")
        else:
            self.count_label.setText(f"Всего: {total}")
