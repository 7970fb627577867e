from PySide6.QtCore import Qt
from PySide6.QtGui import QKeySequence
from PySide6.QtWidgets import QFrame, QLabel, QPushButton, QSizePolicy, QVBoxLayout


def styled_button(
    label: str, icon: str = "", tooltip: str = "", shortcut: str = "", role: str = None
) -> QPushButton:
    """
    Создаёт кнопку с иконкой, подсказкой и подписью горячей клавиши.

    Parameters
    ----------
    label : str
        Текст кнопки
    icon : str
        Эмоджи перед текстом
    tooltip : str
        Всплывающая подсказка
    shortcut : str
        Горячая клавиша, например: "Ctrl+S"
    role : str
        Визуальная роль ("primary", "danger")
    """
    btn = QPushButton()
    layout = QVBoxLayout(btn)
    layout.setContentsMargins(0, 0, 0, 0)
    layout.setSpacing(0)

    text_label = QLabel(f"{icon} {label}".strip())
    text_label.setAlignment(Qt.AlignCenter)
    text_label.setSizePolicy(QSizePolicy.Minimum, QSizePolicy.Fixed)
    layout.addWidget(text_label)
    btn.setAccessibleName(label)

    width = text_label.fontMetrics().horizontalAdvance(text_label.text())

    if shortcut:
        btn.setShortcut(QKeySequence(shortcut))
        hint = QLabel(shortcut)
        hint.setAlignment(Qt.AlignCenter)
        hint.setStyleSheet("color: gray; font-size: 8pt")
        hint.setSizePolicy(QSizePolicy.Minimum, QSizePolicy.Fixed)
        layout.addWidget(hint)
        width = max(width, hint.fontMetrics().horizontalAdvance(shortcut))

    if tooltip:
        btn.setToolTip(tooltip)
    if role:
        btn.setProperty("role", role)

    btn.setMinimumHeight(40 if shortcut else 30)
    btn.setMinimumWidth(width + 20)
    btn.setSizePolicy(QSizePolicy.MinimumExpanding, QSizePolicy.Fixed)
    return btn


class StatCard(QFrame):
    """Карточка дашборда: подпись и крупное число."""

    def __init__(self, title: str, icon: str = "", parent=None):
        super().__init__(parent)
        self.setFrameShape(QFrame.StyledPanel)
        self.setStyleSheet(
            "StatCard { background: palette(base); border-radius: 8px; }"
        )
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 12, 16, 12)

        self.title_label = QLabel(f"{icon} {title}".strip())
        self.title_label.setStyleSheet("color: gray;")
        layout.addWidget(self.title_label)

        self.value_label = QLabel("—")
        self.value_label.setStyleSheet("font-size: 20pt; font-weight: bold;")
        layout.addWidget(self.value_label)

    def set_value(self, value) -> None:
        self.value_label.setText("—" if value is None else str(value))

    def value_text(self) -> str:
        return self.value_label.text()
