"""Всплывающие уведомления, исчезающие сами через несколько секунд."""

from __future__ import annotations

import logging

from PySide6.QtCore import QPoint, Qt, QTimer
from PySide6.QtWidgets import QApplication, QLabel, QWidget

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 4000
_MARGIN = 24

_LEVEL_STYLES = {
    "info": ("#1e3a8a", "#dbeafe", "ℹ️"),
    "success": ("#14532d", "#dcfce7", "✅"),
    "error": ("#7f1d1d", "#fee2e2", "❌"),
}


class Toast(QLabel):
    def __init__(
        self,
        message: str,
        level: str = "info",
        parent: QWidget | None = None,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
    ):
        super().__init__(parent)
        fg, bg, icon = _LEVEL_STYLES.get(level, _LEVEL_STYLES["info"])
        self.level = level
        self.message = message
        self.setText(f"{icon} {message}")
        self.setWordWrap(True)
        self.setMaximumWidth(420)
        self.setWindowFlags(Qt.ToolTip | Qt.FramelessWindowHint)
        self.setAttribute(Qt.WA_DeleteOnClose)
        self.setAttribute(Qt.WA_ShowWithoutActivating)
        self.setStyleSheet(
            f"color: {fg}; background: {bg}; border: 1px solid {fg};"
            "border-radius: 6px; padding: 10px 14px; font-size: 10pt;"
        )
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self.close)
        self._timer.start(timeout_ms)

    def show_near(self, anchor: QWidget | None) -> None:
        self.adjustSize()
        window = anchor.window() if anchor is not None else None
        if window is not None and window.isVisible():
            geom = window.frameGeometry()
            bottom_right = geom.bottomRight()
        else:
            screen = QApplication.primaryScreen()
            if screen is None:
                self.show()
                return
            bottom_right = screen.availableGeometry().bottomRight()
        self.move(
            bottom_right - QPoint(self.width() + _MARGIN, self.height() + _MARGIN)
        )
        self.show()


def show_toast(
    message: str,
    level: str = "info",
    parent: QWidget | None = None,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
) -> Toast:
    """Показать уведомление в правом нижнем углу окна *parent*."""
    log = logger.error if level == "error" else logger.info
    log("🔔 %s", message)
    toast = Toast(message, level, timeout_ms=timeout_ms)
    toast.show_near(parent)
    return toast
