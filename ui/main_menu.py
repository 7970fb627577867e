from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QMenuBar, QMessageBox


class MainMenu(QMenuBar):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.refresh_callback = None  # 🔄 для пункта "Обновить"

        # 🔸 Файл
        file_menu = self.addMenu("Файл")

        refresh_action = QAction("🔄 Обновить", self)
        refresh_action.setShortcut(QKeySequence("F5"))
        refresh_action.triggered.connect(self.on_refresh_triggered)
        file_menu.addAction(refresh_action)

        export_action = QAction("📤 Экспорт в CSV...", self)
        export_action.setShortcut(QKeySequence("Ctrl+E"))
        export_action.triggered.connect(self.export_to_csv)
        file_menu.addAction(export_action)

        file_menu.addSeparator()

        logout_action = QAction("🚪 Выйти из аккаунта", self)
        logout_action.triggered.connect(self.logout)
        file_menu.addAction(logout_action)

        exit_action = QAction("Выход", self)
        exit_action.setShortcut(QKeySequence("Ctrl+Q"))
        exit_action.triggered.connect(self.close_app)
        file_menu.addAction(exit_action)

        # 🔸 Справка
        help_menu = self.addMenu("Справка")

        about_action = QAction("ℹ️ О программе", self)
        about_action.triggered.connect(self.show_about)
        help_menu.addAction(about_action)

    def _forward(self, name: str):
        mw = self.parent()
        if mw is not None and hasattr(mw, name):
            getattr(mw, name)()

    def export_to_csv(self):
        self._forward("export_current_view")

    def logout(self):
        self._forward("logout")

    def close_app(self):
        self.parent().close()

    def show_about(self):
        QMessageBox.about(
            self,
            "О программе",
            "ISOFOS — бэк-офис строительной компании\nВерсия 1.0\n\n"
            "Проекты, клиенты, сотрудники, поставщики, материалы и склад.",
        )

    def register_refresh_callback(self, func):
        """Позволяет зарегистрировать обработчик обновления."""
        self.refresh_callback = func

    def on_refresh_triggered(self):
        if self.refresh_callback:
            self.refresh_callback()
