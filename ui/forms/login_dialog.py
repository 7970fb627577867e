import logging

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from infrastructure.api_client import ApiError
from services.validators import ValidationError, require_fields, validate_email
from ui import settings as ui_settings
from ui.common.styled_widgets import styled_button
from ui.common.toast import show_toast

logger = logging.getLogger(__name__)

LOGIN_LABELS = {"email": "Email", "password": "Пароль"}
REGISTER_LABELS = {
    "first_name": "Имя",
    "last_name": "Фамилия",
    "email": "Email",
    "password": "Пароль",
}


class LoginDialog(QDialog):
    """Вход менеджера и регистрация нового аккаунта."""

    def __init__(self, auth, parent=None):
        super().__init__(parent)
        self.auth = auth
        self.register_mode = False
        self.setWindowTitle("Вход в бэк-офис")
        self.setMinimumWidth(380)

        layout = QVBoxLayout(self)
        self.title_label = QLabel()
        self.title_label.setStyleSheet("font-size: 16pt; font-weight: bold;")
        self.title_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.title_label)

        # Поля регистрации
        self.register_box = QWidget()
        reg_form = QFormLayout(self.register_box)
        reg_form.setContentsMargins(0, 0, 0, 0)
        self.first_name_edit = QLineEdit()
        self.last_name_edit = QLineEdit()
        self.phone_edit = QLineEdit()
        reg_form.addRow("Имя *:", self.first_name_edit)
        reg_form.addRow("Фамилия *:", self.last_name_edit)
        reg_form.addRow("Телефон:", self.phone_edit)
        layout.addWidget(self.register_box)

        form = QFormLayout()
        self.email_edit = QLineEdit()
        self.email_edit.setPlaceholderText("manager@example.com")
        self.email_edit.setText(ui_settings.get_app_settings().get("last_email", ""))
        self.password_edit = QLineEdit()
        self.password_edit.setEchoMode(QLineEdit.Password)
        form.addRow("Email *:", self.email_edit)
        form.addRow("Пароль *:", self.password_edit)
        layout.addLayout(form)

        self.error_label = QLabel()
        self.error_label.setStyleSheet("color: #b91c1c;")
        self.error_label.setWordWrap(True)
        self.error_label.hide()
        layout.addWidget(self.error_label)

        btns = QHBoxLayout()
        self.submit_btn = styled_button("Войти", icon="🔑", role="primary")
        self.submit_btn.setDefault(True)
        self.submit_btn.clicked.connect(self.submit)
        self.switch_btn = QPushButton()
        self.switch_btn.setFlat(True)
        self.switch_btn.clicked.connect(self.toggle_mode)
        btns.addWidget(self.switch_btn)
        btns.addStretch()
        btns.addWidget(self.submit_btn)
        layout.addLayout(btns)

        self._apply_mode()

    def toggle_mode(self):
        self.register_mode = not self.register_mode
        self._apply_mode()

    def _apply_mode(self):
        self.register_box.setVisible(self.register_mode)
        self.error_label.hide()
        if self.register_mode:
            self.title_label.setText("Регистрация менеджера")
            self.switch_btn.setText("Уже есть аккаунт? Войти")
        else:
            self.title_label.setText("Вход")
            self.switch_btn.setText("Нет аккаунта? Зарегистрироваться")
        self.submit_btn.setAccessibleName(
            "Зарегистрироваться" if self.register_mode else "Войти"
        )

    def collect_data(self) -> dict:
        data = {
            "email": self.email_edit.text().strip(),
            "password": self.password_edit.text(),
        }
        if self.register_mode:
            data.update(
                first_name=self.first_name_edit.text().strip(),
                last_name=self.last_name_edit.text().strip(),
                phone=self.phone_edit.text().strip() or None,
            )
        return data

    def show_error(self, message: str):
        self.error_label.setText(message)
        self.error_label.show()
        show_toast(message, "error", self)

    def submit(self):
        data = self.collect_data()
        try:
            require_fields(data, REGISTER_LABELS if self.register_mode else LOGIN_LABELS)
            validate_email(data["email"])
            if self.register_mode:
                payload = {k: v for k, v in data.items() if v is not None}
                manager = self.auth.register(payload)
            else:
                manager = self.auth.login(data["email"], data["password"])
        except ValidationError as exc:
            self.show_error(str(exc))
            return
        except ApiError as exc:
            logger.error("Не удалось войти: %s", exc)
            fallback = "Не удалось зарегистрироваться" if self.register_mode else "Не удалось войти"
            self.show_error(exc.message or fallback)
            return

        app_settings = ui_settings.get_app_settings()
        app_settings["last_email"] = data["email"]
        ui_settings.set_app_settings(app_settings)
        show_toast(f"Добро пожаловать, {manager.display_name}!", "success")
        self.accept()
