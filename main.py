import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication

from config import Settings, get_settings
from core.app_context import AppContext, get_app_context
from database.init import init_from_path
from ui.forms.login_dialog import LoginDialog
from ui.main_window import MainWindow
from utils.logging_config import setup_logging

__all__ = ["main", "run_session"]


def run_session(app: QApplication, context: AppContext) -> int:
    """Цикл «вход → главное окно», повторяется после выхода из аккаунта."""

    auth = context.auth
    auth.restore()
    while True:
        if not auth.is_authenticated:
            dialog = LoginDialog(auth)
            if not dialog.exec():
                return 0

        window = MainWindow(context=context)
        window.show()
        code = app.exec()
        if not window.logged_out:
            return code


def main(settings: Settings | None = None) -> int:
    """Запускает настольный клиент бэк-офиса."""

    context = AppContext(settings) if settings is not None else get_app_context()
    settings = context.settings
    init_from_path(settings.storage_path)
    setup_logging(settings)
    logger = logging.getLogger(__name__)
    logger.info("🚀 Запуск, API: %s", settings.api_base_url)

    # ───── GUI ─────
    app = QApplication.instance() or QApplication(sys.argv)

    style_path = Path(__file__).resolve().parent / "resources" / "style.qss"
    try:
        app.setStyleSheet(style_path.read_text(encoding="utf-8"))
    except OSError as e:
        logger.warning("Не удалось загрузить стиль: %s", e)

    return run_session(app, context)


if __name__ == "__main__":
    raise SystemExit(main())
