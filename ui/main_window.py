import base64
import logging

from PySide6.QtCore import QByteArray, Qt
from PySide6.QtWidgets import QLabel, QMainWindow, QStatusBar, QTabWidget

from core.app_context import AppContext, get_app_context
from ui import settings as ui_settings
from ui.common.message_boxes import confirm
from ui.main_menu import MainMenu
from ui.views.assignment_view import AssignmentView
from ui.views.client_table_view import ClientTableView
from ui.views.dashboard_tab import DashboardTab
from ui.views.employee_table_view import EmployeeTableView
from ui.views.inventory_table_view import InventoryTableView
from ui.views.material_table_view import MaterialTableView
from ui.views.project_table_view import ProjectTableView
from ui.views.reports_tab import ReportsTab
from ui.views.supplier_table_view import SupplierTableView
from ui.views.warehouse_table_view import WarehouseTableView
from utils.screen_utils import get_scaled_size

logger = logging.getLogger(__name__)


def apply_main_window_settings(settings: dict, window: QMainWindow, tab_widget) -> None:
    geom = settings.get("geometry")
    if geom:
        try:
            window.restoreGeometry(QByteArray(base64.b64decode(geom)))
        except (ValueError, TypeError):
            logger.warning("Не удалось восстановить геометрию окна")
    idx = settings.get("last_tab")
    try:
        idx_int = int(idx) if idx is not None else None
    except (TypeError, ValueError):
        idx_int = None
    if idx_int is not None and 0 <= idx_int < tab_widget.count():
        tab_widget.setCurrentIndex(idx_int)
    if settings.get("open_maximized"):
        window.setWindowState(window.windowState() | Qt.WindowMaximized)


class MainWindow(QMainWindow):
    """Главное окно: вкладки разделов бэк-офиса.

    Вкладки загружают данные при первом открытии. После выхода из
    аккаунта окно закрывается, а точка входа снова показывает вход.
    """

    def __init__(self, *, context: AppContext | None = None):
        super().__init__()
        self._context = context or get_app_context()
        self.logged_out = False
        self.setWindowTitle("ISOFOS — бэк-офис")
        self.resize(get_scaled_size(1400, 900, ratio=0.9))
        self.setMinimumSize(900, 600)

        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
        self.manager_label = QLabel()
        self.status_bar.addPermanentWidget(self.manager_label)

        self.menu_bar = MainMenu(self)
        self.menu_bar.register_refresh_callback(self.refresh_current_tab)
        self.setMenuBar(self.menu_bar)

        self._pending_tab_loads: set[int] = set()
        self.init_tabs()
        self._load_settings()
        self.tab_widget.currentChanged.connect(self.on_tab_changed)
        self.on_tab_changed(self.tab_widget.currentIndex())

        self._unsubscribe = self._context.auth.subscribe(self.on_auth_changed)
        self.on_auth_changed(self._context.auth)

    def init_tabs(self):
        ctx = self._context
        self.tab_widget = QTabWidget(self)
        self.setCentralWidget(self.tab_widget)

        self.dashboard_tab = DashboardTab(self, context=ctx, autoload=False)
        self.project_tab = ProjectTableView(self, context=ctx, autoload=False)
        self.client_tab = ClientTableView(self, context=ctx, autoload=False)
        self.employee_tab = EmployeeTableView(self, context=ctx, autoload=False)
        self.assignment_tab = AssignmentView(self, context=ctx, autoload=False)
        self.supplier_tab = SupplierTableView(self, context=ctx, autoload=False)
        self.material_tab = MaterialTableView(self, context=ctx, autoload=False)
        self.inventory_tab = InventoryTableView(self, context=ctx, autoload=False)
        self.warehouse_tab = WarehouseTableView(self, context=ctx, autoload=False)
        self.reports_tab = ReportsTab(self, context=ctx, autoload=False)

        tabs = [
            (self.dashboard_tab, "Главная"),
            (self.project_tab, "Проекты"),
            (self.client_tab, "Клиенты"),
            (self.employee_tab, "Сотрудники"),
            (self.assignment_tab, "Назначения"),
            (self.supplier_tab, "Поставщики"),
            (self.material_tab, "Материалы"),
            (self.inventory_tab, "Склад"),
            (self.warehouse_tab, "Стеллажи"),
            (self.reports_tab, "Отчёты"),
        ]
        for widget, title in tabs:
            self.tab_widget.addTab(widget, title)
            if hasattr(widget, "data_loaded"):
                widget.data_loaded.connect(self.show_count)
        self._pending_tab_loads = {id(widget) for widget, _ in tabs}

    def _load_settings(self):
        st = ui_settings.get_window_settings("MainWindow")
        apply_main_window_settings(st, self, self.tab_widget)

    def show_count(self, count: int):
        self.status_bar.showMessage(f"Записей: {count}")

    def on_tab_changed(self, index: int):
        widget = self.tab_widget.widget(index)
        if widget is None:
            return
        self.status_bar.clearMessage()
        widget_id = id(widget)
        if widget_id in self._pending_tab_loads:
            self._pending_tab_loads.discard(widget_id)
            widget.load_data()

    def refresh_current_tab(self):
        widget = self.tab_widget.currentWidget()
        if widget is not None and hasattr(widget, "refresh"):
            widget.refresh()

    def export_current_view(self):
        widget = self.tab_widget.currentWidget()
        if widget is not None and hasattr(widget, "export_csv"):
            widget.export_csv()

    # ------------------------------------------------------------------
    # Авторизация
    # ------------------------------------------------------------------
    def on_auth_changed(self, auth):
        if auth.manager is not None:
            self.manager_label.setText(f"👤 {auth.manager.display_name}")
            return
        if not auth.loading and not self.logged_out:
            self.logged_out = True
            self.close()

    def logout(self):
        if not confirm("Выйти из аккаунта?", parent=self):
            return
        self._context.auth.logout()

    def closeEvent(self, event):
        st = ui_settings.get_window_settings("MainWindow")
        st.update(
            {
                "geometry": base64.b64encode(bytes(self.saveGeometry())).decode("ascii"),
                "last_tab": self.tab_widget.currentIndex(),
            }
        )
        ui_settings.set_window_settings("MainWindow", st)
        self._unsubscribe()
        super().closeEvent(event)
