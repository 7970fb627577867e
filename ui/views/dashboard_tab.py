import logging

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QGridLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QVBoxLayout,
    QWidget,
)

from core.app_context import AppContext, get_app_context
from infrastructure.api_client import ApiError
from services.dashboard_service import DashboardData, load_dashboard
from ui.common.styled_widgets import StatCard, styled_button
from ui.common.toast import show_toast
from ui.views.project_detail_view import ProjectDetailView
from utils.time_utils import format_date

logger = logging.getLogger(__name__)

LOAD_ERROR_TEXT = "Не удалось загрузить данные дашборда"

CARDS = [
    ("total_projects", "Всего проектов", "🏗️"),
    ("active_projects", "Проекты в работе", "🚧"),
    ("total_clients", "Клиенты", "🤝"),
    ("total_employees", "Сотрудники", "👷"),
    ("total_suppliers", "Поставщики", "🚚"),
    ("low_stock_items", "Мало на складе", "⚠️"),
]


class DashboardTab(QWidget):
    """Стартовая страница: счётчики и последние проекты."""

    def __init__(self, parent=None, *, context: AppContext | None = None, autoload=True):
        super().__init__(parent)
        self._context = context or get_app_context()
        self.data: DashboardData | None = None

        layout = QVBoxLayout(self)
        self.title_label = QLabel()
        self.title_label.setTextFormat(Qt.RichText)
        layout.addWidget(self.title_label)

        grid = QGridLayout()
        self.cards: dict[str, StatCard] = {}
        for index, (key, title, icon) in enumerate(CARDS):
            card = StatCard(title, icon)
            self.cards[key] = card
            grid.addWidget(card, index // 3, index % 3)
        layout.addLayout(grid)

        self.recent_label = QLabel("<b>Последние проекты</b>")
        self.recent_label.setTextFormat(Qt.RichText)
        layout.addWidget(self.recent_label)
        self.recent_list = QListWidget()
        self.recent_list.itemDoubleClicked.connect(self.open_project_detail)
        layout.addWidget(self.recent_list)

        self.refresh_btn = styled_button("Обновить", icon="🔄")
        self.refresh_btn.clicked.connect(self.update_stats)
        layout.addWidget(self.refresh_btn, alignment=Qt.AlignLeft)
        layout.addStretch()

        if autoload:
            self.update_stats()

    def load_data(self):
        self.update_stats()

    def refresh(self):
        self.update_stats()

    def update_stats(self) -> bool:
        auth = self._context.auth
        name = auth.manager.display_name if auth.manager else ""
        self.title_label.setText(f"<h2>Добро пожаловать{', ' + name if name else ''}!</h2>")

        settings = self._context.settings
        try:
            data = load_dashboard(
                self._context.reports,
                self._context.inventory,
                self._context.projects,
                low_stock_threshold=settings.low_stock_threshold,
                recent_limit=settings.recent_projects_limit,
            )
        except ApiError as exc:
            logger.error("❌ %s: %s", LOAD_ERROR_TEXT, exc)
            show_toast(LOAD_ERROR_TEXT, "error", self)
            return False

        self.data = data
        for key, card in self.cards.items():
            card.set_value(getattr(data.stats, key))

        self.recent_list.clear()
        if not data.recent_projects:
            self.recent_list.addItem("Проектов пока нет")
        for project in data.recent_projects:
            parts = [project.name, project.status_label]
            if project.client_name:
                parts.append(project.client_name)
            parts.append(format_date(project.created_at))
            item = QListWidgetItem(" — ".join(parts))
            item.setData(Qt.UserRole, project)
            self.recent_list.addItem(item)
        return True

    def open_project_detail(self, item: QListWidgetItem):
        project = item.data(Qt.UserRole)
        if project is None:
            return
        try:
            fresh = self._context.projects.get(project.id)
        except ApiError as exc:
            show_toast(exc.message or "Не удалось загрузить проект", "error", self)
            return
        fresh.client_name = fresh.client_name or project.client_name
        dlg = ProjectDetailView(fresh, context=self._context, parent=self)
        dlg.exec()
        if dlg.changed:
            self.update_stats()
