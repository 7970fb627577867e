import logging
from typing import Any, Callable, Iterable

from PySide6.QtWidgets import QApplication

from infrastructure.api_client import ApiError
from ui.base.base_table_model import BaseTableModel

logger = logging.getLogger(__name__)


class TableController:
    """Контроллер таблицы: загрузка списка, поиск и удаление записей.

    Список загружается целиком, поиск идёт по уже загруженным записям
    через ``service.search``.
    """

    def __init__(
        self,
        view,
        *,
        service: Any | None = None,
        fetch: Callable[[], Iterable[Any]] | None = None,
        delete_func: Callable[[Any], None] | None = None,
    ):
        self.view = view
        self.service = service
        self.fetch = fetch or (service.list_all if service is not None else None)
        self.delete_func = delete_func or getattr(service, "delete", None)
        self.all_items: list[Any] = []

    # --- Работа с моделью -------------------------------------------------
    def _create_table_model(self, items: list[Any]) -> BaseTableModel:
        return BaseTableModel(items, self.view.COLUMNS)

    def set_items(self, items: list[Any]) -> None:
        self.view.model = self._create_table_model(items)
        self.view.proxy.setSourceModel(self.view.model)
        self.view.table.resizeColumnsToContents()
        self.view.update_state_label(len(items))
        self.view.search_box.set_result_count(len(items), len(self.all_items))
        self.view.data_loaded.emit(self.view.proxy.rowCount())

    # --- Загрузка данных --------------------------------------------------
    def load_data(self) -> bool:
        if self.fetch is None:
            return False

        self.view.show_loading()
        QApplication.processEvents()
        try:
            self.all_items = list(self.fetch())
        except ApiError as exc:
            logger.error("❌ Не удалось загрузить %s: %s", self.view.settings_id, exc)
            self.all_items = []
            self.set_items([])
            self.view.show_load_error(exc)
            return False

        logger.debug("%s: загружено %d записей", self.view.settings_id, len(self.all_items))
        self.apply_filter()
        return True

    def apply_filter(self) -> None:
        text = self.view.get_search_text()
        if self.service is not None and hasattr(self.service, "search"):
            items = self.service.search(self.all_items, text)
        else:
            items = list(self.all_items)
        self.set_items(items)

    # --- Изменение данных -------------------------------------------------
    def delete_items(self, items: list[Any]) -> None:
        if self.delete_func is None:
            raise RuntimeError("Для таблицы не задано удаление")
        for item in items:
            self.delete_func(item.id)
