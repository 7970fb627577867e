"""Состояние авторизации менеджера."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable

from infrastructure.api_client import ApiClient, ApiError
from infrastructure.local_storage import MANAGER_KEY, TOKEN_KEY, LocalStorage
from services.dto import ManagerDTO

logger = logging.getLogger(__name__)

AuthListener = Callable[["AuthContext"], None]


class AuthContext:
    """Текущий менеджер, флаг загрузки и операции входа/выхода.

    Токен и профиль менеджера сохраняются в :class:`LocalStorage` и
    восстанавливаются синхронно в :meth:`restore`. Подписчики получают
    уведомление при каждом изменении состояния.
    """

    def __init__(self, api_client: ApiClient, storage: LocalStorage) -> None:
        self._api = api_client
        self._storage = storage
        self._manager: ManagerDTO | None = None
        self._loading = True
        self._listeners: list[AuthListener] = []

    # ------------------------------------------------------------------
    # Состояние
    # ------------------------------------------------------------------
    @property
    def manager(self) -> ManagerDTO | None:
        return self._manager

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def is_authenticated(self) -> bool:
        return self._manager is not None

    def subscribe(self, listener: AuthListener) -> Callable[[], None]:
        """Подписаться на изменения; возвращает функцию отписки."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ------------------------------------------------------------------
    # Операции
    # ------------------------------------------------------------------
    def restore(self) -> None:
        """Восстановить сессию из локального хранилища."""

        token = self._storage.get_item(TOKEN_KEY)
        saved_manager = self._storage.get_item(MANAGER_KEY)

        if token and saved_manager:
            try:
                data = json.loads(saved_manager)
                if not isinstance(data, dict):
                    raise ValueError("профиль менеджера не является объектом")
                self._manager = ManagerDTO.from_api(data)
                self._api.set_token(token)
                logger.info("🔑 Восстановлена сессия %s", self._manager.email)
            except ValueError as exc:
                logger.error("Не удалось разобрать сохранённого менеджера: %s", exc)
                self._storage.remove_item(TOKEN_KEY)
                self._storage.remove_item(MANAGER_KEY)
                self._api.clear_token()
                self._manager = None

        self._loading = False
        self._notify()

    def login(self, email: str, password: str) -> ManagerDTO:
        response = self._api.login(email, password)
        return self._accept_auth_response(response)

    def register(self, data: dict) -> ManagerDTO:
        response = self._api.register(data)
        return self._accept_auth_response(response)

    def logout(self) -> None:
        self._api.clear_token()
        self._manager = None
        self._storage.remove_item(MANAGER_KEY)
        logger.info("🚪 Выход из аккаунта")
        self._notify()

    def _accept_auth_response(self, response) -> ManagerDTO:
        if not isinstance(response, dict) or not response.get("token"):
            raise ApiError("Сервер не вернул токен авторизации", payload=response)

        manager_data = response.get("manager")
        if not isinstance(manager_data, dict):
            manager_data = {}

        manager = ManagerDTO.from_api(manager_data)
        self._api.set_token(response["token"])
        self._storage.set_item(
            MANAGER_KEY, json.dumps(manager.to_storage(), ensure_ascii=False)
        )
        self._manager = manager
        logger.info("🔑 Вход выполнен: %s", manager.email)
        self._notify()
        return manager
