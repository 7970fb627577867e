"""HTTP-клиент REST API бэк-офиса."""

from __future__ import annotations

import json
import logging
import threading
from datetime import date, datetime
from decimal import Decimal
from typing import Any

import requests

from infrastructure.envelopes import EnvelopeKey, unwrap_collection, unwrap_record
from infrastructure.local_storage import TOKEN_KEY, LocalStorage

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = (
    "Не удалось связаться с сервером. Проверьте подключение к сети."
)
INVALID_RESPONSE_MESSAGE = "Некорректный ответ сервера"

AUTH_ROUTES: dict[str, dict[str, str]] = {
    "auth": {"login": "/auth/login", "register": "/auth/register"},
    "managers": {"login": "/managers/login", "register": "/managers/signup"},
}

RecordId = int | str


class ApiError(RuntimeError):
    """Базовая ошибка обращения к API."""

    def __init__(self, message: str, status_code: int | None = None, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


class HttpError(ApiError):
    """Сервер ответил статусом вне диапазона 2xx."""

    def __init__(self, message: str, status_code: int, payload: Any = None):
        super().__init__(message, status_code=status_code, payload=payload)


class NetworkError(ApiError):
    """Запрос не дошёл до сервера."""

    def __init__(self, message: str = NETWORK_ERROR_MESSAGE):
        super().__init__(message)


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"Тип {type(value).__name__} не сериализуется в JSON")


def _error_message(payload: Any, status_code: int) -> str:
    if isinstance(payload, dict):
        for key in ("message", "error"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value
    return f"Ошибка HTTP: статус {status_code}"


class ApiClient:
    """Обёртка над ``requests.Session``: токен, JSON и перевод ошибок.

    Токен хранится в памяти и дублируется в :class:`LocalStorage`, поэтому
    переживает перезапуск приложения. Без переданной ``session`` каждый поток
    получает свою ``requests.Session``. Повторов, таймаутов и отмены нет.
    """

    def __init__(
        self,
        base_url: str,
        storage: LocalStorage,
        *,
        session: requests.Session | None = None,
        auth_routes: str = "auth",
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._storage = storage
        self._shared_session = session
        self._local = threading.local()
        self._auth_routes = AUTH_ROUTES.get(auth_routes, AUTH_ROUTES["auth"])
        self._token: str | None = storage.get_item(TOKEN_KEY)

    # ------------------------------------------------------------------
    # Токен
    # ------------------------------------------------------------------
    @property
    def token(self) -> str | None:
        return self._token

    def set_token(self, token: str) -> None:
        self._token = token
        self._storage.set_item(TOKEN_KEY, token)

    def clear_token(self) -> None:
        self._token = None
        self._storage.remove_item(TOKEN_KEY)

    # ------------------------------------------------------------------
    # Базовый запрос
    # ------------------------------------------------------------------
    def _get_session(self) -> requests.Session:
        # requests.Session не потокобезопасна: свой экземпляр на поток
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
        return session

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def request(self, method: str, endpoint: str, *, json_body: Any = None) -> Any:
        """Выполнить запрос и вернуть разобранный JSON (или ``None``)."""

        url = f"{self.base_url}{endpoint}"
        data = None
        if json_body is not None:
            data = json.dumps(json_body, default=_json_default, ensure_ascii=False).encode(
                "utf-8"
            )

        logger.debug("➡️ %s %s", method, url)
        try:
            response = self._get_session().request(
                method, url, headers=self._headers(), data=data
            )
        except requests.RequestException as exc:
            logger.error("Запрос к API завершился ошибкой: %s %s: %s", method, url, exc)
            raise NetworkError() from exc

        status = response.status_code
        if not 200 <= status < 300:
            payload = self._read_error_payload(response)
            message = _error_message(payload, status)
            logger.error(
                "Запрос к API завершился ошибкой: %s %s → %s (%s)",
                method,
                url,
                status,
                message,
            )
            raise HttpError(message, status, payload)

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            logger.error("Некорректный JSON в ответе %s %s", method, url)
            raise ApiError(INVALID_RESPONSE_MESSAGE, status_code=status) from exc

    @staticmethod
    def _read_error_payload(response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return None

    # ------------------------------------------------------------------
    # Авторизация
    # ------------------------------------------------------------------
    def login(self, email: str, password: str) -> dict:
        return self.request(
            "POST",
            self._auth_routes["login"],
            json_body={"email": email, "password": password},
        )

    def register(self, data: dict) -> dict:
        return self.request("POST", self._auth_routes["register"], json_body=data)

    # ------------------------------------------------------------------
    # Универсальный CRUD
    # ------------------------------------------------------------------
    @staticmethod
    def _default_key(resource: str) -> str:
        return resource.split("/")[0].replace("-", "_")

    def get_all(self, resource: str, key: EnvelopeKey = None) -> list[dict]:
        payload = self.request("GET", f"/{resource}")
        return unwrap_collection(payload, key or self._default_key(resource))

    def get_by_id(self, resource: str, record_id: RecordId, key: EnvelopeKey = None) -> dict:
        payload = self.request("GET", f"/{resource}/{record_id}")
        return unwrap_record(payload, key)

    def create(self, resource: str, data: dict, key: EnvelopeKey = None) -> dict:
        payload = self.request("POST", f"/{resource}", json_body=data)
        return unwrap_record(payload, key)

    def update(
        self, resource: str, record_id: RecordId, data: dict, key: EnvelopeKey = None
    ) -> dict:
        payload = self.request("PUT", f"/{resource}/{record_id}", json_body=data)
        return unwrap_record(payload, key)

    def delete(self, resource: str, record_id: RecordId) -> None:
        self.request("DELETE", f"/{resource}/{record_id}")
