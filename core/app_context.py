"""Контекст приложения и управление зависимостями."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, ClassVar

from config import Settings, get_settings
from core.auth_context import AuthContext
from infrastructure.api_client import ApiClient
from infrastructure.local_storage import LocalStorage
from services.assignment_service import AssignmentService, ProjectMaterialService
from services.client_service import ClientService
from services.employee_service import EmployeeService
from services.inventory_service import InventoryService
from services.material_service import MaterialService
from services.project_service import ProjectService
from services.report_service import ReportService
from services.supplier_service import SupplierService
from services.warehouse_service import WarehouseRackService

DependencyName = str


class AppContext:
    """Контекст приложения с ленивым созданием зависимостей.

    Клиент API, состояние авторизации и сервисы создаются при первом
    обращении и живут, пока жив контекст. В тестах любую зависимость можно
    подменить через :meth:`override`.
    """

    _DEPENDENCY_NAMES: ClassVar[set[str]] = {
        "storage",
        "api_client",
        "auth",
        "clients",
        "projects",
        "employees",
        "suppliers",
        "materials",
        "inventory",
        "warehouse_racks",
        "assignments",
        "project_materials",
        "reports",
    }

    def __init__(
        self,
        settings: Settings,
        *,
        storage_factory: Callable[[], LocalStorage] = LocalStorage,
        api_client_factory: Callable[["AppContext"], ApiClient] | None = None,
        overrides: dict[str, Any] | None = None,
        instances: dict[str, Any] | None = None,
    ) -> None:
        self._settings = settings
        self._storage_factory = storage_factory
        self._api_client_factory = api_client_factory or _default_api_client
        self._overrides: dict[str, Any] = dict(overrides or {})
        self._instances: dict[str, Any] = dict(instances or {})

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def storage(self) -> LocalStorage:
        return self._get_dependency("storage", self._storage_factory)

    @property
    def api_client(self) -> ApiClient:
        return self._get_dependency(
            "api_client", lambda: self._api_client_factory(self)
        )

    @property
    def auth(self) -> AuthContext:
        return self._get_dependency(
            "auth", lambda: AuthContext(self.api_client, self.storage)
        )

    @property
    def clients(self) -> ClientService:
        return self._get_dependency("clients", lambda: ClientService(self.api_client))

    @property
    def projects(self) -> ProjectService:
        return self._get_dependency("projects", lambda: ProjectService(self.api_client))

    @property
    def employees(self) -> EmployeeService:
        return self._get_dependency(
            "employees", lambda: EmployeeService(self.api_client)
        )

    @property
    def suppliers(self) -> SupplierService:
        return self._get_dependency(
            "suppliers", lambda: SupplierService(self.api_client)
        )

    @property
    def materials(self) -> MaterialService:
        return self._get_dependency(
            "materials", lambda: MaterialService(self.api_client)
        )

    @property
    def inventory(self) -> InventoryService:
        return self._get_dependency(
            "inventory", lambda: InventoryService(self.api_client)
        )

    @property
    def warehouse_racks(self) -> WarehouseRackService:
        return self._get_dependency(
            "warehouse_racks",
            lambda: WarehouseRackService(
                self.api_client, resource=self._settings.warehouse_endpoint
            ),
        )

    @property
    def assignments(self) -> AssignmentService:
        return self._get_dependency(
            "assignments", lambda: AssignmentService(self.api_client)
        )

    @property
    def project_materials(self) -> ProjectMaterialService:
        return self._get_dependency(
            "project_materials", lambda: ProjectMaterialService(self.api_client)
        )

    @property
    def reports(self) -> ReportService:
        return self._get_dependency("reports", lambda: ReportService(self.api_client))

    def override(self, **deps: Any) -> "AppContext":
        """Создать новый контекст с переопределёнными зависимостями."""

        override_args = dict(deps)
        new_settings = override_args.pop("settings", self._settings)

        unknown = set(override_args) - self._DEPENDENCY_NAMES
        if unknown:
            names = ", ".join(sorted(unknown))
            raise ValueError(f"Неизвестные зависимости для переопределения: {names}")

        overrides = dict(self._overrides)
        overrides.update(override_args)
        if new_settings is self._settings:
            instances = {
                key: value
                for key, value in self._instances.items()
                if key not in override_args
            }
        else:
            instances = {}
        return AppContext(
            settings=new_settings,
            storage_factory=self._storage_factory,
            api_client_factory=self._api_client_factory,
            overrides=overrides,
            instances=instances,
        )

    def _get_dependency(
        self, name: DependencyName, factory: Callable[[], Any]
    ) -> Any:
        if name in self._overrides:
            return self._overrides[name]
        if name not in self._instances:
            self._instances[name] = factory()
        return self._instances[name]


def _default_api_client(context: AppContext) -> ApiClient:
    settings = context.settings
    return ApiClient(
        settings.api_base_url,
        context.storage,
        auth_routes=settings.auth_routes,
    )


_app_context: AppContext | None = None


def get_app_context() -> AppContext:
    """Получить (или создать) контекст приложения для точки входа."""

    global _app_context
    if _app_context is None:
        _app_context = AppContext(settings=get_settings())
    return _app_context


__all__ = ["AppContext", "get_app_context"]
