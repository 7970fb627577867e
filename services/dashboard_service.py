"""Функции для получения сводной информации на дашборд."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from services.dto import InventoryItemDTO, ProjectDTO
from services.inventory_service import InventoryService, low_stock
from services.project_service import ProjectService
from services.report_service import ReportService
from utils.time_utils import sort_key

logger = logging.getLogger(__name__)

ACTIVE_STATUS = "in_progress"


@dataclass
class DashboardStats:
    total_projects: int = 0
    active_projects: int = 0
    total_clients: int = 0
    total_employees: int = 0
    total_suppliers: int = 0
    low_stock_items: int = 0


@dataclass
class DashboardData:
    stats: DashboardStats
    recent_projects: list[ProjectDTO] = field(default_factory=list)


def recent_projects(projects: list[ProjectDTO], limit: int) -> list[ProjectDTO]:
    """Последние *limit* проектов по ``created_at``; без даты — в конце."""
    ordered = sorted(projects, key=lambda p: sort_key(p.created_at), reverse=True)
    return ordered[:limit]


def build_dashboard(
    totals: dict[str, int],
    inventory: list[InventoryItemDTO],
    projects: list[ProjectDTO],
    *,
    low_stock_threshold: int = 10,
    recent_limit: int = 5,
) -> DashboardData:
    stats = DashboardStats(
        total_projects=totals.get("projects", 0),
        active_projects=sum(1 for p in projects if p.status == ACTIVE_STATUS),
        total_clients=totals.get("clients", 0),
        total_employees=totals.get("employees", 0),
        total_suppliers=totals.get("suppliers", 0),
        low_stock_items=len(low_stock(inventory, low_stock_threshold)),
    )
    return DashboardData(stats=stats, recent_projects=recent_projects(projects, recent_limit))


def load_dashboard(
    reports: ReportService,
    inventory_service: InventoryService,
    project_service: ProjectService,
    *,
    low_stock_threshold: int = 10,
    recent_limit: int = 5,
) -> DashboardData:
    """Загрузить данные дашборда одним параллельным пакетом из шести запросов.

    Ошибка любого запроса прерывает загрузку целиком.
    """
    with ThreadPoolExecutor(max_workers=6, thread_name_prefix="dashboard") as pool:
        futures = {
            "projects_total": pool.submit(reports.total_projects),
            "clients_total": pool.submit(reports.total_clients),
            "employees_total": pool.submit(reports.total_employees),
            "suppliers_total": pool.submit(reports.total_suppliers),
            "inventory": pool.submit(inventory_service.list_all),
            "projects": pool.submit(project_service.list_all),
        }
        results = {name: future.result() for name, future in futures.items()}

    totals = {
        "projects": results["projects_total"],
        "clients": results["clients_total"],
        "employees": results["employees_total"],
        "suppliers": results["suppliers_total"],
    }
    logger.debug("Счётчики дашборда: %s", totals)
    return build_dashboard(
        totals,
        results["inventory"],
        results["projects"],
        low_stock_threshold=low_stock_threshold,
        recent_limit=recent_limit,
    )
