"""Отчёты сервера (``/reports/*``)."""

from __future__ import annotations

from typing import Any

from infrastructure.api_client import ApiClient, RecordId
from infrastructure.envelopes import unwrap_collection, unwrap_record, unwrap_total


class ReportService:
    def __init__(self, api: ApiClient) -> None:
        self.api = api

    def _total(self, name: str) -> int:
        return unwrap_total(self.api.request("GET", f"/reports/total-{name}"))

    def total_projects(self) -> int:
        return self._total("projects")

    def total_employees(self) -> int:
        return self._total("employees")

    def total_suppliers(self) -> int:
        return self._total("suppliers")

    def total_clients(self) -> int:
        return self._total("clients")

    def project_cost(self, project_id: RecordId) -> dict[str, Any]:
        """Стоимость проекта: как правило ``labor_cost``, ``material_cost``, ``total_cost``."""
        payload = self.api.request("GET", f"/reports/project-cost/{project_id}")
        return unwrap_record(payload, ("report", "project_cost", "cost"))

    def employee_workload(self) -> list[dict[str, Any]]:
        payload = self.api.request("GET", "/reports/employee-workload")
        return unwrap_collection(payload, ("workload", "employees", "report"))

    def inventory_value(self) -> dict[str, Any]:
        payload = self.api.request("GET", "/reports/inventory-value")
        if isinstance(payload, (int, float, str)) and not isinstance(payload, bool):
            return {"total_value": payload}
        return unwrap_record(payload, ("report", "inventory_value"))
