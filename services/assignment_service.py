"""Назначения сотрудников и распределение материалов по проектам."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from infrastructure.api_client import ApiClient, RecordId
from infrastructure.envelopes import unwrap_collection
from services.dto import ProjectEmployeeDTO, ProjectMaterialDTO, clean_payload
from services.query_utils import filter_records

logger = logging.getLogger(__name__)

PROJECT_EMPLOYEES = "project-employees"
PROJECT_MATERIALS = "project-materials"
ASSIGNMENT_KEYS = ("employees", "assignments", "project_employees")


class AssignmentService:
    """Сотрудники на проектах (``/project-employees``)."""

    search_fields = ("project_name", "employee_label")

    def __init__(self, api: ApiClient) -> None:
        self.api = api

    def list_all(self) -> list[ProjectEmployeeDTO]:
        rows = self.api.get_all(PROJECT_EMPLOYEES, key=ASSIGNMENT_KEYS)
        return [ProjectEmployeeDTO.from_api(row) for row in rows]

    def list_for_project(self, project_id: RecordId) -> list[ProjectEmployeeDTO]:
        payload = self.api.request("GET", f"/{PROJECT_EMPLOYEES}/project/{project_id}")
        rows = unwrap_collection(payload, ASSIGNMENT_KEYS)
        return [ProjectEmployeeDTO.from_api(row) for row in rows]

    def assign(
        self, project_id: RecordId, employee_ids: Iterable[RecordId], role: str | None = None
    ) -> int:
        """Назначить сотрудников на проект по одному запросу на сотрудника.

        Первая ошибка прерывает цикл; уже созданные назначения остаются.
        """
        count = 0
        for employee_id in employee_ids:
            self.api.create(
                PROJECT_EMPLOYEES,
                clean_payload(
                    {"project_id": project_id, "employee_id": employee_id, "role": role}
                ),
            )
            count += 1
        logger.info("👷 На проект %s назначено сотрудников: %d", project_id, count)
        return count

    def remove(self, assignment_id: RecordId) -> None:
        self.api.delete(PROJECT_EMPLOYEES, assignment_id)
        logger.info("🗑️ Снято назначение id=%s", assignment_id)

    def search(self, records, text):
        return filter_records(records, text, self.search_fields)


class ProjectMaterialService:
    """Материалы, выделенные проектам (``/project-materials``)."""

    def __init__(self, api: ApiClient) -> None:
        self.api = api

    def list_all(self) -> list[ProjectMaterialDTO]:
        rows = self.api.get_all(PROJECT_MATERIALS, key=("project_materials", "materials"))
        return [ProjectMaterialDTO.from_api(row) for row in rows]

    def list_for_project(self, project_id: RecordId) -> list[ProjectMaterialDTO]:
        return [
            pm for pm in self.list_all() if str(pm.project_id) == str(project_id)
        ]

    def allocate(
        self,
        project_id: RecordId,
        material_id: RecordId,
        quantity: int,
        allocated_date=None,
    ) -> None:
        self.api.create(
            PROJECT_MATERIALS,
            clean_payload(
                {
                    "project_id": project_id,
                    "material_id": material_id,
                    "quantity": quantity,
                    "allocated_date": allocated_date,
                }
            ),
        )
        logger.info(
            "📦 Проекту %s выделен материал %s × %s", project_id, material_id, quantity
        )

    def remove(self, allocation_id: RecordId) -> None:
        self.api.delete(PROJECT_MATERIALS, allocation_id)
