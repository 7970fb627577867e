"""Сервис проектов."""

from __future__ import annotations

from collections.abc import Sequence

from services.crud_service import ResourceService
from services.dto import ClientDTO, ProjectDTO


class ProjectService(ResourceService[ProjectDTO]):
    resource = "projects"
    record_key = "project"
    dto_class = ProjectDTO
    search_fields = ("name", "client_name")
    entity_name = "проект"


def attach_client_names(
    projects: Sequence[ProjectDTO], clients: Sequence[ClientDTO]
) -> list[ProjectDTO]:
    """Заполнить ``client_name`` там, где сервер не вложил клиента."""
    names = {str(c.id): c.name for c in clients}
    for project in projects:
        if not project.client_name and project.client_id is not None:
            project.client_name = names.get(str(project.client_id))
    return list(projects)
