"""Сервис клиентов."""

from __future__ import annotations

from collections.abc import Sequence

from infrastructure.api_client import RecordId
from services.crud_service import ResourceService
from services.dto import ClientDTO, ProjectDTO


class ClientService(ResourceService[ClientDTO]):
    resource = "clients"
    record_key = "client"
    dto_class = ClientDTO
    search_fields = ("name", "email")
    entity_name = "клиент"


def projects_of_client(
    client_id: RecordId, projects: Sequence[ProjectDTO]
) -> list[ProjectDTO]:
    """Проекты, принадлежащие клиенту *client_id*."""
    return [p for p in projects if str(p.client_id) == str(client_id)]
