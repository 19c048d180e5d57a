"""Academic structure: departments (/academic/departments)."""

from __future__ import annotations

from portal_client.api.resource_client import ResourceClient
from portal_client.models.entities import Department
from portal_client.models.envelope import Page
from portal_client.services.typed import ModelResource

DEPARTMENTS_PATH = "/academic/departments"


class DepartmentService:
    def __init__(self, resource: ResourceClient) -> None:
        self.resource = resource
        self.crud: ModelResource[Department] = ModelResource(resource, Department)

    async def get_by_faculty(self, faculty_id: str, page: int = 1, limit: int = 10) -> Page[Department]:
        return await self.crud.get_all({"facultyId": faculty_id, "page": page, "limit": limit})
