"""Student records (/user/students)."""

from __future__ import annotations

from portal_client.api.resource_client import ResourceClient
from portal_client.models.entities import Student
from portal_client.services.typed import ModelResource

STUDENTS_PATH = "/user/students"


class StudentService:
    """Student CRUD plus batch lookups.

    Generic operations live on ``crud``; this class only adds the
    student-specific endpoints.
    """

    def __init__(self, resource: ResourceClient) -> None:
        self.resource = resource
        self.crud: ModelResource[Student] = ModelResource(resource, Student)

    async def get_by_batch(self, batch_id: str) -> list[Student]:
        items = await self.resource.api.get_list(self.resource.url("batch", batch_id))
        return self.crud.parse_many(items)
