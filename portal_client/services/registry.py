"""Resource registry: one shared transport, one ResourceClient per named resource."""

from __future__ import annotations

import logging

import httpx

from portal_client.api.base_client import BaseApiClient
from portal_client.api.resource_client import ResourceClient
from portal_client.auth.session import SessionStorage, token_provider
from portal_client.config.resources import ResourceDefinition, load_resource_definitions
from portal_client.config.settings import PortalSettings
from portal_client.errors import UnknownResourceError
from portal_client.services.academic import DepartmentService
from portal_client.services.enrollment import (
    AssessmentService,
    CourseGradeService,
    EnrollmentService,
    InstructorAssignmentService,
)
from portal_client.services.library import BookCopyService, BookService
from portal_client.services.students import StudentService

logger = logging.getLogger(__name__)


class ResourceRegistry:
    """Builds ResourceClients for the resources defined in settings.

    Parameters
    ----------
    settings:
        Client settings (base URL, credentials, timeout, resources file).
    storage:
        Session storage the access token is read from. A fresh, empty
        storage is created when omitted.
    definitions:
        Resource definitions overriding the ones loaded from
        ``settings.resources_path``.
    transport:
        Optional ``httpx`` transport for the shared client.
    """

    def __init__(
        self,
        settings: PortalSettings,
        storage: SessionStorage | None = None,
        definitions: dict[str, ResourceDefinition] | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.storage = storage if storage is not None else SessionStorage()
        self.api = BaseApiClient(
            settings.api_url,
            with_credentials=settings.with_credentials,
            token_provider=token_provider(self.storage, settings.access_token_key),
            timeout=settings.timeout_seconds,
            transport=transport,
        )
        self._definitions = (
            definitions if definitions is not None else load_resource_definitions(settings.resources_path)
        )
        self._clients: dict[str, ResourceClient] = {}
        logger.info(
            "Resource registry ready with %d resources against %s",
            len(self._definitions),
            settings.api_url,
        )

    def names(self) -> list[str]:
        return sorted(self._definitions)

    def __contains__(self, name: object) -> bool:
        return name in self._definitions

    def get(self, name: str) -> ResourceClient:
        """Return the client for ``name``, creating it on first use."""
        client = self._clients.get(name)
        if client is not None:
            return client

        definition = self._definitions.get(name)
        if definition is None:
            raise UnknownResourceError(name)

        client = ResourceClient(
            self.settings.api_url,
            definition.path,
            resource_key=definition.resource_key,
            api=self.api,
            update_method=definition.update_method,
        )
        self._clients[name] = client
        return client

    __getitem__ = get

    @property
    def students(self) -> StudentService:
        return StudentService(self.get("students"))

    @property
    def books(self) -> BookService:
        return BookService(self.get("books"))

    @property
    def book_copies(self) -> BookCopyService:
        return BookCopyService(self.get("copies"))

    @property
    def departments(self) -> DepartmentService:
        return DepartmentService(self.get("departments"))

    @property
    def assessments(self) -> AssessmentService:
        return AssessmentService(self.get("assessments"))

    @property
    def course_grades(self) -> CourseGradeService:
        return CourseGradeService(self.get("grades"))

    @property
    def enrollments(self) -> EnrollmentService:
        return EnrollmentService(self.get("enrollments"))

    @property
    def instructor_assignments(self) -> InstructorAssignmentService:
        return InstructorAssignmentService(self.get("instructor-assignments"))

    async def aclose(self) -> None:
        await self.api.aclose()

    async def __aenter__(self) -> ResourceRegistry:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
