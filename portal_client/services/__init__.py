"""Entity services and the resource registry."""

from portal_client.services.academic import DepartmentService
from portal_client.services.enrollment import (
    AssessmentService,
    CourseGradeService,
    EnrollmentService,
    InstructorAssignmentService,
)
from portal_client.services.library import BookCopyService, BookService
from portal_client.services.registry import ResourceRegistry
from portal_client.services.students import StudentService
from portal_client.services.typed import ModelResource

__all__ = [
    "AssessmentService",
    "BookCopyService",
    "BookService",
    "CourseGradeService",
    "DepartmentService",
    "EnrollmentService",
    "InstructorAssignmentService",
    "ModelResource",
    "ResourceRegistry",
    "StudentService",
]
