"""Public models for the portal client."""

from portal_client.models.entities import (
    Assessment,
    AssessmentStatus,
    AssessmentSubmission,
    AssessmentType,
    AssignmentStatus,
    Book,
    BookCopy,
    BookStatus,
    CopyStatus,
    CourseGrade,
    Department,
    Enrollment,
    EnrollmentRecordStatus,
    EnrollmentStatus,
    GradeStatus,
    InstructorAssignment,
    Library,
    PortalModel,
    Profile,
    Student,
    SubmissionStatus,
)
from portal_client.models.envelope import ErrorEnvelope, FieldError, Page, Pagination

__all__ = [
    "Assessment",
    "AssessmentStatus",
    "AssessmentSubmission",
    "AssessmentType",
    "AssignmentStatus",
    "Book",
    "BookCopy",
    "BookStatus",
    "CopyStatus",
    "CourseGrade",
    "Department",
    "Enrollment",
    "EnrollmentRecordStatus",
    "EnrollmentStatus",
    "ErrorEnvelope",
    "FieldError",
    "GradeStatus",
    "InstructorAssignment",
    "Library",
    "Page",
    "Pagination",
    "PortalModel",
    "Profile",
    "Student",
    "SubmissionStatus",
]
