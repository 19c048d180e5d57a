"""Pydantic models for portal entities.

The backend serializes documents with camelCase fields and either ``id`` or
``_id``; references may arrive as plain ids or as populated sub-documents.
The models accept all of these and expose snake_case attributes.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


def _reference_id(value: Any) -> Any:
    """Reduce a populated reference to its id."""
    if isinstance(value, dict):
        return value.get("_id") or value.get("id") or ""
    return value


def _split_references(data: Any, names: tuple[str, ...]) -> Any:
    """Move populated ``<name>Id`` documents to ``<name>``, keeping only the id."""
    if not isinstance(data, dict):
        return data
    data = dict(data)
    for name in names:
        key = f"{name}Id"
        if isinstance(data.get(key), dict):
            data.setdefault(name, data[key])
            data[key] = _reference_id(data[key])
    return data


class PortalModel(BaseModel):
    """Base for entities returned by the backend."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    id: str = Field(default="", validation_alias=AliasChoices("id", "_id"))
    created_at: str | None = None
    updated_at: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # null fields fall back to their defaults
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class EnrollmentStatus(str, Enum):
    """Enrollment state of a student."""

    NOT_ENROLLED = "not_enrolled"
    ENROLLED = "enrolled"
    SUSPENDED = "suspended"
    GRADUATED = "graduated"
    DROPPED_OUT = "dropped_out"


class Profile(PortalModel):
    first_name: str = ""
    last_name: str = ""
    profile_picture: str | None = None
    father_name: str | None = None
    mother_name: str | None = None


class Student(PortalModel):
    email: str = ""
    full_name: str = ""
    registration_number: str = ""
    department_id: str = ""
    program_id: str = ""
    batch_id: str = ""
    session_id: str = ""
    department: dict[str, Any] | None = None
    program: dict[str, Any] | None = None
    batch: dict[str, Any] | None = None
    session: dict[str, Any] | None = None
    enrollment_status: EnrollmentStatus | str = EnrollmentStatus.NOT_ENROLLED
    current_semester: int = 1
    admission_date: str = ""
    expected_graduation_date: str | None = None
    actual_graduation_date: str | None = None
    profile: Profile | None = None

    @model_validator(mode="before")
    @classmethod
    def _populated_references(cls, data: Any) -> Any:
        return _split_references(data, ("department", "program", "batch", "session"))


class Department(PortalModel):
    name: str = ""
    short_name: str = ""
    faculty_id: str = ""
    faculty: dict[str, Any] | None = None
    is_active: bool = True

    @model_validator(mode="before")
    @classmethod
    def _split_faculty(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("facultyId"), dict):
            data = dict(data)
            data.setdefault("faculty", data["facultyId"])
            data["facultyId"] = _reference_id(data["facultyId"])
        return data


class Library(PortalModel):
    name: str = ""
    code: str = ""
    location: str = ""


class BookStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ARCHIVED = "archived"


class Book(PortalModel):
    title: str = ""
    author: str = ""
    isbn: str = ""
    publisher: str = ""
    publication_year: int = 0
    edition: str = ""
    category: str = ""
    subject: str = ""
    description: str = ""
    language: str = "English"
    pages: int = 0
    price: float = 0
    status: BookStatus | str = BookStatus.ACTIVE
    library_id: str = ""
    library: Library | None = None

    @model_validator(mode="before")
    @classmethod
    def _split_library(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("libraryId"), dict):
            data = dict(data)
            data["library"] = data["libraryId"]
            data["libraryId"] = _reference_id(data["libraryId"])
        return data


class CopyStatus(str, Enum):
    AVAILABLE = "available"
    BORROWED = "borrowed"
    RESERVED = "reserved"
    MAINTENANCE = "maintenance"
    LOST = "lost"


class BookCopy(PortalModel):
    copy_number: str = ""
    barcode: str = ""
    condition: str = ""
    location: str = ""
    status: CopyStatus | str = CopyStatus.AVAILABLE
    book_id: str = ""
    book: Book | None = None

    @model_validator(mode="before")
    @classmethod
    def _split_book(cls, data: Any) -> Any:
        if isinstance(data, dict) and isinstance(data.get("bookId"), dict):
            data = dict(data)
            data["book"] = data["bookId"]
            data["bookId"] = _reference_id(data["bookId"])
        return data


# ---------------------------------------------------------------------------
# Enrollment: assessments, grades, enrollments, instructor assignments
# ---------------------------------------------------------------------------


class AssessmentStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    CLOSED = "closed"
    GRADED = "graded"


class AssessmentType(PortalModel):
    name: str = ""
    code: str = ""
    weight_percentage: float = 0
    description: str = ""
    is_active: bool = True


class Assessment(PortalModel):
    title: str = ""
    description: str = ""
    course_id: str = ""
    batch_id: str = ""
    type_id: str = ""
    total_marks: float = 0
    passing_marks: float = 0
    weight_percentage: float = 0
    due_date: str | None = None
    status: AssessmentStatus | str = AssessmentStatus.DRAFT
    created_by: str = ""
    assessment_type: AssessmentType | None = Field(default=None, alias="type")
    course: dict[str, Any] | None = None
    batch: dict[str, Any] | None = None

    @model_validator(mode="before")
    @classmethod
    def _populated_references(cls, data: Any) -> Any:
        return _split_references(data, ("type", "course", "batch"))


class SubmissionStatus(str, Enum):
    SUBMITTED = "submitted"
    GRADED = "graded"
    LATE = "late"
    MISSED = "missed"


class AssessmentSubmission(PortalModel):
    assessment_id: str = ""
    student_id: str = ""
    enrollment_id: str = ""
    obtained_marks: float | None = None
    feedback: str = ""
    status: SubmissionStatus | str = SubmissionStatus.SUBMITTED
    submitted_at: str | None = None
    graded_by: str | None = None
    graded_at: str | None = None
    attachments: list[Any] = Field(default_factory=list)
    content: str = ""
    student: dict[str, Any] | None = None
    assessment: Assessment | None = None

    @model_validator(mode="before")
    @classmethod
    def _populated_references(cls, data: Any) -> Any:
        return _split_references(data, ("assessment", "student"))


class GradeStatus(str, Enum):
    PENDING = "pending"
    CALCULATED = "calculated"
    FINALIZED = "finalized"
    PUBLISHED = "published"


class CourseGrade(PortalModel):
    student_id: str = ""
    enrollment_id: str = ""
    course_id: str = ""
    batch_id: str = ""
    semester: int = 1
    total_marks_obtained: float = 0
    total_marks: float = 0
    percentage: float | None = None
    grade: str | None = None
    letter_grade: str | None = None
    grade_point: float | None = None
    remarks: str = ""
    status: GradeStatus | str = GradeStatus.PENDING
    workflow_status: str | None = None
    is_published: bool = False
    marks_breakdown: dict[str, Any] | None = None
    student: dict[str, Any] | None = None
    course: dict[str, Any] | None = None
    batch: dict[str, Any] | None = None
    enrollment: dict[str, Any] | None = None

    @model_validator(mode="before")
    @classmethod
    def _populated_references(cls, data: Any) -> Any:
        return _split_references(data, ("student", "course", "batch", "enrollment"))


class EnrollmentRecordStatus(str, Enum):
    """State of one course enrollment (distinct from a student's EnrollmentStatus)."""

    ACTIVE = "active"
    ENROLLED = "enrolled"
    COMPLETED = "completed"
    DROPPED = "dropped"
    FAILED = "failed"


class Enrollment(PortalModel):
    student_id: str = ""
    batch_id: str = ""
    course_id: str = ""
    session_id: str = ""
    semester: int = 1
    academic_year: str | None = None
    status: EnrollmentRecordStatus | str = EnrollmentRecordStatus.ENROLLED
    enrollment_date: str = ""
    completion_date: str | None = None
    grade_id: str | None = None
    instructor_id: str | None = None
    student: dict[str, Any] | None = None
    batch: dict[str, Any] | None = None
    course: dict[str, Any] | None = None
    session: dict[str, Any] | None = None
    instructor: dict[str, Any] | None = None

    @model_validator(mode="before")
    @classmethod
    def _populated_references(cls, data: Any) -> Any:
        return _split_references(data, ("student", "batch", "course", "session", "instructor"))


class AssignmentStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    REASSIGNED = "reassigned"


class InstructorAssignment(PortalModel):
    """A teacher assigned to a course for one batch and semester."""

    batch_id: str = ""
    course_id: str = ""
    instructor_id: str = ""
    session_id: str = ""
    semester: int = 1
    status: AssignmentStatus | str = AssignmentStatus.ACTIVE
    assigned_date: str = ""
    assigned_by: str | None = None
    batch: dict[str, Any] | None = None
    course: dict[str, Any] | None = None
    instructor: dict[str, Any] | None = None
    session: dict[str, Any] | None = None

    @model_validator(mode="before")
    @classmethod
    def _populated_references(cls, data: Any) -> Any:
        return _split_references(data, ("batch", "course", "instructor", "session"))
