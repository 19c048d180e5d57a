"""Enrollment workflows: assessments, course grades, enrollments and instructor assignments.

These endpoints live under ``/enrollment`` and, unlike most collections,
replace documents with PUT on update (see ``update_method`` in
resources.yaml). Workflow actions (publish, close, grade, submit to the
exam committee...) are plain POSTs on sub-paths of the item.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from portal_client.api.resource_client import ResourceClient
from portal_client.models.entities import (
    Assessment,
    AssessmentSubmission,
    AssessmentType,
    CourseGrade,
    Enrollment,
    InstructorAssignment,
)
from portal_client.models.envelope import Page
from portal_client.services.typed import ModelResource

ASSESSMENTS_PATH = "/enrollment/assessments"
GRADES_PATH = "/enrollment/grades"
RESULT_WORKFLOW_PATH = "/enrollment/result-workflow"
ENROLLMENTS_PATH = "/enrollment/enrollments"
INSTRUCTOR_ASSIGNMENTS_PATH = "/enrollment/batch-course-instructors"


def _params(params: Mapping[str, Any] | None) -> dict[str, Any] | None:
    return dict(params) if params else None


class AssessmentService:
    """Assessments, their types and student submissions."""

    def __init__(self, resource: ResourceClient) -> None:
        self.resource = resource
        self.crud: ModelResource[Assessment] = ModelResource(resource, Assessment)
        self.types: ModelResource[AssessmentType] = ModelResource(
            ResourceClient(
                resource.api.base_url,
                resource.url("types"),
                resource_key="types",
                api=resource.api,
                update_method="PUT",
            ),
            AssessmentType,
        )
        self.submissions: ModelResource[AssessmentSubmission] = ModelResource(
            ResourceClient(
                resource.api.base_url,
                resource.url("submissions"),
                api=resource.api,
                update_method="PUT",
            ),
            AssessmentSubmission,
        )

    async def _action(self, item_id: str, action: str) -> Assessment:
        return self.crud.parse(await self.resource.api.post(self.resource.url(item_id, action)))

    async def publish(self, item_id: str) -> Assessment:
        return await self._action(item_id, "publish")

    async def close(self, item_id: str) -> Assessment:
        return await self._action(item_id, "close")

    async def mark_graded(self, item_id: str) -> Assessment:
        return await self._action(item_id, "mark-graded")

    async def get_student_assessments(self, student_id: str, course_id: str) -> list[Assessment]:
        items = await self.resource.api.get_list(
            self.resource.url("student", student_id, "course", course_id)
        )
        return self.crud.parse_many(items)

    # ------------------------------------------------------------------
    # Submissions
    # ------------------------------------------------------------------

    async def submit(self, data: Mapping[str, Any]) -> AssessmentSubmission:
        """Submit a student's work: ``assessmentId``, ``enrollmentId``, optional ``content``/``attachments``."""
        return await self.submissions.create(data)

    async def update_submission(self, submission_id: str, data: Mapping[str, Any]) -> AssessmentSubmission:
        return await self.submissions.update(submission_id, data)

    async def grade_submission(
        self, submission_id: str, obtained_marks: float, feedback: str | None = None
    ) -> AssessmentSubmission:
        payload: dict[str, Any] = {"obtainedMarks": obtained_marks}
        if feedback is not None:
            payload["feedback"] = feedback
        sub = self.submissions.resource
        return self.submissions.parse(await sub.api.post(sub.url(submission_id, "grade"), payload))

    async def list_submissions(self, params: Mapping[str, Any] | None = None) -> Page[AssessmentSubmission]:
        return await self.submissions.get_all(params)

    async def get_assessment_submissions(self, assessment_id: str) -> list[AssessmentSubmission]:
        items = await self.resource.api.get_list(self.resource.url(assessment_id, "submissions"))
        return self.submissions.parse_many(items)

    async def get_submission_stats(self, assessment_id: str) -> Any:
        return await self.resource.api.get(self.resource.url(assessment_id, "submissions", "stats"))


class CourseGradeService:
    """Course grade calculation, publication and the exam committee result workflow."""

    def __init__(self, resource: ResourceClient) -> None:
        self.resource = resource
        self.crud: ModelResource[CourseGrade] = ModelResource(resource, CourseGrade)
        self.workflow = ResourceClient(resource.api.base_url, RESULT_WORKFLOW_PATH, api=resource.api)

    async def calculate(self, data: Mapping[str, Any]) -> CourseGrade:
        return await self.crud.create(data)

    async def auto_calculate(self, enrollment_id: str) -> CourseGrade:
        return self.crud.parse(
            await self.resource.api.post(self.resource.url("auto-calculate", enrollment_id))
        )

    async def publish(self, grade_id: str) -> CourseGrade:
        return self.crud.parse(await self.resource.api.post(self.resource.url(grade_id, "publish")))

    async def unpublish(self, grade_id: str) -> CourseGrade:
        return self.crud.parse(await self.resource.api.post(self.resource.url(grade_id, "unpublish")))

    async def get_student_semester_grades(self, student_id: str, semester: int) -> list[CourseGrade]:
        items = await self.resource.api.get_list(
            self.resource.url("student", student_id, "semester", semester)
        )
        return self.crud.parse_many(items)

    async def semester_gpa(self, student_id: str, semester: int) -> float:
        result = await self.resource.api.get(
            self.resource.url("student", student_id, "semester", semester, "gpa")
        )
        return float(result["gpa"])

    async def cgpa(self, student_id: str) -> float:
        result = await self.resource.api.get(self.resource.url("student", student_id, "cgpa"))
        return float(result["cgpa"])

    async def bulk_save_marks(self, data: Mapping[str, Any]) -> Any:
        return await self.resource.api.post(self.resource.url("bulk-entry"), dict(data))

    # ------------------------------------------------------------------
    # Result workflow
    # ------------------------------------------------------------------

    async def submit_to_committee(
        self,
        grade_id: str | None = None,
        *,
        course_id: str | None = None,
        batch_id: str | None = None,
        semester: int | None = None,
    ) -> Any:
        """Submit one grade, or a whole course/batch/semester, for committee approval."""
        if grade_id is not None:
            payload: dict[str, Any] = {"gradeId": grade_id}
        elif course_id and batch_id and semester is not None:
            payload = {"courseId": course_id, "batchId": batch_id, "semester": semester}
        else:
            raise ValueError("submit_to_committee needs a grade_id or course_id, batch_id and semester")
        return await self.workflow.api.post(self.workflow.url("submit"), payload)

    async def approve_by_committee(self, workflow_id: str, otp: str, comment: str | None = None) -> Any:
        payload: dict[str, Any] = {"otp": otp}
        if comment is not None:
            payload["comment"] = comment
        return await self.workflow.api.post(self.workflow.url(workflow_id, "approve"), payload)

    async def return_to_teacher(self, workflow_id: str, comment: str, otp: str) -> Any:
        return await self.workflow.api.post(
            self.workflow.url(workflow_id, "return-to-teacher"), {"comment": comment, "otp": otp}
        )

    async def publish_result(self, workflow_id: str, otp: str) -> Any:
        return await self.workflow.api.post(self.workflow.url(workflow_id, "publish"), {"otp": otp})

    async def get_workflows(self, params: Mapping[str, Any] | None = None) -> list[Any]:
        return await self.workflow.api.get_list(self.workflow.resource_path, params=_params(params))


class EnrollmentService:
    def __init__(self, resource: ResourceClient) -> None:
        self.resource = resource
        self.crud: ModelResource[Enrollment] = ModelResource(resource, Enrollment)

    async def enroll_student(self, data: Mapping[str, Any]) -> Enrollment:
        return await self.crud.create(data)

    async def bulk_enroll(
        self, batch_id: str, course_ids: Iterable[str], semester: int, academic_year: str
    ) -> Any:
        """Enroll every student of a batch in the given courses."""
        return await self.resource.api.post(
            self.resource.url("bulk"),
            {
                "batchId": batch_id,
                "courseIds": list(course_ids),
                "semester": semester,
                "academicYear": academic_year,
            },
        )

    async def complete_batch_semester(self, batch_id: str, semester: int) -> Any:
        return await self.resource.api.post(
            self.resource.url("complete-semester"), {"batchId": batch_id, "semester": semester}
        )

    async def progress_batch_semester(self, batch_id: str) -> Any:
        return await self.resource.api.post(self.resource.url("batch", batch_id, "progress-semester"))

    async def get_batch_semester_courses(self, batch_id: str, semester: int) -> list[Any]:
        return await self.resource.api.get_list(
            self.resource.url("batch", batch_id, "semester", semester, "courses")
        )

    async def get_student_semester_enrollments(self, student_id: str, semester: int) -> list[Enrollment]:
        items = await self.resource.api.get_list(
            self.resource.url("student", student_id, "semester", semester)
        )
        return self.crud.parse_many(items)


class InstructorAssignmentService:
    """Batch/course instructor assignments."""

    def __init__(self, resource: ResourceClient) -> None:
        self.resource = resource
        self.crud: ModelResource[InstructorAssignment] = ModelResource(resource, InstructorAssignment)

    async def assign(self, data: Mapping[str, Any]) -> InstructorAssignment:
        return await self.crud.create(data)

    async def bulk_assign(
        self, assignments: Iterable[Mapping[str, Any]]
    ) -> tuple[list[InstructorAssignment], list[Any]]:
        """Assign several instructors at once; returns the created assignments and per-item errors."""
        result = await self.resource.api.post(
            self.resource.url("bulk"), {"assignments": [dict(a) for a in assignments]}
        )
        if not isinstance(result, Mapping):
            return [], []
        return self.crud.parse_many(result.get("results") or []), list(result.get("errors") or [])

    async def get_instructor_courses(self, instructor_id: str) -> list[InstructorAssignment]:
        items = await self.resource.api.get_list(
            self.resource.url("instructor", instructor_id, "courses")
        )
        return self.crud.parse_many(items)

    async def get_course_instructors(self, params: Mapping[str, Any] | None = None) -> list[InstructorAssignment]:
        items = await self.resource.api.get_list(
            self.resource.url("course", "instructors"), params=_params(params)
        )
        return self.crud.parse_many(items)
