"""Domain entities shared by the repositories, use cases and handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Mapping, Optional


class FormQuestionType(IntEnum):
    """Kind of input a form question expects."""

    FIELD = 0
    RATING = 1
    RADIO = 2
    SELECT = 3

    def __str__(self) -> str:
        return self.name.capitalize()


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


@dataclass
class FormQuestion:
    """A single question belonging to a form."""

    id: int = 0
    form_id: int = 0
    question: str = ""
    type: FormQuestionType = FormQuestionType.FIELD
    options: str = ""
    is_required: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "form_id": self.form_id,
            "question": self.question,
            "type": int(self.type),
            "options": self.options,
            "is_required": self.is_required,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> FormQuestion:
        return cls(
            id=int(data.get("id", 0)),
            form_id=int(data.get("form_id", 0)),
            question=str(data.get("question", "")),
            type=FormQuestionType(int(data.get("type", 0))),
            options=str(data.get("options", "")),
            is_required=bool(data.get("is_required", False)),
        )


@dataclass
class Course:
    """A course that can be assigned to class groups."""

    id: int = 0
    title: str = ""
    description: str = ""
    assignments: list[CourseAssignment] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "assignments": [a.to_dict() for a in self.assignments],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Course:
        return cls(
            id=int(data.get("id", 0)),
            title=str(data.get("title", "")),
            description=str(data.get("description", "")),
            assignments=[
                CourseAssignment.from_dict(a) for a in data.get("assignments") or []
            ],
        )


@dataclass
class CourseAssignment:
    """The assignment of a course to a class group and a trainer."""

    id: int = 0
    course_id: int = 0
    class_group_id: int = 0
    trainer_id: int = 0
    course: Course = field(default_factory=lambda: Course())

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "course_id": self.course_id,
            "class_group_id": self.class_group_id,
            "trainer_id": self.trainer_id,
            "course": self.course.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CourseAssignment:
        course_data = data.get("course")
        return cls(
            id=int(data.get("id", 0)),
            course_id=int(data.get("course_id", 0)),
            class_group_id=int(data.get("class_group_id", 0)),
            trainer_id=int(data.get("trainer_id", 0)),
            course=Course.from_dict(course_data) if course_data else Course(),
        )


@dataclass
class Form:
    """A form, optionally derived from a mother form and tied to an assignment."""

    id: int = 0
    mother_id: Optional[int] = None
    mother_form: Optional[Form] = None
    course_assignment_id: Optional[int] = None
    course_assignment: Optional[CourseAssignment] = None
    form_questions: list[FormQuestion] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "mother_id": self.mother_id,
            "mother_form": self.mother_form.to_dict() if self.mother_form else None,
            "course_assignment_id": self.course_assignment_id,
            "course_assignment": (
                self.course_assignment.to_dict() if self.course_assignment else None
            ),
            "form_questions": [q.to_dict() for q in self.form_questions],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Form:
        mother = data.get("mother_form")
        assignment = data.get("course_assignment")
        return cls(
            id=int(data.get("id", 0)),
            mother_id=_optional_int(data.get("mother_id")),
            mother_form=cls.from_dict(mother) if mother else None,
            course_assignment_id=_optional_int(data.get("course_assignment_id")),
            course_assignment=(
                CourseAssignment.from_dict(assignment) if assignment else None
            ),
            form_questions=[
                FormQuestion.from_dict(q) for q in data.get("form_questions") or []
            ],
        )