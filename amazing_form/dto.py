"""Request payloads and response shapes for the HTTP handlers."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .domain import Form, FormQuestion, FormQuestionType


class ValidationError(ValueError):
    """Raised when a payload cannot be bound or fails validation."""

    def __init__(self, message: str, details: str = "") -> None:
        super().__init__(message if not details else f"{message}: {details}")
        self.message = message
        self.details = details or message


def _field_error(path: str, name: str, tag: str) -> str:
    return f"Key: '{path}' Error:Field validation for '{name}' failed on the '{tag}' tag"


def _lookup(data: Mapping[str, Any], *names: str) -> tuple[bool, Any]:
    lowered = {k.lower(): v for k, v in data.items() if isinstance(k, str)}
    for name in names:
        if name.lower() in lowered:
            return True, lowered[name.lower()]
    return False, None


def _as_mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValidationError(f"{what} must be an object")
    return data


def _str_field(data: Mapping[str, Any], *names: str) -> str:
    found, value = _lookup(data, *names)
    if not found or value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"field '{names[0]}' must be a string")
    return value


def _bool_field(data: Mapping[str, Any], *names: str) -> bool:
    found, value = _lookup(data, *names)
    if not found or value is None:
        return False
    if not isinstance(value, bool):
        raise ValidationError(f"field '{names[0]}' must be a boolean")
    return value


def _uint_field(data: Mapping[str, Any], *names: str) -> Optional[int]:
    found, value = _lookup(data, *names)
    if not found or value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValidationError(f"field '{names[0]}' must be a non-negative integer")
    return value


def parse_form_question_type(value: str) -> FormQuestionType:
    """Map a type name, case-insensitively, to a question type; unknown names give FIELD."""
    try:
        return FormQuestionType[value.upper()]
    except KeyError:
        return FormQuestionType.FIELD


@dataclass
class CourseInput:
    title: str = ""
    description: str = ""

    def validate(self) -> CourseInput:
        errors = []
        for name, value, minimum in (
            ("Title", self.title, 3),
            ("Description", self.description, 10),
        ):
            path = f"CourseInput.{name}"
            if not value:
                errors.append(_field_error(path, name, "required"))
            elif len(value) < minimum:
                errors.append(_field_error(path, name, "min"))
        if errors:
            raise ValidationError("validation failed", "\n".join(errors))
        return self


def course_input_from_dict(data: Any) -> CourseInput:
    payload = _as_mapping(data, "course")
    return CourseInput(
        title=_str_field(payload, "title"),
        description=_str_field(payload, "description"),
    )


@dataclass
class FormQuestionInput:
    question: str = ""
    type: str = ""
    options: str = ""
    is_required: bool = False

    def to_domain(self) -> FormQuestion:
        return FormQuestion(
            question=self.question,
            type=parse_form_question_type(self.type),
            options=self.options,
            is_required=self.is_required,
        )


def _form_question_input_from_dict(data: Any) -> FormQuestionInput:
    payload = _as_mapping(data, "form question")
    return FormQuestionInput(
        question=_str_field(payload, "question"),
        type=_str_field(payload, "type"),
        options=_str_field(payload, "options"),
        is_required=_bool_field(payload, "is_required"),
    )


@dataclass
class FormInput:
    mother_id: Optional[int] = None
    course_assignment_id: Optional[int] = None
    form_questions: Optional[list[FormQuestionInput]] = None

    def validate(self) -> FormInput:
        if self.form_questions is None:
            raise ValidationError(
                "validation failed",
                _field_error("FormInput.FormQuestions", "FormQuestions", "required"),
            )
        errors = []
        for index, question in enumerate(self.form_questions):
            prefix = f"FormInput.FormQuestions[{index}]"
            if not question.question:
                errors.append(_field_error(f"{prefix}.Question", "Question", "required"))
            if not question.type:
                errors.append(_field_error(f"{prefix}.Type", "Type", "required"))
        if errors:
            raise ValidationError("validation failed", "\n".join(errors))
        return self

    def to_domain(self) -> Form:
        return Form(
            mother_id=self.mother_id,
            course_assignment_id=self.course_assignment_id,
            form_questions=[q.to_domain() for q in self.form_questions or []],
        )


def form_input_from_dict(data: Any) -> FormInput:
    payload = _as_mapping(data, "form")
    found, raw_questions = _lookup(payload, "form_questions")
    questions: Optional[list[FormQuestionInput]] = None
    if found and raw_questions is not None:
        if not isinstance(raw_questions, list):
            raise ValidationError("field 'form_questions' must be an array")
        questions = [_form_question_input_from_dict(q) for q in raw_questions]
    return FormInput(
        mother_id=_uint_field(payload, "mother_form_id", "MotherId"),
        course_assignment_id=_uint_field(
            payload, "course_assignment_id", "CourseAssignmentId"
        ),
        form_questions=questions,
    )


@dataclass
class FormQuestionOutput:
    id: int
    question: str
    type: str
    is_required: bool
    options: Optional[list[str]] = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "question": self.question,
            "type": self.type,
            "is_required": self.is_required,
        }
        if self.options:
            result["options"] = list(self.options)
        return result


@dataclass
class FormOutput:
    id: int
    course_assignment_id: int
    mother_form: Optional[FormOutput] = None
    form_questions: list[FormQuestionOutput] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "course_assignment_id": self.course_assignment_id,
            "mother_form": self.mother_form.to_dict() if self.mother_form else None,
            "form_questions": (
                [q.to_dict() for q in self.form_questions]
                if self.form_questions
                else None
            ),
        }


def _parse_options(raw: str) -> Optional[list[str]]:
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        return None
    if isinstance(parsed, list) and all(isinstance(o, str) for o in parsed):
        return parsed
    return None


def form_question_outputs_from_domain(
    questions: list[FormQuestion],
) -> list[FormQuestionOutput]:
    return [
        FormQuestionOutput(
            id=q.id,
            question=q.question,
            type=chr(int(q.type)),
            is_required=q.is_required,
            options=_parse_options(q.options),
        )
        for q in questions
    ]


def form_output_from_domain(form: Optional[Form]) -> Optional[FormOutput]:
    if form is None:
        return None
    return FormOutput(
        id=form.id,
        course_assignment_id=form.course_assignment_id or 0,
        mother_form=form_output_from_domain(form.mother_form),
        form_questions=form_question_outputs_from_domain(form.form_questions),
    )