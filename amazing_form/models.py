"""Database records and their conversion to and from domain entities."""

from typing import Any, List, Optional

from sqlalchemy import Boolean, ForeignKey, Integer, Text
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from .domain import Course, CourseAssignment, Form, FormQuestion, FormQuestionType


class Base(DeclarativeBase):
    """Declarative base shared by every table."""


def _loaded(record: Any, key: str, default: Any) -> Any:
    """Return a relationship value, or the default when it was never loaded."""
    if key in sa_inspect(record).unloaded:
        return default
    value = getattr(record, key)
    return default if value is None else value


class CourseRecord(Base):
    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, default="")
    description: Mapped[str] = mapped_column(Text, default="")

    assignments: Mapped[List["CourseAssignmentRecord"]] = relationship(
        "CourseAssignmentRecord",
        foreign_keys="CourseAssignmentRecord.course_id",
        overlaps="course",
    )

    def to_domain(self) -> Course:
        return Course(
            id=self.id or 0,
            title=self.title or "",
            description=self.description or "",
            assignments=[a.to_domain() for a in _loaded(self, "assignments", [])],
        )


class CourseAssignmentRecord(Base):
    __tablename__ = "course_assignments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    course_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("courses.id"), nullable=True
    )
    class_group_id: Mapped[int] = mapped_column(Integer, default=0)
    trainer_id: Mapped[int] = mapped_column(Integer, default=0)

    course: Mapped[Optional[CourseRecord]] = relationship(
        CourseRecord, foreign_keys=[course_id], overlaps="assignments"
    )
    forms: Mapped[List["FormRecord"]] = relationship(
        "FormRecord",
        foreign_keys="FormRecord.course_assignment_id",
        overlaps="course_assignment",
    )

    def to_domain(self) -> CourseAssignment:
        course = _loaded(self, "course", None)
        return CourseAssignment(
            id=self.id or 0,
            course_id=self.course_id or 0,
            class_group_id=self.class_group_id or 0,
            trainer_id=self.trainer_id or 0,
            course=course.to_domain() if course is not None else Course(),
        )


class FormRecord(Base):
    __tablename__ = "forms"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    mother_id: Mapped[Optional[int]] = mapped_column(
        "mother_id", ForeignKey("forms.id"), nullable=True
    )
    course_assignment_id: Mapped[Optional[int]] = mapped_column(
        "course_assignment_id", ForeignKey("course_assignments.id"), nullable=True
    )

    mother_form: Mapped[Optional["FormRecord"]] = relationship(
        "FormRecord", remote_side="FormRecord.id", foreign_keys=[mother_id]
    )
    course_assignment: Mapped[Optional[CourseAssignmentRecord]] = relationship(
        CourseAssignmentRecord, foreign_keys=[course_assignment_id], overlaps="forms"
    )
    form_questions: Mapped[List["FormQuestionRecord"]] = relationship(
        "FormQuestionRecord", cascade="all"
    )

    def to_domain(self) -> Form:
        mother = _loaded(self, "mother_form", None)
        assignment = _loaded(self, "course_assignment", None)
        return Form(
            id=self.id or 0,
            mother_id=self.mother_id,
            mother_form=mother.to_domain() if mother is not None else None,
            course_assignment_id=self.course_assignment_id,
            course_assignment=(
                assignment.to_domain() if assignment is not None else None
            ),
            form_questions=[
                q.to_domain() for q in _loaded(self, "form_questions", [])
            ],
        )


class FormQuestionRecord(Base):
    __tablename__ = "form_questions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    form_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("forms.id", ondelete="CASCADE", onupdate="CASCADE"), nullable=True
    )
    question: Mapped[str] = mapped_column(Text, default="")
    type: Mapped[int] = mapped_column(Integer, default=0)
    options: Mapped[str] = mapped_column(Text, default="")
    is_required: Mapped[bool] = mapped_column(Boolean, default=False)

    def to_domain(self) -> FormQuestion:
        return FormQuestion(
            id=self.id or 0,
            form_id=self.form_id or 0,
            question=self.question or "",
            type=FormQuestionType(self.type or 0),
            options=self.options or "",
            is_required=bool(self.is_required),
        )


def course_from_domain(course: Course) -> CourseRecord:
    record = CourseRecord(
        id=course.id or None, title=course.title, description=course.description
    )
    if course.assignments:
        record.assignments = [
            course_assignment_from_domain(a) for a in course.assignments
        ]
    return record


def course_assignment_from_domain(assignment: CourseAssignment) -> CourseAssignmentRecord:
    record = CourseAssignmentRecord(
        id=assignment.id or None,
        course_id=assignment.course_id or None,
        class_group_id=assignment.class_group_id,
        trainer_id=assignment.trainer_id,
    )
    if assignment.course != Course():
        record.course = course_from_domain(assignment.course)
    return record


def form_from_domain(form: Optional[Form]) -> Optional[FormRecord]:
    """Build a form record; its questions are copied without their ids."""
    if form is None:
        return None
    record = FormRecord(
        id=form.id or None,
        mother_id=form.mother_id,
        course_assignment_id=form.course_assignment_id,
    )
    if form.form_questions:
        record.form_questions = [
            FormQuestionRecord(
                question=q.question,
                type=int(q.type),
                options=q.options,
                is_required=q.is_required,
            )
            for q in form.form_questions
        ]
    return record


def form_question_from_domain(question: FormQuestion) -> FormQuestionRecord:
    return FormQuestionRecord(
        id=question.id or None,
        form_id=question.form_id or None,
        question=question.question,
        type=int(question.type),
        options=question.options,
        is_required=question.is_required,
    )