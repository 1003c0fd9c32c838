"""Persistence of domain entities through SQLAlchemy."""

from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import Select, delete, select
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, selectinload, sessionmaker

from .domain import Course, CourseAssignment, Form, FormQuestion
from .models import (
    CourseAssignmentRecord,
    CourseRecord,
    FormQuestionRecord,
    FormRecord,
    course_assignment_from_domain,
    course_from_domain,
    form_from_domain,
    form_question_from_domain,
)


class RecordNotFoundError(LookupError):
    """Raised when no row has the requested id."""

    def __init__(self, table: str, item_id: int) -> None:
        super().__init__("record not found")
        self.table = table
        self.item_id = item_id


def _paginate(stmt: Select, page: int, limit: int) -> Select:
    offset = max((page - 1) * limit, 0)
    if limit >= 0:
        stmt = stmt.limit(limit)
    if offset > 0:
        stmt = stmt.offset(offset)
    return stmt


def _save(session: Session, record: Any, insert: bool = False) -> Any:
    """Upsert a record and the related records it carries; existing links are kept."""
    cls = type(record)
    target = None
    if record.id is not None and not insert:
        target = session.get(cls, record.id)
    if target is None:
        target = cls()
        session.add(target)
    mapper = sa_inspect(cls)
    state = sa_inspect(record)
    for attr in mapper.column_attrs:
        setattr(target, attr.key, getattr(record, attr.key))
    for rel in mapper.relationships:
        if rel.key in state.unloaded:
            continue
        value = getattr(record, rel.key)
        if rel.uselist:
            collection = getattr(target, rel.key)
            for child in value:
                saved = _save(session, child)
                if saved not in collection:
                    collection.append(saved)
        elif value is not None:
            setattr(target, rel.key, _save(session, value))
    return target


class _RecordRepository:
    """Query and write logic shared by every repository."""

    _record: type
    _from_domain: Any
    _options: tuple = ()

    def __init__(self, engine: Engine) -> None:
        self._sessions = sessionmaker(bind=engine, expire_on_commit=False)

    def _select(self) -> Select:
        return select(self._record).options(*self._options).order_by(self._record.id)

    def _fetch(self, stmt: Select) -> list:
        with self._sessions() as session:
            return [record.to_domain() for record in session.scalars(stmt)]

    def _write(self, obj: Any, insert: bool) -> None:
        record = self._from_domain(obj)
        with self._sessions.begin() as session, session.no_autoflush:
            _save(session, record, insert=insert)

    def _find_all(self) -> list:
        return self._fetch(self._select())

    def _find_page(self, page: int, limit: int) -> list:
        return self._fetch(_paginate(self._select(), page, limit))

    def _find_one(self, item_id: int) -> Any:
        stmt = self._select().where(self._record.id == item_id).limit(1)
        with self._sessions() as session:
            record = session.scalars(stmt).first()
            if record is None:
                raise RecordNotFoundError(self._record.__tablename__, item_id)
            return record.to_domain()

    def _delete_row(self, item_id: int) -> None:
        with self._sessions.begin() as session:
            session.execute(delete(self._record).where(self._record.id == item_id))


class CourseRepository(_RecordRepository):
    """Stores courses."""

    _record = CourseRecord
    _from_domain = staticmethod(course_from_domain)

    def __init__(self, engine: Engine) -> None:
        super().__init__(engine)

    def find_all(self) -> list[Course]:
        return self._find_all()

    def find_all_with_pagination(self, page: int, limit: int) -> list[Course]:
        return self._find_page(page, limit)

    def find_by_id(self, item_id: int) -> Course:
        return self._find_one(item_id)

    def create(self, obj: Course) -> None:
        self._write(obj, insert=True)

    def update(self, obj: Course) -> None:
        """Save the course, inserting it when its id is unknown."""
        self._write(obj, insert=False)

    def delete(self, item_id: int) -> None:
        self._delete_row(item_id)


class CourseAssignmentRepository(_RecordRepository):
    """Stores course assignments."""

    _record = CourseAssignmentRecord
    _from_domain = staticmethod(course_assignment_from_domain)

    def __init__(self, engine: Engine) -> None:
        super().__init__(engine)

    def find_all(self) -> list[CourseAssignment]:
        return self._find_all()

    def find_all_with_pagination(self, page: int, limit: int) -> list[CourseAssignment]:
        return self._find_page(page, limit)

    def find_by_id(self, item_id: int) -> CourseAssignment:
        return self._find_one(item_id)

    def create(self, obj: CourseAssignment) -> None:
        self._write(obj, insert=True)

    def update(self, obj: CourseAssignment) -> None:
        """Save the assignment, inserting it when its id is unknown."""
        self._write(obj, insert=False)

    def delete(self, item_id: int) -> None:
        self._delete_row(item_id)


class FormQuestionRepository(_RecordRepository):
    """Stores form questions."""

    _record = FormQuestionRecord
    _from_domain = staticmethod(form_question_from_domain)

    def __init__(self, engine: Engine) -> None:
        super().__init__(engine)

    def find_all(self) -> list[FormQuestion]:
        return self._find_all()

    def find_all_with_pagination(self, page: int, limit: int) -> list[FormQuestion]:
        return self._find_page(page, limit)

    def find_by_id(self, item_id: int) -> FormQuestion:
        return self._find_one(item_id)

    def create(self, obj: FormQuestion) -> None:
        self._write(obj, insert=True)

    def update(self, obj: FormQuestion) -> None:
        """Save the question, inserting it when its id is unknown."""
        self._write(obj, insert=False)

    def delete(self, item_id: int) -> None:
        self._delete_row(item_id)


class FormRepository(_RecordRepository):
    """Stores forms with their questions."""

    _record = FormRecord
    _from_domain = staticmethod(form_from_domain)
    _options = (selectinload(FormRecord.form_questions),)

    def __init__(self, engine: Engine) -> None:
        super().__init__(engine)

    def find_all(self) -> list[Form]:
        return self._find_all()

    def find_all_with_pagination(self, page: int, limit: int) -> list[Form]:
        return self._find_page(page, limit)

    def find_all_filtered(
        self,
        course_id: Optional[int],
        class_id: Optional[int],
        page: Optional[int],
        limit: Optional[int],
    ) -> list[Form]:
        stmt = (
            select(FormRecord)
            .options(
                selectinload(FormRecord.form_questions),
                selectinload(FormRecord.mother_form),
                selectinload(FormRecord.course_assignment),
            )
            .outerjoin(
                CourseAssignmentRecord,
                CourseAssignmentRecord.id == FormRecord.course_assignment_id,
            )
            .order_by(FormRecord.id)
        )
        if course_id is not None:
            stmt = stmt.where(CourseAssignmentRecord.course_id == course_id)
        if class_id is not None:
            stmt = stmt.where(CourseAssignmentRecord.class_group_id == class_id)
        if page is not None and limit is not None:
            stmt = _paginate(stmt, page, limit)
        return self._fetch(stmt)

    def find_by_id(self, item_id: int) -> Form:
        return self._find_one(item_id)

    def create(self, obj: Form) -> None:
        self._write(obj, insert=True)

    def update(self, obj: Form) -> None:
        """Save the form, inserting it when its id is unknown."""
        self._write(obj, insert=False)

    def delete(self, item_id: int) -> None:
        """Delete the form together with its questions."""
        with self._sessions.begin() as session:
            record = session.get(FormRecord, item_id)
            if record is not None:
                session.delete(record)