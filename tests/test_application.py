from unittest.mock import Mock, call

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from amazing_form.application import (
    CourseAssignmentUseCase,
    CourseUseCase,
    FormQuestionUseCase,
    FormUseCase,
)
from amazing_form.domain import (
    Course,
    CourseAssignment,
    Form,
    FormQuestion,
    FormQuestionType,
)
from amazing_form.models import Base
from amazing_form.repositories import (
    CourseRepository,
    FormQuestionRepository,
    RecordNotFoundError,
)


@pytest.fixture
def engine():
    eng = create_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.mark.parametrize(
    "use_case_cls, items",
    [
        (CourseUseCase, [Course(id=1, title="A"), Course(id=2, title="B")]),
        (CourseAssignmentUseCase, [CourseAssignment(id=1), CourseAssignment(id=2)]),
        (FormQuestionUseCase, [FormQuestion(id=1), FormQuestion(id=2)]),
        (FormUseCase, [Form(id=1), Form(id=2)]),
    ],
)
def test_use_case_delegates_every_operation(use_case_cls, items):
    repo = Mock()
    repo.find_all.return_value = items
    repo.find_all_with_pagination.return_value = items[:1]
    repo.find_by_id.return_value = items[0]
    use_case = use_case_cls(repo)

    assert use_case.find_all() == items
    assert use_case.find_all_with_pagination(1, 1) == items[:1]
    assert use_case.find_by_id(7) == items[0]
    assert use_case.create(items[1]) is None
    assert use_case.update(items[1]) is None
    assert use_case.delete(9) is None

    assert repo.mock_calls == [
        call.find_all(),
        call.find_all_with_pagination(1, 1),
        call.find_by_id(7),
        call.create(items[1]),
        call.update(items[1]),
        call.delete(9),
    ]


def test_form_use_case_passes_filters_through():
    forms = [Form(id=4)]
    repo = Mock()
    repo.find_all_filtered.return_value = forms

    assert FormUseCase(repo).find_all_filtered(3, None, 2, 5) == forms
    assert repo.mock_calls == [call.find_all_filtered(3, None, 2, 5)]


def test_use_case_propagates_repository_errors():
    repo = Mock()
    repo.find_by_id.side_effect = RecordNotFoundError("courses", 1)
    with pytest.raises(RecordNotFoundError):
        CourseUseCase(repo).find_by_id(1)


def test_course_use_case_with_database(engine):
    use_case = CourseUseCase(CourseRepository(engine))
    use_case.create(Course(title="Maths", description="Numbers and more"))

    courses = use_case.find_all()
    assert [c.title for c in courses] == ["Maths"]

    found = use_case.find_by_id(courses[0].id)
    assert found.description == "Numbers and more"

    use_case.delete(found.id)
    with pytest.raises(RecordNotFoundError):
        use_case.find_by_id(found.id)


def test_form_question_use_case_update_round_trip(engine):
    use_case = FormQuestionUseCase(FormQuestionRepository(engine))
    use_case.create(FormQuestion(question="Why?", type=FormQuestionType.RADIO))
    stored = use_case.find_all()[0]

    stored.question = "Why not?"
    use_case.update(stored)

    reloaded = use_case.find_by_id(stored.id)
    assert reloaded.question == "Why not?"
    assert reloaded.type is FormQuestionType.RADIO