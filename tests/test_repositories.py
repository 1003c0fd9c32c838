import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.pool import StaticPool

from amazing_form.domain import (
    Course,
    CourseAssignment,
    Form,
    FormQuestion,
    FormQuestionType,
)
from amazing_form.models import Base
from amazing_form.repositories import (
    CourseAssignmentRepository,
    CourseRepository,
    FormQuestionRepository,
    FormRepository,
    RecordNotFoundError,
)


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def courses(engine):
    return CourseRepository(engine)


@pytest.fixture
def assignments(engine):
    return CourseAssignmentRepository(engine)


@pytest.fixture
def forms(engine):
    return FormRepository(engine)


@pytest.fixture
def questions(engine):
    return FormQuestionRepository(engine)


def _add_courses(repo, titles):
    for title in titles:
        repo.create(Course(title=title, description="description"))


def test_find_all_empty(courses):
    assert courses.find_all() == []


def test_create_and_find_all(courses):
    courses.create(Course(title="Algebra", description="Linear algebra basics"))
    found = courses.find_all()
    assert [(c.title, c.description) for c in found] == [
        ("Algebra", "Linear algebra basics")
    ]
    assert found[0].id > 0


def test_find_by_id(courses):
    _add_courses(courses, ["a", "b"])
    second = courses.find_all()[1]
    assert courses.find_by_id(second.id) == second


def test_find_by_id_missing(courses):
    with pytest.raises(RecordNotFoundError):
        courses.find_by_id(42)


@pytest.mark.parametrize(
    "page, limit, expected",
    [
        (2, 2, ["c2", "c3"]),
        (0, 2, ["c0", "c1"]),
        (1, -1, ["c0", "c1", "c2", "c3", "c4"]),
        (1, 0, []),
        (3, 2, ["c4"]),
    ],
)
def test_pagination(courses, page, limit, expected):
    _add_courses(courses, ["c0", "c1", "c2", "c3", "c4"])
    found = courses.find_all_with_pagination(page, limit)
    assert [c.title for c in found] == expected


def test_update_changes_fields(courses):
    _add_courses(courses, ["old"])
    course = courses.find_all()[0]
    course.title = "new"
    courses.update(course)
    assert courses.find_by_id(course.id).title == "new"
    assert len(courses.find_all()) == 1


def test_update_unknown_id_inserts(courses):
    courses.update(Course(id=9, title="New", description="description"))
    assert courses.find_by_id(9).title == "New"


def test_create_duplicate_id_raises(courses):
    courses.create(Course(id=3, title="a", description="description"))
    with pytest.raises(IntegrityError):
        courses.create(Course(id=3, title="b", description="description"))


def test_delete(courses):
    _add_courses(courses, ["keep", "drop"])
    keep, drop = courses.find_all()
    courses.delete(drop.id)
    courses.delete(999)
    assert courses.find_all() == [keep]


def test_course_update_keeps_assignments(courses, assignments):
    _add_courses(courses, ["Algebra"])
    course = courses.find_all()[0]
    assignments.create(CourseAssignment(course_id=course.id, class_group_id=2))
    course.title = "Geometry"
    courses.update(course)
    assert assignments.find_all()[0].course_id == course.id


def test_assignment_creates_nested_course(courses, assignments):
    assignments.create(
        CourseAssignment(
            class_group_id=3,
            trainer_id=4,
            course=Course(title="Physics", description="Mechanics and waves"),
        )
    )
    created = assignments.find_all()
    stored_courses = courses.find_all()
    assert [c.title for c in stored_courses] == ["Physics"]
    assert created[0].course_id == stored_courses[0].id
    assert created[0].course == Course()


def test_assignment_update_and_delete(assignments):
    assignments.create(CourseAssignment(course_id=1, class_group_id=2, trainer_id=3))
    assignment = assignments.find_all()[0]
    assignment.trainer_id = 7
    assignments.update(assignment)
    assert assignments.find_by_id(assignment.id).trainer_id == 7
    assignments.delete(assignment.id)
    with pytest.raises(RecordNotFoundError):
        assignments.find_by_id(assignment.id)


def _new_form(**kwargs):
    return Form(
        form_questions=[
            FormQuestion(question="Name?", type=FormQuestionType.FIELD),
            FormQuestion(
                question="Score?",
                type=FormQuestionType.RATING,
                options='["1", "2"]',
                is_required=True,
            ),
        ],
        **kwargs,
    )


def test_form_create_loads_questions(forms):
    forms.create(_new_form())
    found = forms.find_all()
    assert len(found) == 1
    qs = found[0].form_questions
    assert [q.question for q in qs] == ["Name?", "Score?"]
    assert all(q.form_id == found[0].id for q in qs)
    assert qs[1].type is FormQuestionType.RATING
    assert qs[1].is_required is True


def test_form_update_appends_questions(forms):
    forms.create(_new_form())
    form = forms.find_all()[0]
    forms.update(form)
    assert len(forms.find_by_id(form.id).form_questions) == 2 * len(
        form.form_questions
    )


def test_form_delete_removes_questions(forms, questions):
    forms.create(_new_form())
    form = forms.find_all()[0]
    forms.delete(form.id)
    forms.delete(form.id)
    assert forms.find_all() == []
    assert questions.find_all() == []


def test_form_find_all_does_not_load_mother(forms):
    forms.create(Form())
    mother = forms.find_all()[0]
    forms.create(Form(mother_id=mother.id))
    child = forms.find_all()[1]
    assert child.mother_id == mother.id
    assert child.mother_form is None


def test_form_pagination(forms):
    for _ in range(3):
        forms.create(Form())
    all_forms = forms.find_all()
    assert forms.find_all_with_pagination(2, 2) == all_forms[2:]


def _setup_filtered(courses, assignments, forms):
    _add_courses(courses, ["c1", "c2"])
    first, second = courses.find_all()
    assignments.create(CourseAssignment(course_id=first.id, class_group_id=10))
    assignments.create(CourseAssignment(course_id=second.id, class_group_id=20))
    ca1, ca2 = assignments.find_all()
    forms.create(_new_form(course_assignment_id=ca1.id))
    forms.create(Form(course_assignment_id=ca2.id))
    forms.create(Form(course_assignment_id=ca1.id))
    return first, second, ca1, ca2


def test_filtered_by_course(courses, assignments, forms):
    first, _, ca1, _ = _setup_filtered(courses, assignments, forms)
    found = forms.find_all_filtered(first.id, None, None, None)
    assert [f.course_assignment_id for f in found] == [ca1.id, ca1.id]
    assert found[0].course_assignment.id == ca1.id
    assert found[0].course_assignment.course == Course()
    assert len(found[0].form_questions) == 2


def test_filtered_by_class(courses, assignments, forms):
    _, _, _, ca2 = _setup_filtered(courses, assignments, forms)
    found = forms.find_all_filtered(None, ca2.class_group_id, None, None)
    assert [f.course_assignment_id for f in found] == [ca2.id]


def test_filtered_with_pagination(courses, assignments, forms):
    _setup_filtered(courses, assignments, forms)
    everything = forms.find_all_filtered(None, None, None, None)
    assert len(everything) == 3
    assert forms.find_all_filtered(None, None, 2, 2) == everything[2:]


def test_filtered_loads_mother_form(forms):
    forms.create(Form())
    mother = forms.find_all()[0]
    forms.create(Form(mother_id=mother.id))
    found = forms.find_all_filtered(None, None, 1, 10)
    child = [f for f in found if f.mother_id == mother.id][0]
    assert child.mother_form.id == mother.id


def test_question_create_and_find(questions):
    questions.create(
        FormQuestion(question="Colour?", type=FormQuestionType.SELECT, options='["red"]')
    )
    stored = questions.find_all()[0]
    found = questions.find_by_id(stored.id)
    assert found == stored
    assert (found.question, found.type, found.options) == (
        "Colour?",
        FormQuestionType.SELECT,
        '["red"]',
    )


def test_question_update_and_delete(questions):
    questions.create(FormQuestion(question="Old"))
    stored = questions.find_all()[0]
    stored.question = "New"
    questions.update(stored)
    assert questions.find_by_id(stored.id).question == "New"
    questions.delete(stored.id)
    assert questions.find_all() == []


def test_question_pagination(questions):
    for text in ["q0", "q1", "q2"]:
        questions.create(FormQuestion(question=text))
    found = questions.find_all_with_pagination(1, 2)
    assert [q.question for q in found] == ["q0", "q1"]