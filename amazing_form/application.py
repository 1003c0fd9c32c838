"""Use cases that sit between the HTTP handlers and the repositories."""

from __future__ import annotations

from typing import Any, Optional

from .domain import Course, CourseAssignment, Form, FormQuestion


class CourseUseCase:
    """Operations on courses."""

    def __init__(self, repository: Any) -> None:
        self._repository = repository

    def find_all(self) -> list[Course]:
        return self._repository.find_all()

    def find_all_with_pagination(self, page: int, limit: int) -> list[Course]:
        return self._repository.find_all_with_pagination(page, limit)

    def find_by_id(self, item_id: int) -> Course:
        return self._repository.find_by_id(item_id)

    def create(self, obj: Course) -> None:
        self._repository.create(obj)

    def update(self, obj: Course) -> None:
        self._repository.update(obj)

    def delete(self, item_id: int) -> None:
        self._repository.delete(item_id)


class CourseAssignmentUseCase:
    """Operations on course assignments."""

    def __init__(self, repository: Any) -> None:
        self._repository = repository

    def find_all(self) -> list[CourseAssignment]:
        return self._repository.find_all()

    def find_all_with_pagination(self, page: int, limit: int) -> list[CourseAssignment]:
        return self._repository.find_all_with_pagination(page, limit)

    def find_by_id(self, item_id: int) -> CourseAssignment:
        return self._repository.find_by_id(item_id)

    def create(self, obj: CourseAssignment) -> None:
        self._repository.create(obj)

    def update(self, obj: CourseAssignment) -> None:
        self._repository.update(obj)

    def delete(self, item_id: int) -> None:
        self._repository.delete(item_id)


class FormQuestionUseCase:
    """Operations on form questions."""

    def __init__(self, repository: Any) -> None:
        self._repository = repository

    def find_all(self) -> list[FormQuestion]:
        return self._repository.find_all()

    def find_all_with_pagination(self, page: int, limit: int) -> list[FormQuestion]:
        return self._repository.find_all_with_pagination(page, limit)

    def find_by_id(self, item_id: int) -> FormQuestion:
        return self._repository.find_by_id(item_id)

    def create(self, obj: FormQuestion) -> None:
        self._repository.create(obj)

    def update(self, obj: FormQuestion) -> None:
        self._repository.update(obj)

    def delete(self, item_id: int) -> None:
        self._repository.delete(item_id)


class FormUseCase:
    """Operations on forms, including filtered listing."""

    def __init__(self, repository: Any) -> None:
        self._repository = repository

    def find_all(self) -> list[Form]:
        return self._repository.find_all()

    def find_all_with_pagination(self, page: int, limit: int) -> list[Form]:
        return self._repository.find_all_with_pagination(page, limit)

    def find_all_filtered(
        self,
        course_id: Optional[int],
        class_id: Optional[int],
        page: Optional[int],
        limit: Optional[int],
    ) -> list[Form]:
        return self._repository.find_all_filtered(course_id, class_id, page, limit)

    def find_by_id(self, item_id: int) -> Form:
        return self._repository.find_by_id(item_id)

    def create(self, obj: Form) -> None:
        self._repository.create(obj)

    def update(self, obj: Form) -> None:
        self._repository.update(obj)

    def delete(self, item_id: int) -> None:
        self._repository.delete(item_id)