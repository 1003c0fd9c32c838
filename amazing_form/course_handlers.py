"""HTTP handlers for courses and course assignments."""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Optional, TypeVar

from flask import jsonify, request

from .domain import Course, CourseAssignment
from .dto import ValidationError, course_input_from_dict

logger = logging.getLogger(__name__)

E = TypeVar("E")

_INTEGER = re.compile(r"[+-]?[0-9]+")
_BIND_ERRORS = (ValueError, TypeError, AttributeError)


def _atoi(text: str) -> Optional[int]:
    return int(text) if _INTEGER.fullmatch(text) else None


def _path_id(raw: str) -> int:
    value = _atoi(raw)
    return 0 if value is None else value


def _payload() -> dict[str, Any]:
    """Read the request body as JSON when declared so, else as form fields."""
    if request.is_json:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("request body must be a JSON object")
        return data
    return request.form.to_dict()


def _bind_onto(entity: Any, factory: Callable[[dict[str, Any]], E]) -> E:
    merged = entity.to_dict()
    merged.update(_payload())
    return factory(merged)


def _list_response(use_case: Any):
    page_str = request.args.get("page", "")
    limit_str = request.args.get("limit", "")
    items = None
    if page_str and limit_str:
        page, limit = _atoi(page_str), _atoi(limit_str)
        if page is not None and limit is not None:
            try:
                items = use_case.find_all_with_pagination(page, limit)
            except Exception as exc:
                return jsonify({"error": str(exc)}), 400
    else:
        try:
            items = use_case.find_all()
        except Exception:
            items = None
    return jsonify({"message": [i.to_dict() for i in items] if items else None}), 200


class _ResourceHandler:
    """Route registration and the by-id operations shared by both handlers."""

    base = ""
    entity: Any = None
    routes: tuple[tuple[str, str, str], ...] = ()
    not_found = ""
    item_key = ""
    updated = ""
    delete_not_found = ""
    deleted = ""

    use_case: Any

    def _register(self, app: Any) -> None:
        for suffix, method, name in self.routes:
            app.add_url_rule(
                self.base + suffix, name, getattr(self, name), methods=[method]
            )

    def _show(self, item_id: str):
        try:
            item = self.use_case.find_by_id(_path_id(item_id))
        except Exception:
            return jsonify({"message": self.not_found}), 400
        return jsonify({self.item_key: item.to_dict()}), 200

    def _update(self, item_id: str):
        try:
            item = self.use_case.find_by_id(_path_id(item_id))
        except Exception:
            return jsonify({"message": self.not_found}), 400
        try:
            item = _bind_onto(item, self.entity.from_dict)
        except _BIND_ERRORS:
            return jsonify({}), 400
        try:
            self.use_case.update(item)
        except Exception:
            return jsonify({}), 500
        return jsonify({"message": self.updated}), 200

    def _delete(self, item_id: str):
        try:
            self.use_case.delete(_path_id(item_id))
        except Exception:
            return jsonify({"message": self.delete_not_found}), 400
        return jsonify({"message": self.deleted}), 200


class CourseHandler(_ResourceHandler):
    """Routes under /courses."""

    base = "/courses"
    entity = Course
    routes = (
        ("", "GET", "get_courses"),
        ("", "POST", "create_course"),
        ("/<item_id>", "GET", "get_course_by_id"),
        ("/<item_id>", "PUT", "update_course_by_id"),
        ("/<item_id>", "DELETE", "delete_course_by_id"),
    )
    not_found = "course not found"
    item_key = "form"
    updated = "course Updated"
    delete_not_found = "course not found"
    deleted = "course deleted succesfully"

    def __init__(self, use_case: Any) -> None:
        self.use_case = use_case

    def register_routes(self, app: Any) -> None:
        self._register(app)

    def get_courses(self):
        return _list_response(self.use_case)

    def create_course(self):
        try:
            payload = course_input_from_dict(_payload())
        except ValidationError:
            return jsonify({}), 400
        try:
            payload.validate()
        except ValidationError as exc:
            return jsonify({"error": "validation failed", "details": exc.details}), 400
        course = Course(title=payload.title, description=payload.description)
        logger.debug("payload : %s", course)
        try:
            self.use_case.create(course)
        except Exception:
            return jsonify({"message": "unknow sql error"}), 500
        return jsonify({"message": "course created"}), 200

    def get_course_by_id(self, item_id: str):
        return self._show(item_id)

    def update_course_by_id(self, item_id: str):
        return self._update(item_id)

    def delete_course_by_id(self, item_id: str):
        return self._delete(item_id)


class CourseAssignmentHandler(_ResourceHandler):
    """Routes under /course-assignments."""

    base = "/course-assignments"
    entity = CourseAssignment
    routes = (
        ("", "GET", "get_course_assignments"),
        ("/<item_id>", "GET", "get_course_assignment_by_id"),
        ("", "POST", "create_course_assignment"),
        ("/<item_id>", "PUT", "update_course_assignment_by_id"),
        ("/<item_id>", "DELETE", "delete_course_assignment_by_id"),
    )
    not_found = "courseAssignment not found"
    item_key = "courseAssignment"
    updated = "courseAssignment Updated"
    delete_not_found = "user not found"
    deleted = "user deleted succesfully"

    def __init__(self, use_case: Any) -> None:
        self.use_case = use_case

    def register_routes(self, app: Any) -> None:
        self._register(app)

    def get_course_assignments(self):
        return _list_response(self.use_case)

    def create_course_assignment(self):
        try:
            assignment = CourseAssignment.from_dict(_payload())
        except _BIND_ERRORS:
            return jsonify({}), 400
        try:
            self.use_case.create(assignment)
        except Exception:
            return jsonify({"message": "unknow sql error"}), 500
        return jsonify({"message": "courseAssignment created"}), 200

    def get_course_assignment_by_id(self, item_id: str):
        return self._show(item_id)

    def update_course_assignment_by_id(self, item_id: str):
        return self._update(item_id)

    def delete_course_assignment_by_id(self, item_id: str):
        return self._delete(item_id)