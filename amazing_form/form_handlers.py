"""HTTP handlers for forms and form questions."""

from __future__ import annotations

from typing import Any, Optional

from flask import jsonify, request

from .course_handlers import (
    _BIND_ERRORS,
    _atoi,
    _bind_onto,
    _list_response,
    _path_id,
    _payload,
)
from .domain import Form, FormQuestion
from .dto import ValidationError, form_input_from_dict, form_output_from_domain


def _query_int(name: str) -> Optional[int]:
    raw = request.args.get(name, "")
    return _atoi(raw) if raw else None


class FormHandler:
    """Routes under /forms."""

    def __init__(self, use_case: Any) -> None:
        self.use_case = use_case

    def register_routes(self, app: Any) -> None:
        app.add_url_rule("/forms", "get_forms", self.get_forms, methods=["GET"])
        app.add_url_rule("/forms", "create_form", self.create_form, methods=["POST"])
        app.add_url_rule(
            "/forms/<item_id>", "get_form_by_id", self.get_form_by_id, methods=["GET"]
        )
        app.add_url_rule(
            "/forms/<item_id>",
            "update_form_by_id",
            self.update_form_by_id,
            methods=["PUT"],
        )
        app.add_url_rule(
            "/forms/<item_id>",
            "delete_form_by_id",
            self.delete_form_by_id,
            methods=["DELETE"],
        )

    def get_forms(self):
        course_id = _query_int("course_id")
        class_id = _query_int("class_id")
        page: Optional[int] = None
        limit: Optional[int] = None
        page_str = request.args.get("page", "")
        limit_str = request.args.get("limit", "")
        if page_str and limit_str:
            parsed_page, parsed_limit = _atoi(page_str), _atoi(limit_str)
            if parsed_page is not None and parsed_limit is not None:
                page, limit = parsed_page, parsed_limit

        filters = (course_id, class_id, page, limit)
        try:
            if any(value is not None for value in filters):
                forms = self.use_case.find_all_filtered(*filters)
            else:
                forms = self.use_case.find_all()
        except Exception as exc:
            return jsonify({"error": str(exc)}), 400

        outputs = [form_output_from_domain(f).to_dict() for f in forms or []]
        return jsonify({"message": outputs or None}), 200

    def create_form(self):
        try:
            payload = form_input_from_dict(_payload())
        except ValidationError as exc:
            return jsonify({"error": str(exc)}), 400
        try:
            payload.validate()
        except ValidationError as exc:
            return jsonify({"error": "validation failed", "details": exc.details}), 400
        try:
            self.use_case.create(payload.to_domain())
        except Exception:
            return jsonify({"message": "unknow sql error"}), 500
        return jsonify({"message": "form created"}), 200

    def get_form_by_id(self, item_id: str):
        try:
            form = self.use_case.find_by_id(_path_id(item_id))
        except Exception:
            return jsonify({"message": "form not found"}), 400
        return jsonify({"form": form_output_from_domain(form).to_dict()}), 200

    def update_form_by_id(self, item_id: str):
        try:
            form = self.use_case.find_by_id(_path_id(item_id))
        except Exception:
            return jsonify({"message": "form not found"}), 400
        try:
            form = _bind_onto(form, Form.from_dict)
        except _BIND_ERRORS:
            return jsonify({}), 400
        try:
            self.use_case.update(form)
        except Exception:
            return jsonify({}), 500
        return jsonify({"message": "form Updated"}), 200

    def delete_form_by_id(self, item_id: str):
        try:
            self.use_case.delete(_path_id(item_id))
        except Exception:
            return jsonify({"message": "form not found"}), 400
        return jsonify({"message": "form deleted succesfully"}), 200


class FormQuestionHandler:
    """Routes under /form-questions."""

    def __init__(self, use_case: Any) -> None:
        self.use_case = use_case

    def register_routes(self, app: Any) -> None:
        base = "/form-questions"
        app.add_url_rule(
            base, "get_form_questions", self.get_form_questions, methods=["GET"]
        )
        app.add_url_rule(
            base, "create_form_question", self.create_form_question, methods=["POST"]
        )
        app.add_url_rule(
            f"{base}/<item_id>",
            "get_form_question_by_id",
            self.get_form_question_by_id,
            methods=["GET"],
        )
        app.add_url_rule(
            f"{base}/<item_id>",
            "update_form_question_by_id",
            self.update_form_question_by_id,
            methods=["PUT"],
        )
        app.add_url_rule(
            f"{base}/<item_id>",
            "delete_form_question_by_id",
            self.delete_form_question_by_id,
            methods=["DELETE"],
        )

    def get_form_questions(self):
        return _list_response(self.use_case)

    def create_form_question(self):
        try:
            question = FormQuestion.from_dict(_payload())
        except _BIND_ERRORS:
            return jsonify({}), 400
        try:
            self.use_case.create(question)
        except Exception:
            return jsonify({"message": "unknow sql error"}), 500
        return jsonify({"message": "formQuestion created"}), 200

    def get_form_question_by_id(self, item_id: str):
        try:
            question = self.use_case.find_by_id(_path_id(item_id))
        except Exception:
            return jsonify({"message": "formQuestion not found"}), 400
        return jsonify({"formQuestion": question.to_dict()}), 200

    def update_form_question_by_id(self, item_id: str):
        try:
            question = self.use_case.find_by_id(_path_id(item_id))
        except Exception:
            return jsonify({"message": "formQuestion not found"}), 400
        try:
            question = _bind_onto(question, FormQuestion.from_dict)
        except _BIND_ERRORS:
            return jsonify({}), 400
        try:
            self.use_case.update(question)
        except Exception:
            return jsonify({}), 500
        return jsonify({"message": "formQuestion Updated"}), 200

    def delete_form_question_by_id(self, item_id: str):
        try:
            self.use_case.delete(_path_id(item_id))
        except Exception:
            return jsonify({"message": "formQuestion not found"}), 400
        return jsonify({"message": "formQuestion deleted succesfully"}), 200