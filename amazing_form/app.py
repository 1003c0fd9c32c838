"""Application assembly and the command that serves it."""

from __future__ import annotations

import argparse
import logging
import os
from typing import Mapping, Optional, Sequence

from dotenv import load_dotenv
from flask import Flask
from sqlalchemy.engine import Engine

from .application import (
    CourseAssignmentUseCase,
    CourseUseCase,
    FormQuestionUseCase,
    FormUseCase,
)
from .course_handlers import CourseAssignmentHandler, CourseHandler
from .database import init_db
from .form_handlers import FormHandler, FormQuestionHandler
from .models import Base
from .repositories import (
    CourseAssignmentRepository,
    CourseRepository,
    FormQuestionRepository,
    FormRepository,
)

logger = logging.getLogger(__name__)

DEFAULT_PORT = "8081"


def create_app(engine: Optional[Engine] = None) -> Flask:
    """Build the web application on the given engine, connecting when none is given."""
    if engine is None:
        engine = init_db()
    Base.metadata.create_all(engine)

    app = Flask(__name__)
    FormHandler(FormUseCase(FormRepository(engine))).register_routes(app)
    FormQuestionHandler(
        FormQuestionUseCase(FormQuestionRepository(engine))
    ).register_routes(app)
    CourseHandler(CourseUseCase(CourseRepository(engine))).register_routes(app)
    CourseAssignmentHandler(
        CourseAssignmentUseCase(CourseAssignmentRepository(engine))
    ).register_routes(app)
    return app


def get_port(env: Optional[Mapping[str, str]] = None) -> str:
    """Return FORM_PORT, reading .env when it is unset, or the default port."""
    if env is not None:
        return env.get("FORM_PORT") or DEFAULT_PORT
    port = os.environ.get("FORM_PORT", "")
    if not port:
        load_dotenv(".env")
        port = os.environ.get("FORM_PORT", "")
    return port or DEFAULT_PORT


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="amazing-form", description="Serve the forms and courses API."
    )
    parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    try:
        app = create_app()
    except ConnectionError as exc:
        logger.error("%s", exc)
        return 1
    port = get_port()
    try:
        app.run(host="0.0.0.0", port=int(port))
    except (OSError, ValueError) as exc:
        logger.error("server stopped: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())