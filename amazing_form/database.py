"""Database connection set-up from MARIADB_* environment variables."""

from __future__ import annotations

import logging
import os
import time
from typing import Mapping, Optional

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_PORT = "3306"


def _environment(env: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    if env is None:
        load_dotenv()
        return os.environ
    return env


def build_dsn(env: Optional[Mapping[str, str]] = None) -> str:
    """Return the connection URL described by the given environment."""
    values = _environment(env)
    host = values.get("MARIADB_HOST") or DEFAULT_HOST
    port = values.get("MARIADB_PORT") or DEFAULT_PORT
    url = URL.create(
        "mysql+pymysql",
        username=values.get("MARIADB_USER", ""),
        password=values.get("MARIADB_PASSWORD", ""),
        host=host,
        port=int(port),
        database=values.get("MARIADB_DATABASE", ""),
    )
    return url.render_as_string(hide_password=False)


def init_db(
    env: Optional[Mapping[str, str]] = None,
    retries: int = 10,
    delay: float = 2.0,
) -> Engine:
    """Connect to the database, retrying; raise ConnectionError when all attempts fail."""
    dsn = build_dsn(env)
    error: Optional[Exception] = None
    for attempt in range(1, retries + 1):
        engine = create_engine(dsn, connect_args={"connect_timeout": 5})
        try:
            with engine.connect():
                pass
        except SQLAlchemyError as exc:
            error = exc
            engine.dispose()
            logger.warning(
                "DB connection failed (attempt %d/%d): %s", attempt, retries, exc
            )
            if attempt < retries:
                time.sleep(delay)
            continue
        logger.info("Connected to database")
        return engine
    raise ConnectionError(
        f"Failed to connect to DB after {retries} attempts: {error}"
    ) from error