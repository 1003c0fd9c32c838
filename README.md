# amazing_form

A small HTTP service for managing courses, course assignments, forms and the
questions that make up each form. It exposes a JSON API built with Flask and
stores its data through SQLAlchemy.

## Installation

```
pip install .
```

The server connects to MariaDB/MySQL with a `mysql+pymysql` URL, so the
PyMySQL driver has to be installed next to the package for that:

```
pip install pymysql
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
amazing-form
```

The command (`amazing_form.app:main`) connects to the database, creates the
tables that do not exist yet, and serves on `0.0.0.0`. The port comes from
`FORM_PORT`; if that is not set, a local `.env` file is read, and if it is
still unset the port is `8081`.

The database connection is configured with these variables (also read from
`.env`):

| Variable           | Default     |
|--------------------|-------------|
| `MARIADB_USER`     |             |
| `MARIADB_PASSWORD` |             |
| `MARIADB_DATABASE` |             |
| `MARIADB_HOST`     | `localhost` |
| `MARIADB_PORT`     | `3306`      |

`amazing_form.database.init_db` tries to connect up to ten times, two seconds
apart, and raises `ConnectionError` when every attempt fails; the command then
exits with status 1.

## Endpoints

Every resource has the same five routes:

| Method | Path               | Action    |
|--------|--------------------|-----------|
| GET    | `/<resource>`      | list      |
| POST   | `/<resource>`      | create    |
| GET    | `/<resource>/<id>` | fetch one |
| PUT    | `/<resource>/<id>` | update    |
| DELETE | `/<resource>/<id>` | delete    |

The resources are `courses`, `course-assignments`, `forms` and
`form-questions`. Lists are returned under the `message` key (`null` when
empty).

Lists accept `page` and `limit` query parameters, which must be given
together. `GET /forms` also filters on `course_id` and `class_id`, which
match the course assignment that a form belongs to.

Creating a course needs a `title` of at least 3 characters and a
`description` of at least 10. Creating a form needs a `form_questions` list.
Each question has a `question` text, a `type` (`field`, `rating`, `radio` or
`select`, unknown names becoming `field`), an optional `options` string
holding a JSON array, and `is_required`. Deleting a form also deletes its
questions.

## Using it from Python

```python
from sqlalchemy import create_engine
from amazing_form.app import create_app

app = create_app(create_engine("sqlite://"))
client = app.test_client()
print(client.get("/forms").status_code)
```

The layers can also be used on their own: `amazing_form.repositories`
(`CourseRepository`, `CourseAssignmentRepository`, `FormRepository`,
`FormQuestionRepository`, each taking an SQLAlchemy engine and raising
`RecordNotFoundError` for unknown ids), the use cases in
`amazing_form.application`, and the request and response shapes in
`amazing_form.dto`. `amazing_form.cache.CacheService` is a small in-memory
cache with per-entry expiry; the web application does not use it.