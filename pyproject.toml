[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "amazing_form"
version = "0.1.0"
description = "HTTP service for managing courses, course assignments, forms and form questions"
requires-python = ">=3.10"
keywords = ["forms", "courses", "rest", "flask", "sqlalchemy"]
classifiers = [
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: Flask",
    "Operating System :: OS Independent",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
]
dependencies = [
    "flask",
    "sqlalchemy",
    "python-dotenv",
    "cachetools",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
amazing-form = "amazing_form.app:main"

[tool.hatch.build.targets.wheel]
packages = ["amazing_form"]

[tool.pytest.ini_options]
addopts = "-ra"
