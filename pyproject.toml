[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "inscripciones"
version = "0.1.0"
description = "Console system for loading, querying and exporting university course enrolments stored in SQLite"
requires-python = ">=3.10"
dependencies = []
keywords = ["enrolment", "university", "students", "courses", "sqlite", "console"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Natural Language :: Spanish",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
inscripciones = "inscripciones.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["inscripciones"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
