[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "reflectkit"
version = "0.1.0"
description = "CSV type providers, RPN and expression evaluation, object rendering and expression format strings"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "csv",
    "rpn",
    "expressions",
    "formatting",
    "dataclasses",
    "introspection",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Text Processing :: General",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
reflectkit-csv = "reflectkit.csv_provider:main"
reflectkit-rpn = "reflectkit.rpn:main"
reflectkit-funcs = "reflectkit.exprfuncs:main"

[tool.hatch.build.targets.wheel]
packages = ["reflectkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
