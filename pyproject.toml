[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sentencekit"
version = "0.1.0"
description = "Composable sentence filters for extracted text: repetition removal, replacement scripts, regex filters, thread linking, translation and dictionary lookups."
requires-python = ">=3.10"
keywords = [
    "text",
    "filter",
    "sentence",
    "repetition",
    "replacement",
    "regex",
    "translation",
    "dictionary",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Natural Language :: English",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Filters",
    "Topic :: Text Processing :: Linguistic",
]
dependencies = [
    "websocket-client",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["sentencekit"]

[tool.hatch.build.targets.sdist]
include = [
    "sentencekit",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
