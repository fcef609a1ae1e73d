[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "akcli"
version = "0.1.0"
description = "Core pieces of a package-based command-line toolkit: versions, paths, logging, terminal, spinner, config, git and package metadata."
requires-python = ">=3.10"
dependencies = []
keywords = ["cli", "packages", "config", "ini", "terminal", "spinner", "git", "semver", "upgrade"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["akcli"]

[tool.hatch.build.targets.sdist]
include = ["akcli", "tests", "README.md", "pyproject.toml"]

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
