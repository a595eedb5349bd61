[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "celltui"
version = "0.1.0"
description = "Cell-based terminal UI toolkit: windows, widgets and an embeddable virtual terminal model"
requires-python = ">=3.10"
dependencies = [
    "regex",
    "wcwidth",
]
keywords = ["terminal", "tui", "widgets", "vt100", "xterm", "console"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: User Interfaces",
    "Topic :: Terminals",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["celltui"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
