[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "confdeck"
version = "0.1.0"
description = "Terminal dashboard for a weekly schedule of online conferences"
requires-python = ">=3.11"
keywords = ["schedule", "conference", "terminal", "tui", "meetings"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
]
dependencies = [
    "blessed",
    "platformdirs",
    "pyyaml",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
confdeck = "confdeck.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["confdeck"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
