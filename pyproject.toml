[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "spemulator"
version = "0.1.0"
description = "Emulated gantry and robot services with configurable delays, failures and failure causes"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "emulator",
    "mock",
    "robot",
    "gantry",
    "service",
    "testing",
    "automation",
    "asyncio",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Manufacturing",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: AsyncIO",
    "Topic :: Software Development :: Testing :: Mocking",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["spemulator"]

[tool.hatch.build.targets.sdist]
include = [
    "spemulator",
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
