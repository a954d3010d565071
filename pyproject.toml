[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "xcl"
version = "2.2.2"
description = "Containers, handle tables, a JSON tree and a rotating file logger"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "red-black tree",
    "heap",
    "hash table",
    "linked list",
    "sorted map",
    "handle table",
    "json",
    "logging",
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
    "Topic :: Software Development :: Libraries",
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["xcl"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
