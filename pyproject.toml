[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "opengemini-client"
version = "0.1.0"
description = "Client-side building blocks for openGemini: query results, statement parsing, retention policy statements, endpoint selection and columnar write requests."
requires-python = ">=3.10"
dependencies = []
keywords = ["opengemini", "time-series", "database", "line-protocol", "client"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database :: Front-Ends",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["opengemini_client"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
