[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "arana"
version = "0.1.0"
description = "SQL statement tree, weighted data-source selection and runtime helpers for a database proxy"
requires-python = ">=3.10"
dependencies = []
keywords = ["sql", "ast", "database", "proxy", "sharding", "mysql"]
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
    "Topic :: Database",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["arana"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
