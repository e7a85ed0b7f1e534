[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "binlogkit"
version = "0.1.0"
description = "Decoders for MySQL binary log column values and binary JSON documents"
requires-python = ">=3.10"
dependencies = []
keywords = ["mysql", "binlog", "replication", "json", "decoder", "cdc"]
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
packages = ["binlogkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
