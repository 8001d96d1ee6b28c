[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zipforge"
version = "0.1.0"
description = "Write ZIP archives, whole or streamed, with ZIP64 and Info-ZIP Unicode extra field support."
requires-python = ">=3.10"
dependencies = []
keywords = ["zip", "zip64", "archive", "compression", "deflate", "writer"]
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
    "Topic :: System :: Archiving :: Compression",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["zipforge"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
