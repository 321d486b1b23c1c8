[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shuriken"
version = "0.1.0"
description = "Building blocks for a small build tool: path canonicalization, escaping, string helpers, version checks, timing metrics and command-line flag parsing."
requires-python = ">=3.10"
keywords = ["build", "build-system", "paths", "escaping", "metrics"]
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
    "Topic :: Software Development :: Build Tools",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["shuriken"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
