[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mshell"
version = "0.1.0"
description = "Building blocks of a small shell: environment variables, builtin commands and text utilities"
requires-python = ">=3.10"
keywords = ["shell", "builtins", "environment", "echo", "export", "cd"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: System Shells",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mshell"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
