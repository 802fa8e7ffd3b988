[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "treasurehunt"
version = "1.0.0"
description = "Manage treasure hunts kept as directories of fixed-size treasure records, with an action log."
requires-python = ">=3.10"
dependencies = []
keywords = ["treasure", "hunt", "game", "records", "cli"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
treasure-manager = "treasurehunt.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["treasurehunt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
