[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "qlg"
version = "0.0.3"
description = "Minimalist terminal tool for quickly logging categorized notes with tags, project support, and export options"
requires-python = ">=3.10"
dependencies = [
    "platformdirs",
]
keywords = ["notes", "log", "journal", "cli", "sqlite", "tags"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
qlg = "qlg.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["qlg"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
