[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "catscan"
version = "0.1.0"
description = "Scanner and checker for catalog description (.cd) and catalog translation (.ct) files"
requires-python = ">=3.10"
dependencies = []
keywords = ["localization", "catalog", "translation", "i18n", "cd", "ct"]
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
    "Topic :: Software Development :: Localization",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["catscan"]

[tool.hatch.build.targets.sdist]
include = ["catscan", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
