[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "gestorapps"
version = "0.1.0"
description = "An application catalogue with user accounts, installs, favourites and licence tracking on SQLite"
requires-python = ">=3.10"
dependencies = []
keywords = ["application manager", "catalogue", "licences", "sqlite", "users"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: Spanish",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
    "Topic :: System :: Software Distribution",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gestorapps = "gestorapps.cli:main"

[tool.setuptools.packages.find]
include = ["gestorapps*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
