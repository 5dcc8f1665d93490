[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "jitvcs"
version = "0.1.0"
description = "A small content-addressed version control system with an interactive shell"
requires-python = ">=3.10"
dependencies = []
keywords = ["version control", "vcs", "repository", "commit", "branch"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Version Control",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
jit = "jitvcs.cli:main"

[tool.setuptools.packages.find]
include = ["jitvcs*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
