[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "funcwander"
version = "1.0.0"
description = "Exhaustive search for compositions of elementary functions that reproduce a target table of values"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "function search",
    "program synthesis",
    "expression enumeration",
    "bit manipulation",
    "a-law",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
funcwander-alaw = "funcwander.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["funcwander"]

[tool.hatch.build.targets.sdist]
include = ["funcwander", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
