[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tacgen"
version = "0.1.0"
description = "Symbol tables, expression typing and three-address code generation over syntax trees of a small language"
requires-python = ">=3.10"
dependencies = []
keywords = ["compiler", "three-address code", "symbol table", "semantic analysis", "intermediate representation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tacgen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
