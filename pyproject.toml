[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jtools"
version = "0.1.0"
description = "Small toolchain utilities: an ELF64 header inspector and an assembly source lexer"
requires-python = ">=3.10"
dependencies = []
keywords = ["elf", "elf64", "assembly", "lexer", "x86-64", "binary"]
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
    "Topic :: Software Development :: Assemblers",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
jtools-elf = "jtools.elf:main"
jtools-jas = "jtools.jas:main"

[tool.hatch.build.targets.wheel]
packages = ["jtools"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
