[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "corewarvm"
version = "0.1.0"
description = "Building blocks of a Core War virtual machine: instruction table, circular memory, processes, instructions and champion files"
requires-python = ">=3.10"
dependencies = []
keywords = ["corewar", "virtual machine", "emulator", "champion"]
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
    "Topic :: System :: Emulators",
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["corewarvm"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
