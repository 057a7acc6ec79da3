[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sherlock13"
version = "0.1.0"
description = "Networked four-player Sherlock 13 deduction game: a turn server and a graphical client"
requires-python = ">=3.10"
keywords = ["game", "board game", "deduction", "sherlock", "multiplayer"]
classifiers = [
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Intended Audience :: End Users/Desktop",
    "Topic :: Games/Entertainment :: Board Games",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
sherlock13-server = "sherlock13.server:main"
sherlock13-client = "sherlock13.gui:main"

[tool.hatch.build.targets.wheel]
packages = ["sherlock13"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
