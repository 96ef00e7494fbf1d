[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "boardkit"
version = "0.1.0"
description = "A data-driven engine for turn-based board games: entities, typed properties, modifiers, phases and player interactions."
requires-python = ">=3.10"
keywords = ["board game", "game engine", "turn-based", "entities", "phases"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Board Games",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["boardkit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
