[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "alphachess"
version = "0.1.0"
description = "Chess rules with legal-move generation and an alpha-beta search opponent, playable from the terminal"
requires-python = ">=3.10"
dependencies = []
keywords = ["chess", "alpha-beta", "minimax", "game", "board-game"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
alphachess = "alphachess.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["alphachess"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
