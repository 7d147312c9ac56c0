[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "coemu"
version = "0.1.0"
description = "Game server building blocks for a classic MMORPG: packets, map floors, regions, commands and a map data tool"
requires-python = ">=3.10"
dependencies = []
keywords = ["mmorpg", "game-server", "packets", "maps", "emulator"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Role-Playing",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
coemu-gamemap-decoder = "coemu.gamemap_decoder:main"

[tool.hatch.build.targets.wheel]
packages = ["coemu"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
