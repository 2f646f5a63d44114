[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "elevatorgame"
version = "0.1.0"
description = "A side-scrolling elevator action game run headless on a small entity-component-system core"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "ecs", "platformer", "elevator", "tilemap", "headless"]
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
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
elevatorgame = "elevatorgame.game:main"

[tool.hatch.build.targets.wheel]
packages = ["elevatorgame"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
