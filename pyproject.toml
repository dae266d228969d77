[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rocketfactory"
version = "0.1.0"
description = "Building blocks for the inventory, order and payment services of a rocket parts factory: models, configuration, converters, repositories and RPC handlers."
requires-python = ">=3.10"
keywords = ["inventory", "orders", "payments", "mongodb", "postgresql", "rocket-parts"]
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
    "Topic :: Office/Business",
    "Typing :: Typed",
]
dependencies = [
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["rocketfactory"]

[tool.hatch.build.targets.sdist]
include = ["rocketfactory", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
