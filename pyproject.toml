[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "hangar"
version = "0.1.0"
description = "Scene hierarchy, bitmask slot pools and plane model lookup for a small flight game engine"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "engine", "scene-graph", "memory-pool", "bitmask", "simulation"]
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
    "Topic :: Games/Entertainment :: Simulation",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["hangar*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
