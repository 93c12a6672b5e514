[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "bflypeel"
version = "0.1.0"
description = "Butterfly counting and peeling on bipartite graphs, per vertex and per edge"
requires-python = ">=3.10"
dependencies = []
keywords = ["graph", "bipartite", "butterfly", "peeling", "partitioning"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
bflypeel = "bflypeel.cli:main"
bflypeel-extract = "bflypeel.extract:main"
bflypeel-split = "bflypeel.splitter:main"

[tool.hatch.build.targets.wheel]
packages = ["bflypeel"]

[tool.pytest.ini_options]
addopts = "-ra"
