[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "admspacetime"
version = "0.1.0"
description = "3+1 ADM evolution of spatial geometry on uniform Cartesian grids, with Christoffel symbols, constraints and matter sources"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "general relativity",
    "ADM",
    "numerical relativity",
    "Christoffel symbols",
    "extrinsic curvature",
    "Runge-Kutta",
]
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
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["admspacetime"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
