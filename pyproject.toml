[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "bsptri"
version = "0.1.0"
description = "Binary space partitioning tree for finding which triangles a line segment crosses"
requires-python = ">=3.10"
dependencies = []
keywords = ["bsp", "geometry", "triangle", "segment", "intersection", "spatial-index"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Environment :: Console",
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
bsptri = "bsptri.cli:main"

[tool.setuptools.packages.find]
include = ["bsptri*"]

[tool.pytest.ini_options]
addopts = "-ra"
