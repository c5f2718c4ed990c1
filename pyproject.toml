[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "enginekit"
version = "0.1.0"
description = "3D maths primitives, culling frustums and typed property values for game engines"
requires-python = ">=3.10"
dependencies = []
keywords = ["vector", "matrix", "quaternion", "frustum", "geometry", "collision", "property"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Games/Entertainment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["enginekit*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
