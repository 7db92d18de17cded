[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "itmv"
version = "0.1.0"
description = "Iterative Jacobi matrix-vector multiplication with threaded block and block-cyclic row mapping"
requires-python = ">=3.10"
dependencies = []
keywords = ["jacobi", "matrix-vector", "threads", "barrier", "parallel"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
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
itmv-test = "itmv.driver:main"

[tool.setuptools.packages.find]
include = ["itmv*"]

[tool.pytest.ini_options]
addopts = "-ra"
