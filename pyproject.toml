[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pixelsreader"
version = "0.1.0"
description = "Columnar reading primitives for the Pixels storage format: column vectors, row batches, bit packing and column readers."
requires-python = ">=3.10"
dependencies = []
keywords = ["columnar", "storage", "pixels", "row-batch", "bit-packing", "column-reader"]
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
    "Topic :: Database :: Database Engines/Servers",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pixelsreader"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
