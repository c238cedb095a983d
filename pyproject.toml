[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "binser"
version = "0.1.0"
description = "Compact binary serialization building blocks: buffer adapters, size prefixes, bit sets, contexts and polymorphic dispatch"
requires-python = ">=3.10"
dependencies = []
keywords = ["serialization", "binary", "bitset", "buffer", "polymorphism"]
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
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["binser"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
