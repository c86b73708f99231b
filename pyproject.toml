[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dupesweep"
version = "1.0.0"
description = "Find and optionally delete duplicate files by size and content hash"
requires-python = ">=3.10"
dependencies = []
keywords = ["duplicates", "files", "deduplication", "xxhash", "cleanup"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dupesweep = "dupesweep.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["dupesweep"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
