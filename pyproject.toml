[build-system]
requires = ["setuptools>=61"]
build-backend = "setuptools.build_meta"

[project]
name = "mycash"
version = "0.1.0"
description = "A small interactive mobile-wallet console: members, transfers, cash-in/out and bill payments."
requires-python = ">=3.10"
dependencies = []
keywords = ["wallet", "mobile money", "console", "otp"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mycash = "mycash.cli:main"

[tool.setuptools.packages.find]
include = ["mycash*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
