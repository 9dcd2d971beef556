[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mythos"
version = "0.2.0"
description = "Canonical MYTHOS-CAN encoding, content hashing and a conformance test vector pack runner"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "canonical-encoding",
    "content-addressing",
    "sha256",
    "merkle",
    "conformance",
    "test-vectors",
]
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
    "Topic :: Software Development :: Testing",
    "Topic :: File Formats",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ctvp-runner = "mythos.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["mythos"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
