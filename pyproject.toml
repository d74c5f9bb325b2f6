[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "merkledrop"
version = "0.1.0"
description = "Merkle-tree token airdrops: distribution lists, proofs, claims and an in-memory ledger state"
requires-python = ">=3.10"
dependencies = []
keywords = ["merkle", "airdrop", "merkle-proof", "distribution", "tokens", "bech32"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
merkledrop = "merkledrop.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["merkledrop"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
