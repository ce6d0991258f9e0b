[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "latapp"
version = "2.0.0"
description = "Transaction parsing, bech32 addresses and amount formatting for PlatON (LAT) wallets"
requires-python = ">=3.10"
dependencies = [
    "pycryptodome",
]
keywords = ["platon", "lat", "bech32", "rlp", "wallet", "transaction", "uint256"]
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
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["latapp"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
