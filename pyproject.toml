[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "pairbacktest"
version = "0.1.0"
description = "Core data model for multi-pair trading backtests: assets, leveraged positions, orders, order books and market data."
requires-python = ">=3.10"
dependencies = [
    "sortedcontainers",
]
keywords = ["backtest", "trading", "orders", "futures", "kline", "funding-rate"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Financial and Insurance Industry",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Office/Business :: Financial :: Investment",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.setuptools.packages.find]
include = ["pairbacktest*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
