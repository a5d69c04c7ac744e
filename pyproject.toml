[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "marketdesk"
version = "1.0.0"
description = "Interactive supermarket desk: stock, customers, club members, shopping carts and billing with plain or compressed storage"
requires-python = ">=3.10"
dependencies = []
keywords = ["supermarket", "point-of-sale", "inventory", "shopping-cart", "billing", "cli"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Financial :: Point-Of-Sale",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
marketdesk = "marketdesk.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["marketdesk"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
