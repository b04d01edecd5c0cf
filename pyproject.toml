[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ticketsys"
version = "0.1.0"
description = "A line-oriented train ticket booking system: users, trains, ticket queries, orders and refunds."
requires-python = ">=3.10"
dependencies = []
keywords = ["train", "tickets", "booking", "railway", "scheduling", "orders"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ticketsys = "ticketsys.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["ticketsys"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"
