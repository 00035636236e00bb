[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ruuvilog"
version = "0.1.0"
description = "Decode RuuviTag data format 5 advertisements and store the measurements in a SQL database"
requires-python = ">=3.10"
keywords = ["ruuvitag", "sensor", "weather", "temperature", "humidity", "pressure", "logging"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Atmospheric Science",
    "Topic :: Database",
]
dependencies = [
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["ruuvilog"]

[tool.hatch.build.targets.sdist]
include = ["ruuvilog", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
