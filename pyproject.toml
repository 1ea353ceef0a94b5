[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "agrocam"
version = "0.1.0"
description = "Field camera station controller that drives a cellular modem over AT commands, logs battery data and uploads photos"
requires-python = ">=3.10"
dependencies = [
    "pyserial",
]
keywords = [
    "at-commands",
    "cellular",
    "modem",
    "lte",
    "gps",
    "nmea",
    "camera",
    "agriculture",
    "iot",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Telephony",
    "Topic :: Scientific/Engineering :: GIS",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
agrocam = "agrocam.app:main"

[tool.hatch.build.targets.wheel]
packages = ["agrocam"]

[tool.hatch.build.targets.sdist]
include = [
    "agrocam",
    "tests",
    "pyproject.toml",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
