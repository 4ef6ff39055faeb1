[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "plaquette"
version = "0.1.0"
description = "Signal-processing units driven by a stepping engine: chronometers, alarms, ramps, peak detection, normalization, min-max scaling and smoothing."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "signal",
    "filter",
    "normalizer",
    "ramp",
    "timer",
    "chronometer",
    "peak-detection",
    "moving-average",
    "debounce",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["plaquette"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
