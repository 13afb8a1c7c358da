[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "analogdsp"
version = "0.1.0"
description = "Virtual-analog filters, a DC blocker and a modal resonator voice, in pure Python."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "dsp",
    "audio",
    "synthesis",
    "filter",
    "ladder filter",
    "diode filter",
    "state variable filter",
    "modal synthesis",
    "virtual analog",
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
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["analogdsp"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
