[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "philosim"
version = "0.1.0"
description = "A threaded simulation of the dining philosophers problem with a death watchdog"
requires-python = ">=3.10"
dependencies = []
keywords = ["dining-philosophers", "concurrency", "threads", "simulation", "locks"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Life",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
philosim = "philosim.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["philosim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
