[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flocksim"
version = "0.1.0"
description = "Vector maths, agent phase spaces, placement, radio-network and interaction terms for flocking simulations"
requires-python = ">=3.10"
dependencies = []
keywords = ["flocking", "swarm", "drones", "simulation", "collective motion"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Artificial Life",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["flocksim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
