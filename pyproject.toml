[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "floodsim"
version = "0.1.0"
description = "Grid-based shallow-water flood simulation over terrain height maps"
requires-python = ">=3.10"
keywords = ["simulation", "water", "flood", "heightmap", "terrain", "shallow-water"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
floodsim = "floodsim.simulation:main"

[tool.hatch.build.targets.wheel]
packages = ["floodsim"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
