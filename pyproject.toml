[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "voxelfield"
version = "0.1.0"
description = "Voxel field base classes, world/local/voxel mappings and linear, cubic and MAC interpolators"
requires-python = ">=3.10"
dependencies = []
keywords = ["voxel", "volume", "field", "interpolation", "rendering", "mapping"]
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
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Scientific/Engineering :: Visualization",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["voxelfield"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
