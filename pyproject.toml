[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "livokit"
version = "0.1.0"
description = "SO(3) geometry, filter state, patch scoring, log formats, voxel map types and visualisation markers for LiDAR-inertial-visual odometry"
requires-python = ">=3.10"
dependencies = [
    "numpy",
]
keywords = [
    "odometry",
    "slam",
    "lidar",
    "computer-vision",
    "so3",
    "voxel-map",
    "markers",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Image Recognition",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["livokit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
