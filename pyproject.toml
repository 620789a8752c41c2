[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "volfield"
version = "0.1.0"
description = "Point location and interpolation in volume cells, bounding boxes, ray/primitive intersection and simple cameras for volume rendering"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "volume rendering",
    "ray tracing",
    "unstructured mesh",
    "interpolation",
    "bezier curve",
    "bounding box",
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
    "Topic :: Scientific/Engineering :: Visualization",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["volfield"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
