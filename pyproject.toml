[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "trackermount"
version = "1.10.2"
description = "Coordinate types, persistent configuration store, gyro conversions and LCD menu logic for a star-tracking telescope mount"
requires-python = ">=3.10"
dependencies = []
keywords = ["astronomy", "telescope", "mount", "star tracker", "declination", "eeprom", "lcd", "mpu6050"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Astronomy",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["trackermount"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
