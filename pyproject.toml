[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "st7789kit"
version = "0.1.0"
description = "ST7789 display driver logic, FONTX fonts, BMP/JPEG loading, PNG pixel collection and MPU6050 sensor helpers"
requires-python = ">=3.10"
keywords = ["st7789", "lcd", "tft", "fontx", "bmp", "jpeg", "rgb565", "mpu6050", "embedded"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Embedded Systems",
    "Topic :: Multimedia :: Graphics",
]
dependencies = [
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["st7789kit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
