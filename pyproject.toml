[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "psxcard"
version = "0.1.0"
description = "Read PlayStation memory card images: directory, save titles and icons"
requires-python = ">=3.10"
dependencies = []
keywords = ["playstation", "psx", "memory card", "memcard", "save", "icon", "bmp", "shift-jis"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
    "Topic :: Multimedia :: Graphics :: Graphics Conversion",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
psxcard = "psxcard.application:main"

[tool.hatch.build.targets.wheel]
packages = ["psxcard"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
