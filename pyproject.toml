[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "betterlauncher"
version = "0.1.0"
description = "Console application launcher with desktop-entry search and an inline calculator"
requires-python = ">=3.10"
dependencies = []
keywords = ["launcher", "desktop", "xdg", "desktop-entry", "calculator"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
betterlauncher = "betterlauncher.launcher:main"

[tool.hatch.build.targets.wheel]
packages = ["betterlauncher"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
