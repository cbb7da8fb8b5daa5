[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "vibecast"
version = "0.1.3"
description = "A terminal-based internet radio player for SomaFM stations"
requires-python = ">=3.10"
keywords = ["radio", "internet-radio", "somafm", "terminal", "tui", "curses", "mpv", "streaming"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Players",
]
dependencies = [
    "requests>=2.28",
    "pillow>=10.0",
    "platformdirs>=3.0",
    "wcwidth>=0.2.6",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
]

[project.scripts]
vibecast = "vibecast.main:main"

[tool.hatch.build.targets.wheel]
packages = ["vibecast"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
