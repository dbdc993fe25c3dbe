[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "focushub"
version = "0.1.0"
description = "A Pomodoro study timer with per-day to-do lists, a calendar, study statistics, rewards and an animated GIF background"
requires-python = ">=3.10"
keywords = ["pomodoro", "timer", "study", "todo", "productivity", "focus", "gif"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: MacOS X",
    "Environment :: Win32 (MS Windows)",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
]
dependencies = [
    "pillow",
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
focushub = "focushub.app:main"

[tool.hatch.build.targets.wheel]
packages = ["focushub"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
