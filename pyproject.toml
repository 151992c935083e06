[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rustico"
version = "0.1.0"
description = "Configuration profiles, snapshot filtering, hooks, progress reporting and terminal widget logic for a backup tool"
requires-python = ">=3.11"
keywords = ["backup", "snapshots", "configuration", "hooks", "filtering", "progress"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Archiving :: Backup",
]
dependencies = [
    "platformdirs",
    "python-dateutil",
    "tomli-w",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["rustico"]

[tool.pytest.ini_options]
addopts = "-ra"
