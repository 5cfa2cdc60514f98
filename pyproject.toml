[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "unitvisor"
version = "0.1.0"
description = "Building blocks of a small service manager: configuration, fd store, cgroup handling, account lookup and service notifications."
requires-python = ">=3.11"
dependencies = []
keywords = ["init", "service-manager", "cgroups", "sd_notify", "unix"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Boot :: Init",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["unitvisor"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
