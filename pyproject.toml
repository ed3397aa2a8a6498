[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pingme"
version = "0.1.0"
description = "Terminal dashboard that monitors HTTP endpoint uptime"
requires-python = ">=3.11"
keywords = ["uptime", "monitoring", "ping", "http", "terminal", "dashboard", "curses"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console :: Curses",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
    "Topic :: Internet :: WWW/HTTP",
]
dependencies = [
    "httpx",
]

[project.optional-dependencies]
test = [
    "pytest",
    "respx",
]

[project.scripts]
pingme = "pingme.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["pingme"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
