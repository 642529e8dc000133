[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gust"
version = "0.1.0"
description = "Terminal weather library: fetch current conditions, forecasts and alerts and print them in the terminal"
requires-python = ">=3.10"
keywords = ["weather", "forecast", "terminal", "openweathermap"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]
dependencies = [
    "requests>=2.28",
    "wcwidth>=0.2.6",
    "termcolor>=2.3",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
    "responses>=0.23",
]

[tool.hatch.build.targets.wheel]
packages = ["gust"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
ignore_missing_imports = true
