[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "atlaskit"
version = "0.1.0"
description = "Service toolkit: typed resource IDs, JWT claim helpers, error containers with rule-based mapping, and a runtime control-mode WSGI endpoint"
requires-python = ">=3.10"
dependencies = [
    "pyjwt",
]
keywords = [
    "bloxid",
    "typed-guid",
    "hashids",
    "jwt",
    "errors",
    "error-mapping",
    "postgresql",
    "validation",
    "wsgi",
    "toolkit",
]
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
    "Topic :: Software Development :: Libraries :: Application Frameworks",
    "Topic :: Internet :: WWW/HTTP :: WSGI :: Application",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["atlaskit"]

[tool.hatch.build.targets.sdist]
include = [
    "atlaskit",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
