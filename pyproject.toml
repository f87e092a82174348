[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hppoperator"
version = "0.1.0"
description = "Manifest builders, naming rules and TLS policy for a hostpath storage provisioner operator"
requires-python = ">=3.10"
keywords = [
    "kubernetes",
    "operator",
    "hostpath",
    "storage",
    "provisioner",
    "rbac",
    "manifests",
    "yaml",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Systems Administration",
    "Topic :: System :: Filesystems",
]
dependencies = [
    "pyyaml",
    "semver",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
hpp-yaml-dumper = "hppoperator.dumper:main"

[tool.hatch.build.targets.wheel]
packages = ["hppoperator"]

[tool.hatch.build.targets.sdist]
include = [
    "hppoperator",
    "tests",
    "pyproject.toml",
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
