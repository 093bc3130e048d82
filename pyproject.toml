[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "adminkit"
version = "1.0.0"
description = "Building blocks for a user and role administration web API: typed errors, settings, request schemas, JWT auth, role storage and Redis response caching."
requires-python = ">=3.10"
keywords = ["admin", "jwt", "authentication", "roles", "api", "cache", "settings"]
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
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
]
dependencies = [
    "pyjwt>=2.4",
    "bcrypt>=4.0",
    "redis>=4.5",
    "sqlalchemy>=2.0",
    "pyyaml>=6.0",
]

[project.optional-dependencies]
test = [
    "pytest>=7.0",
    "freezegun>=1.2",
]

[tool.hatch.build.targets.wheel]
packages = ["adminkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
