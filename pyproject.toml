[build-system]
requires = ["hatchling>=1.18"]
build-backend = "hatchling.build"

[project]
name = "garblekit"
version = "0.1.0"
description = "Garbled circuits with half gates, Bristol circuit evaluation and Chou-Orlandi oblivious transfer"
requires-python = ">=3.10"
dependencies = [
    "cryptography>=41",
    "pynacl>=1.5",
]
keywords = [
    "garbled circuits",
    "half gates",
    "oblivious transfer",
    "secure computation",
    "two-party computation",
    "bristol fashion",
    "ed25519",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
]

[project.scripts]
garblekit-netio = "garblekit.netio:main"
garblekit-ot = "garblekit.ot_demo:main"

[tool.hatch.build.targets.wheel]
packages = ["garblekit"]

[tool.hatch.build.targets.sdist]
include = ["garblekit", "tests", "pyproject.toml"]

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
warn_redundant_casts = true
