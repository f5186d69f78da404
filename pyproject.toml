[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "soliton"
version = "0.1.0"
description = "Pure-Python AES-256 (with counter mode) and ChaCha20 primitives, with an algebraically derived AES S-box"
requires-python = ">=3.10"
dependencies = []
keywords = ["aes", "aes-256", "ctr", "chacha20", "poly1305", "cryptography", "cipher"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["soliton"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
