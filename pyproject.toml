[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cipherfs"
version = "0.1.0"
description = "Operations for an encrypting pass-through filesystem: AES-256-CBC file contents, SHA3-256 key checks and a self-destruct trigger"
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = ["filesystem", "encryption", "aes", "sha3", "passthrough"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["cipherfs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
