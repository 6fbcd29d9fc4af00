[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blockutil"
version = "0.1.0"
description = "Helpers for block-oriented cryptography: blob storage, block buffers, paddings, GF(2^n) doubling and conditional moves."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "cryptography",
    "padding",
    "pkcs7",
    "ansix923",
    "iso7816",
    "block-buffer",
    "vlq",
    "blob",
    "gf2n",
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
    "Topic :: Security :: Cryptography",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
blobby-convert = "blockutil.convert:main"

[tool.hatch.build.targets.wheel]
packages = ["blockutil"]

[tool.pytest.ini_options]
addopts = "-ra"
