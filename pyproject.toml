[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "caisbwt"
version = "0.1.0"
description = "Extended, dollar, dollar-free and bijective Burrows-Wheeler transforms by conjugate array induced sorting"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "bwt",
    "burrows-wheeler",
    "ebwt",
    "bijective-bwt",
    "conjugate-array",
    "induced-sorting",
    "lyndon",
    "fasta",
    "fastq",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
caisbwt = "caisbwt.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["caisbwt"]

[tool.pytest.ini_options]
addopts = "-ra"
