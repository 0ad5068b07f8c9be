[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ctparse"
version = "0.1.0"
description = "Parse clinical-trial eligibility criteria into structured relations and match terms against a vocabulary taxonomy."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "clinical trials",
    "eligibility criteria",
    "parsing",
    "context-free grammar",
    "CYK",
    "MeSH",
    "taxonomy",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Healthcare Industry",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Medical Science Apps.",
    "Topic :: Text Processing :: Linguistic",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ctparse"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
