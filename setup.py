#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Setup script for Greendex

Installs the ``greendex`` package (emissions engine, emission model registry
and CLI) together with the bundled YAML emission models.
"""

import re
from pathlib import Path

from setuptools import setup, find_packages

here = Path(__file__).parent

# Single source of truth for the version
VERSION_PATTERN = r'^__version__\s*=\s*"([^"]+)"'
VERSION = re.search(
    VERSION_PATTERN, (here / "greendex" / "_version.py").read_text(encoding="utf-8"), re.MULTILINE
).group(1)

# Read README for long description
readme_file = here / "README.md"
if readme_file.exists():
    long_description = readme_file.read_text(encoding="utf-8")
else:
    long_description = "Greendex - carbon-footprint calculations for projects and participants"

setup(
    name="greendex",
    version=VERSION,
    description="Emissions calculation engine for Greendex carbon-footprint campaigns",
    long_description=long_description,
    long_description_content_type="text/markdown",
    license="MIT",
    packages=find_packages(include=["greendex", "greendex.*"]),
    package_data={"greendex": ["data/emission_models/*.yaml"]},
    include_package_data=True,
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.0",
        "PyYAML>=6.0",
        "typer>=0.9",
        "rich>=13.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "greendex=greendex.cli.main:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
