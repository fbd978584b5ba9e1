#!/usr/bin/env python3
"""Setup script for the ruled-regions grid detector."""

from setuptools import find_packages, setup

setup(
    name="ruled-regions",
    version="1.0.0",
    description="Rebuild ruled rectangles, tables and grids from PDF line segments.",
    packages=find_packages(include=["ruled_regions", "ruled_regions.*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy",
        "numba",
        "pymupdf",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "ruled-regions = ruled_regions.main:main",
        ],
    },
)
