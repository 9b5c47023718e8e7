#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
setup.py for sheet2csv package
"""

from setuptools import setup, find_packages

setup(
    name="sheet2csv",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "pandas>=1.5.0",
        "openpyxl>=3.0.0",
        "xlrd>=2.0.0",
        "psutil>=5.8.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        'console_scripts': [
            'sheet2csv=sheet2csv.cli:main',
        ],
    },
)
