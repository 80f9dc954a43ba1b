#!/usr/bin/env python3
"""
Setup configuration for m3u-migrator
Copies an extended M3U playlist and its music into a self-contained folder
"""

from setuptools import setup, find_packages

# Read README for long description
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Core requirements (always installed)
core_requirements = [
    "click>=8.1.7",
    "rich-click>=1.7.0",
    "rich>=13.0.0",
    "pyyaml>=6.0.1",
    "tqdm>=4.66.1",
]

setup(
    name="m3u-migrator",
    version="0.1.0",
    author="m3u-migrator Team",
    description="Copy an M3U playlist and its media files into one folder with sequential names",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["m3u_migrator", "m3u_migrator.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
    ],
    python_requires=">=3.10",
    install_requires=core_requirements,
    extras_require={
        "dev": [
            "pytest>=7.4.3",
            "black>=23.11.0",
            "flake8>=6.1.0",
            "mypy>=1.7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "m3u-migrate=m3u_migrator.cli:main",
        ],
    },
    keywords="m3u m3u8 playlist music copy migrate cli",
)
