"""
Setup configuration for viewport-layout.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read long description from README if it exists
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text() if readme_file.exists() else ""

setup(
    name="viewport-layout",
    version="0.1.0",
    description="Breakpoint-aware viewport layouts with per-context snapshots",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["viewport_layout", "viewport_layout.*"]),
    install_requires=[
        "pydantic>=2.0",
        "click>=8.0",
        "rich>=13.0",
    ],
    python_requires=">=3.11",
    entry_points={
        "console_scripts": [
            "vplayout=viewport_layout.__main__:cli",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
)
