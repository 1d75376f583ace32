"""
Setup script for PDF Stitcher.

This script configures the package for installation via pip.
Supports both development and production installations.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read the README for long description
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding='utf-8')

setup(
    name="pdf-stitcher",
    version="1.0.0",
    description="Convert a multi-page PDF into a single vertically stitched image",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="PDF Stitcher Contributors",
    author_email="",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "click>=8.0.0",
        "rich>=13.0.0",
        "pypdf>=3.0.0",
        "Pillow>=9.4.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pdf2img=pdf_stitcher.cli:cli",
        ],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: End Users/Desktop",
        "Intended Audience :: Developers",
        "Topic :: Multimedia :: Graphics :: Graphics Conversion",
        "Topic :: Utilities",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Operating System :: OS Independent",
        "Environment :: Console",
    ],
    keywords="pdf image stitch rasterize jpg png webp pdftoppm poppler cli",
    license="MIT",
    include_package_data=True,
    zip_safe=False,
)
