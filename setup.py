#!/usr/bin/env python3

from setuptools import setup, find_packages

# Read the README file for long description
try:
    with open("README.md", "r", encoding="utf-8") as fh:
        long_description = fh.read()
except FileNotFoundError:
    long_description = "pyglcm - raw grey-level co-occurrence matrix counting for quantized images"


# Read requirements from requirements-library.txt
def read_requirements(filename="requirements-library.txt"):
    """Read requirements, ignoring comments and blank lines."""
    with open(filename, "r", encoding="utf-8") as f:
        lines = f.readlines()
    return [
        line.strip()
        for line in lines
        if line.strip() and not line.strip().startswith("#")
    ]


setup(
    name="pyglcm",
    version="1.0.0",
    author="Mohammad R. Salmanpour, Amir Hossein Pouria",
    author_email="M.salmanpoor66@gmail.com",
    description="pyglcm counts raw grey-level co-occurrence matrices (0, 45, 90 and 135 degrees) of quantized "
                "images, with a dedicated row/column for missing pixels, a parallel row-block counter and "
                "Excel export.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    license="MIT",
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Image Processing",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=read_requirements(),
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
            "black>=23.0",
            "flake8>=6.0",
            "mypy>=1.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "pyglcm=pyglcm._cli:main",
        ],
    },
    keywords="GLCM gray-level-co-occurrence-matrix texture image-analysis radiomics",
)
