"""Setup configuration for quire."""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="quire-docs",
    version="0.1.0",
    author="Eve",
    description="API documentation generator for Python packages",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/yourusername/quire",
    packages=find_packages(include=["quire", "quire.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Documentation",
    ],
    python_requires=">=3.10",
    install_requires=[
        "click>=8.0",
        "rich>=13.0",
        "pyyaml>=6.0",
        "pygments>=2.14.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "quire=quire.cli:cli",
        ],
    },
)
