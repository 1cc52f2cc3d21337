#!/usr/bin/env python3

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="radio-dsp",
    version="1.0.0",
    author="Radio DSP Team",
    author_email="contact@example.com",
    description="Fast transforms, fading and noise primitives for radio channel simulation",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/your-username/radio-dsp",
    package_dir={"radio_dsp": "src"},
    packages=["radio_dsp"] + ["radio_dsp." + p for p in find_packages(where="src")],
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Scientific/Engineering :: Information Analysis",
        "Topic :: Scientific/Engineering :: Physics",
    ],
    python_requires=">=3.8",
    install_requires=requirements,
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
            "black>=23.0",
            "flake8>=6.0",
            "mypy>=1.0",
        ],
        "docs": [
            "sphinx>=5.0",
            "sphinx-rtd-theme>=1.0",
            "numpydoc>=1.4",
        ],
    },
    entry_points={
        "console_scripts": [
            "radio-dsp-demo=radio_dsp.examples.demo:main",
        ],
    },
)
