# setup.py - recnet Package Installation
from setuptools import setup, find_packages
import os

# Read version from __init__.py
def get_version():
    with open(os.path.join("recnet", "__init__.py"), "r") as f:
        for line in f:
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip('"').strip("'")
    return "1.0.0"

# Read long description from README
def get_long_description():
    try:
        with open("README.md", "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        return """
        recnet - Recurrent networks for sequence regression

        Single-output recurrent neural networks with recurrent hidden layers,
        trained online by truncated backpropagation through time with
        momentum and weight decay.
        """

setup(
    name="recnet",
    version=get_version(),
    author="recnet Team",
    description="Truncated BPTT recurrent networks for sequence regression",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["recnet", "recnet.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.21.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "black>=22.0.0",
            "flake8>=5.0.0",
            "mypy>=0.991",
            "coverage>=6.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "recnet-train=recnet.main:main",
        ],
    },
)
