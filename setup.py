"""
fashion-eda - Exploratory PCA and model-comparison toolkit for image classification data
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read long description from README
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

setup(
    name="fashion-eda",
    version="0.1.0",
    author="Your Name",
    author_email="your.email@example.com",
    description="PCA dimensionality reduction and classifier comparison for image datasets",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/yourusername/fashion-eda",
    packages=find_packages(exclude=["tests", "tests.*", "docs", "examples"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Artificial Intelligence",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.20.0",
        "scipy>=1.7.0",
        "scikit-learn>=1.0.0",
        "matplotlib>=3.5.0",
        "seaborn>=0.12.0",
        "pandas>=1.3.0",
        "pyyaml>=5.4.0",
        "tqdm>=4.60.0",
        "omegaconf>=2.1.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=3.0.0",
            "black>=22.0.0",
            "flake8>=4.0.0",
            "mypy>=0.950",
            "isort>=5.10.0",
        ],
        "wandb": [
            "wandb>=0.12.0",
        ],
        "all": [
            "pytest>=7.0.0",
            "pytest-cov>=3.0.0",
            "black>=22.0.0",
            "wandb>=0.12.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "fashion-eda=fashion_eda.cli:main",
        ],
    },
    zip_safe=False,
    keywords=[
        "exploratory-data-analysis",
        "pca",
        "dimensionality-reduction",
        "classification-metrics",
        "fashion-mnist",
    ],
    project_urls={
        "Bug Reports": "https://github.com/yourusername/fashion-eda/issues",
        "Source": "https://github.com/yourusername/fashion-eda",
    },
)
