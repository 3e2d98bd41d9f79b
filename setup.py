"""
Setup script for the codestructure package.
"""

from setuptools import setup, find_packages
import os

# Read the README
readme_path = os.path.join(os.path.dirname(__file__), 'README.md')
if os.path.exists(readme_path):
    with open(readme_path, 'r', encoding='utf-8') as f:
        long_description = f.read()
else:
    long_description = "Structural code metrics: complexity, nesting, dead code and weak typing."

setup(
    name="codestructure",
    version="1.0.0",
    author="Code Structure Team",
    author_email="codestructure@example.com",
    description="Per-function complexity, nesting, dead code and weak-typing metrics for source files",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/codestructure/codestructure",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "tree-sitter>=0.23",
        "tree-sitter-javascript>=0.23",
        "tree-sitter-typescript>=0.23",
        "pyyaml>=6.0",
        "rich>=13.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
            "black>=23.0",
            "mypy>=1.0",
            "ruff>=0.1.0",
        ],
        "test": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "codestructure=codestructure.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Quality Assurance",
    ],
    keywords="static-analysis, complexity, cyclomatic, code-quality, dead-code, tree-sitter",
    project_urls={
        "Bug Reports": "https://github.com/codestructure/codestructure/issues",
        "Source": "https://github.com/codestructure/codestructure",
    },
)
