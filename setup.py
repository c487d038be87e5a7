"""
setup.py

Packaging metadata and CLI entry point for code-bundler.

Version: 1.0.0 - bundle command, create-rsp wizard, '@file.rsp' replay,
YAML/environment settings and rotating log files.
"""
from setuptools import setup, find_packages

setup(
    name="code-bundler",
    version="1.0.0",
    packages=find_packages(include=["bundler", "bundler.*", "cli", "cli.*"]),
    install_requires=[
        "click>=8.2",
        "pydantic>=2.0",
        "pyyaml",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
            "hypothesis",
        ],
    },
    entry_points={
        "console_scripts": [
            "code-bundler=cli:cli",
        ],
    },
    python_requires=">=3.8",
)
