"""
Setup script for the TOON encoder and JSON vs TOON benchmarks.
"""
from setuptools import setup, find_packages

setup(
    name="toon-bench",
    version="1.0.0",
    description="TOON encoder for token-efficient LLM inputs, with JSON vs TOON benchmarks",
    author="Your Name",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["main", "config"],
    install_requires=[
        "requests>=2.31.0",
        "tenacity>=8.2.3",
        "python-dotenv>=1.0.0",
        "tqdm>=4.66.1",
        "tiktoken>=0.7.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "toon-bench=main:main",
        ],
    },
    python_requires=">=3.8",
)
