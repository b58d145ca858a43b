"""
Setup script for the trivia-duel package.

Source layout: the importable package lives under src/trivia_duel.
The SQLite schema ships as package data next to the cache module.
"""

from setuptools import setup, find_packages

setup(
    name="trivia-duel",
    version="1.0.0",
    description="Trivia duel - two-player trivia game state carried in chat messages",
    author="Trivia Duel Developers",
    license="MIT",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "python-dotenv>=1.0.0",
        "pydantic>=2.5.0",
        "httpx>=0.25.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "build",
            "wheel",
        ],
    },
    package_data={
        "trivia_duel._cache": ["schema.sql"],
    },
    entry_points={
        "console_scripts": [
            "trivia-duel=trivia_duel.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Games/Entertainment",
    ],
)
