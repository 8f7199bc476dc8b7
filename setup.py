"""Setup configuration for release_cadence"""

from setuptools import setup, find_packages

setup(
    name="release-cadence",
    version="0.1.0",
    description=(
        "CLI tool for GitHub release cadence: days between x.y.0 releases "
        "across repositories."
    ),
    author="Release Cadence Contributors",
    author_email="",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "requests>=2.28.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "black>=22.0",
            "flake8>=4.0",
            "mypy>=0.950",
        ],
    },
    entry_points={
        "console_scripts": [
            "release-cadence=release_cadence.main:main",
        ],
    },
)
