from setuptools import find_packages, setup

setup(
    name="solatsm",
    version="1.0.0",
    description="Time-scale modification of speech and audio using Synchronized Overlap-Add (SOLA).",
    packages=find_packages(include=["solatsm", "solatsm.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "pandas",
        "soundfile",
        "matplotlib",
        "click",
        "tabulate",
        "rich",
        "pydantic>=2",
        "toml",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-mock",
        ],
    },
    entry_points={
        "console_scripts": [
            "solatsm=solatsm.cli.main:cli",
        ],
    },
)
