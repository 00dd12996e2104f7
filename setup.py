# setup.py - Package fusion_law
from setuptools import setup, find_packages

setup(
    name="fusion_law",
    version="0.1.0",
    description="Sub fusion laws, finest adequate gradings and useful fusion rules",
    packages=find_packages(include=["fusion_law", "fusion_law.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "fusion-law=fusion_law.__main__:main",
        ],
    },
)
