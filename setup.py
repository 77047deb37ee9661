# This Python file uses the following encoding: utf-8
from setuptools import find_packages, setup

setup(
    name="three_edge_connected",
    packages=find_packages(exclude=["tests"]),
    version="0.1.0",
    description="Find 3-edge-connected components of (genome) graphs.",
    long_description="Find 3-edge-connected components of undirected multigraphs, e.g. GFA segment graphs or their contracted biedged graphs, with a non-recursive one-pass DFS.",
    author="Mateusz Krzysztof Łącki",
    author_email="matteo.lacki@gmail.com",
    keywords=["graph", "3-edge-connected components", "GFA", "cactus graph"],
    classifiers=[
        "Development Status :: 1 - Planning",
        "License :: OSI Approved :: BSD License",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "numpy",
        "networkx",
        "pandas",
        "numba",
        "tqdm",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "three-edge-connected=three_edge_connected.cli:main",
        ],
    },
)
