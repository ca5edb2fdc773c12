"""Build script for the search-tree modules.

Pure Python; the only runtime dependency is bitarray, used by the LOUDS
topology behind ``SearchTree.freeze()``.  Install the ``test`` extra for
pytest and pytest-benchmark.
"""

from setuptools import setup

setup(
    name="search-tree",
    version="2.0.0",
    description="In-memory string search tree with single and multi character wildcards",
    python_requires=">=3.9",
    py_modules=["query", "search_tree", "louds", "frozen_search_tree"],
    install_requires=["bitarray>=2.3"],
    extras_require={
        "test": ["pytest>=7", "pytest-benchmark>=4"],
    },
    license="MIT",
)
