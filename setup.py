# setup.py
from setuptools import setup, find_packages

setup(
    name="sprout",
    version="0.1.0",
    description="A minimal expression language: backtracking reader and tree-walking evaluator",
    packages=find_packages(include=["sprout", "sprout.*"]),
    python_requires=">=3.10",
    install_requires=["regex"],
    extras_require={
        "test": ["pytest", "hypothesis>=6.84"],
    },
    entry_points={
        "console_scripts": ["sprout=sprout.__main__:main"],
    },
    zip_safe=False,
)
