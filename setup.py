# setup.py
from setuptools import setup, find_packages

setup(
    name="tsbench",
    version="0.1.0",
    description="Concurrent benchmark for per-host TimescaleDB queries",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "psycopg[binary]>=3.1",
        "psycopg-pool>=3.1",
        "setproctitle>=1.2",
        "tqdm>=4.60",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": ["tsbench=tsbench.cli:main"],
    },
)
