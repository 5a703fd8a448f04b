# setup.py
from setuptools import setup, find_packages

setup(
    name="site_robots",
    version="0.1.0",
    description="Разбор, проверка и сборка robots.txt (RFC 9309)",
    packages=find_packages(include=["site_robots", "site_robots.*"]),
    install_requires=[
        "click>=8.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["site-robots=site_robots.cli:cli"],
    },
    python_requires=">=3.11",
)
