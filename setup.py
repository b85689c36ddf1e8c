"""Setup script for SemOps."""

from setuptools import setup, find_packages

setup(
    name="semops",
    version="0.1.0",
    description="Semantic-graph data facade: Turtle, JSON-LD, SPARQL and SHACL over rdflib with one typing policy",
    author="SemOps Team",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "rdflib>=7.0.0",
        "PyLD>=2.0.4",
        "pyshacl>=0.26.0",
        "pydantic>=2.6.0",
        "pydantic-settings>=2.1.0",
        "python-dotenv>=1.0.0",
        "click>=8.1.0",
        "rich>=13.7.0",
        "structlog>=24.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0.0",
            "pytest-asyncio>=0.23.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "semops=semops.cli.commands:main",
        ],
    },
)
