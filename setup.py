"""
Setup script for the pumi gazetteer.
"""

from setuptools import setup, find_packages

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

# Separate development requirements
dev_requirements = [req for req in requirements if any(dev in req for dev in ["pytest", "black", "flake8", "mypy", "sphinx"])]
install_requirements = [req for req in requirements if req not in dev_requirements]

setup(
    name="pumi",
    version="1.0.0",
    author="Data Analytics Team",
    description="Gazetteer of Cambodian administrative divisions",
    long_description="pumi - an in-memory, queryable catalog of Cambodia's provinces, districts, communes and villages with Khmer and latin names, hierarchical codes and bilingual labels.",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["main"],
    package_data={"pumi": ["data/json/*.json", "data/yaml/*.yml"]},
    install_requires=install_requirements,
    extras_require={
        "dev": dev_requirements,
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "pumi=main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
