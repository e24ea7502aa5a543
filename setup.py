from setuptools import setup, find_packages


setup(
    name="sternbrocot",
    version="0.1.0",
    python_requires=">=3.8",
    packages=find_packages(include=["sternbrocot*"]),
    install_requires=[
        "numpy",
    ],
    extras_require={
        "dev": ["pre-commit", "pytest"],
    },
)
