from setuptools import setup, find_packages

# Metadata lives here; pyproject.toml only declares the build backend.
setup(
    name="local_smooth",
    version="0.1.0",
    description="Local weighted polynomial smoothing (loess) and kernel bin smoothers",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "scipy",
        "scikit-learn",
    ],
    extras_require={
        "test": ["pytest"],
        "docs": ["sphinx", "myst_parser", "nbsphinx"],
    },
)
