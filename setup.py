# read contents of README for PyPi description
from pathlib import Path

from setuptools import setup

this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text()

setup(
    name="turbmagfield",
    long_description=long_description,
    long_description_content_type="text/markdown",
    version="0.1.0",
    description="Synthetic turbulent magnetic fields on periodic grids",
    license="BSD 2-clause",
    packages=["turbmagfield", "turbmagfield.field_generation"],
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "tqdm",
        "scipy",
        "pyevtk",
        "pyfftw",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Development Status :: 1 - Planning",
        "Intended Audience :: Science/Research",
        "License :: OSI Approved :: BSD License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3.9",
    ],
)
