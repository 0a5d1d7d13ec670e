"""setup.py for CTF, categorical transfer functions for raster values.

The package is pure Python on top of numpy. The pandas accessor
(ctf.pandas_ext) is an optional extra: ``pip install ctf[pandas]``.
"""

from setuptools import find_packages, setup


setup(
    name="ctf",
    version="0.1.0",
    description="Conversion between packed sample values and real values of raster bands",
    packages=find_packages(include=["ctf", "ctf.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.22",
    ],
    extras_require={
        # Series accessor and DataFrame conversion.
        "pandas": ["pandas>=1.5,<3"],
        "test": ["pytest>=7", "pandas>=1.5,<3"],
    },
)
