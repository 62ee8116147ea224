#!/usr/bin/env python
"""Sigma point Kalman filters on manifolds

Unscented and square root unscented Kalman filters for states that live
on Lie groups and products of manifolds, built on a small dense matrix
type and casadi generated series expansions.
"""

from setuptools import setup, find_packages
import sys

if sys.version_info < (3, 7):
    raise SystemExit("requires  Python >= 3.7")

DOCLINES = __doc__.split("\n")

CLASSIFIERS = """\
Development Status :: 3 - Alpha
Intended Audience :: Science/Research
Intended Audience :: Developers
License :: OSI Approved :: BSD License
Programming Language :: Python
Programming Language :: Python :: 3
Topic :: Software Development
Topic :: Scientific/Engineering :: Mathematics
Topic :: Scientific/Engineering :: Physics
Operating System :: Microsoft :: Windows
Operating System :: POSIX
Operating System :: Unix
Operating System :: MacOS
"""

# pylint: disable=invalid-name

package_name = "pyukfm"

setup(
    name=package_name,
    description=DOCLINES[0],
    long_description="\n".join(DOCLINES[2:]),
    license="BSD 3-Clause",
    classifiers=[_f for _f in CLASSIFIERS.split("\n") if _f],
    platforms=["Windows", "Linux", "Solaris", "Mac OS-X", "Unix"],
    install_requires=[
        "scipy",
        "numpy",
        "casadi",
    ],
    extras_require={"test": ["pytest"]},
    packages=find_packages(exclude=["test", "test.*"]),
    version="0.1.0",
    zip_safe=True,
)
