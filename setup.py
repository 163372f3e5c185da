#!/usr/bin/env python
import os
import sys

if sys.version_info < (3, 8):
    print("Error: datastore-core does not support this version of Python.")
    print("Please upgrade to Python 3.8 or higher.")
    sys.exit(1)


from setuptools import setup

try:
    from setuptools import find_namespace_packages
except ImportError:
    # the user has a downlevel version of setuptools.
    print("Error: datastore-core requires setuptools v40.1.0 or higher.")
    print('Please upgrade setuptools with "pip install --upgrade setuptools" ' "and try again")
    sys.exit(1)


this_directory = os.path.abspath(os.path.dirname(__file__))
with open(os.path.join(this_directory, "README.md")) as f:
    long_description = f.read()


package_name = "datastore-core"
package_version = "1.0.0"
description = """A thin object-modeling layer over plain dicts, with \
normalized property names, per-property overrides and validation."""


setup(
    name=package_name,
    version=package_version,
    description=description,
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "core"},
    packages=find_namespace_packages(where="core", include=["datastore", "datastore.*"]),
    include_package_data=True,
    test_suite="test",
    install_requires=[
        "hologram>=0.0.16",
        "logbook>=1.5",
        "mashumaro>=3.6",
    ],
    extras_require={
        "test": [
            "pytest>=7",
        ],
    },
    zip_safe=False,
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: Microsoft :: Windows",
        "Operating System :: MacOS :: MacOS X",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    python_requires=">=3.8",
)
