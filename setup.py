# SPDX-License-Identifier: FSFAP
# Copyright (C) 2025-2026 The Forumkit Project Developers
#
# Copying and distribution of this file, with or without modification,
# are permitted in any medium without royalty provided the copyright
# notice and this notice are preserved.  This file is offered as-is,
# without any warranty.

import os
from setuptools import setup, find_packages

# This directory
dir_setup = os.path.dirname(os.path.realpath(__file__))

with open(os.path.join(dir_setup, "README.md"), encoding="utf-8") as f:
    long_description = f.read()

with open(os.path.join(dir_setup, "forumkit", "version.py")) as f:
    # Defines __version__
    exec(f.read())

install_requires = [
    "arrow>=1.1.1",
    "beautifulsoup4>=4.9.1",
    'importlib_resources>=5.0.0 ; python_version<"3.9"',  # until we drop 3.8
    "peewee>=3.13.3",
    "PyMySQL>=1.0.2",
    'tomli>=2.0.1 ; python_version<"3.11"',  # until we drop 3.10
    "tomlkit>=0.11.4",
]

tests_require = [
    "pytest",
]


setup(
    name="forumkit",
    version=__version__,  # noqa: F821
    description="Database access, form building and layout helpers for forums",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="The Forumkit Project Developers",
    license="AGPLv3+",
    python_requires=">=3.8",
    packages=find_packages(include=["forumkit", "forumkit.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "License :: OSI Approved :: GNU Affero General Public License v3 or later (AGPLv3+)",
        "Development Status :: 3 - Alpha",
        "Operating System :: OS Independent",
        "Topic :: Internet :: WWW/HTTP :: Dynamic Content :: Message Boards",
    ],
    entry_points={
        "console_scripts": [
            "forumkit=forumkit.__main__:main",
        ],
    },
    package_data={"forumkit": ["forumkit.toml"]},
    install_requires=install_requires,
    extras_require={"test": tests_require},
)
