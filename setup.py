#!/usr/bin/env python3

import setuptools

VERSION = "0.0.1"
DESCRIPTION = "ZT binary patch file python package"
LONG_DESCRIPTION = (
    "Meta-tool and helper library for creating, inspecting and applying ZT binary patch files"
)

setuptools.setup(
    name="ztpatch",
    version=VERSION,
    author="ztpatch developers",
    description=DESCRIPTION,
    long_description=LONG_DESCRIPTION,
    packages=setuptools.find_packages(where="src"),
    package_dir={"": "src"},
    include_package_data=True,
    install_requires=[
        "argcomplete",
        "colorama",
        "tabulate",
    ],
    extras_require={"test": ["pytest"]},
    python_requires=">=3.10",
    entry_points={"console_scripts": ("zt = ztpatch.app.main:main",)},
    zip_safe=False,
)
