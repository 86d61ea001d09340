#!/usr/bin/env python3
#
# see: https://setuptools.pypa.io/en/latest/userguide/declarative_config.html

import setuptools

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="lazybundle",
    version="0.1.0",
    author="Darren",
    description="Lazily loaded key-value bundles and enum name resolution with process-wide registries.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    package_dir={"": "src"},
    packages=setuptools.find_packages(where="src"),
    package_data={"lazybundle": ["*.toml"]},
    install_requires=[
        "cachetools",
        "tomli; python_version < '3.11'",
    ],
    extras_require={"test": ["pytest"]},
    python_requires=">=3.9",
)
