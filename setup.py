"""
Setup script for validator_rejoin.
"""
import pathlib

from setuptools import find_packages, setup

HERE = pathlib.Path(__file__).resolve().parent


def read_requirements(name):
    with (HERE / name).open() as requirements_txt:
        return [
            line.split("#", 1)[0].strip()
            for line in requirements_txt
            if line.split("#", 1)[0].strip()
        ]


setup(
    name="validator_rejoin",
    version="0.1.0",
    packages=find_packages(where="src"),
    package_dir={
        "": "src",
    },
    include_package_data=True,
    zip_safe=False,
    install_requires=read_requirements("requirements.txt"),
    extras_require={
        "test": read_requirements("dev-requirements.txt"),
    },
    entry_points={
        "console_scripts": [
            "rejoin-validator=validator_rejoin.cli:main",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
