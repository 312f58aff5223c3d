from setuptools import setup, find_packages
import pathlib

# Detect layout
use_src = pathlib.Path("src/jsonmap").exists()
pkg_args = {"package_dir": {"": "src"}, "packages": find_packages(where="src")} if use_src \
           else {"packages": find_packages(where=".")}

setup(
    name="json-mapper",
    version="0.1.0",
    description="Declarative JSON-to-JSON transformation driven by YAML mapping rules",
    python_requires=">=3.9",
    include_package_data=True,
    install_requires=[
        "PyYAML>=6.0",
        "pydantic>=2.0",
        "typer>=0.9",
        "tzdata",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": ["jsonmap=jsonmap.cli:app"],
    },
    **pkg_args
)
