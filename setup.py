from setuptools import setup, find_packages


with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="enumerable",
    version="0.1.0",
    description="Exhaustive enumeration and counting of finite Python types.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"enumerable.schemas": ["*.json"]},
    include_package_data=True,
    python_requires=">=3.13",
    install_requires=["networkx", "PyYAML", "jsonschema"],
    extras_require={
        "hypothesis": ["hypothesis"],
        "test": ["pytest", "hypothesis"],
    },
    entry_points={"console_scripts": ["enumerable=enumerable.cli:main"]},
    tests_require=["pytest", "hypothesis"],
)
