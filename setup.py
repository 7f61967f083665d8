from setuptools import setup, find_packages

setup(
    name="brewtest",
    version="1.0.0",
    description="Page-object UI test framework for the iCoffee ordering app",
    packages=find_packages(include=["brewtest", "brewtest.*"]),
    install_requires=[
        "pyyaml>=5.4",
        "jsonschema>=4.0.0",
        "pillow>=8.0.0",
        "pytest>=7.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
    package_data={
        "brewtest": ["schemas/*.json", "object_maps/*.yaml"],
    },
)
