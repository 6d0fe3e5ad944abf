from setuptools import setup, find_packages

setup(
    name="pybuildcm",
    version="0.1.0",
    description="A command line driver for CMake + vcpkg C/C++ projects",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    keywords=["c", "c++", "cmake", "vcpkg", "clang-format"],
    python_requires=">=3.11",
    packages=find_packages(exclude=("tests", "tests.*")),
    install_requires=[
        "returns>=0.19",
        "toml>=0.10",
        "rich>=13",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "pybuildcm = pybuildcm.main:cli",
        ]
    },
)
