import os
from setuptools import setup, find_packages


main_ns = {}
ver_path = os.path.join(os.path.dirname(__file__), 'winixaio', '__version__.py')
with open(ver_path) as ver_file:
    exec(ver_file.read(), main_ns)

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="winixaio",
    version=main_ns["__version__"],
    description="A asynchronous python library for Winix Air Purifiers",
    long_description=long_description,
    long_description_content_type="text/markdown",
    keywords='winix, winix api, air purifier, plasmawave',
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.9",
    install_requires=[
        "aiohttp>=3.8.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent"
    ],
)
