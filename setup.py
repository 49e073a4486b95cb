import os.path

from setuptools import find_packages, setup


def read(fname):
    path = os.path.join(os.path.dirname(__file__), fname)
    with open(path, "r") as rfile:
        return rfile.read()


tests_require = [
    "pytest>=6.0",
    "pytest-mock>=3.0",
]

setup(
    name="teamsnap",
    version="0.4.0",
    description="A TeamSnap API client built from the API's root document",
    license="MIT",
    long_description=read("README.rst"),
    author="TeamSnap",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    install_requires=[
        "requests>=2.20",
        "toolz>=0.10",
        "inflection>=0.5",
        "aniso8601>=8.0",
    ],
    extras_require={
        "tests": tests_require,
    },
    keywords=[
        "api-wrapper",
        "http",
        "hypermedia",
        "collection+json",
        "rest",
    ],
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_packages("src"),
)
