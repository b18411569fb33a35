import re
from pathlib import Path

from setuptools import find_packages, setup

NAME = "groupassign"


def _read_version():
    init = Path(__file__).parent / NAME / "__init__.py"
    return re.search(r'__version__ = "([^"]+)"', init.read_text()).group(1)


setup(
    name=NAME,
    version=_read_version(),
    description="Deterministic round-robin partition assignors for consumer groups",
    packages=find_packages(include=[NAME, NAME + ".*"]),
    python_requires=">=3.9",
    install_requires=[
        "kafka-python >=2.0.2,<3",
        "typing_extensions >=4.10.0",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    classifiers=[
        "License :: OSI Approved :: Apache Software License",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "Topic :: System :: Distributed Computing",
    ],
)
