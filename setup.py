"""Package setup for bscli."""

from setuptools import setup, find_packages

setup(
    name="bscli",
    version="1.0.0",
    description="Command-line client and library for the BrightSign Diagnostic Web Server API",
    packages=find_packages(include=["bscli", "bscli.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "urllib3>=2.0.0",
    ],
    extras_require={
        "ui": [
            "tqdm>=4.66.0",
            "colorlog>=6.8.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "bscli=bscli.cli:main",
            "bscp=bscli.bscp:main",
        ],
    },
)
