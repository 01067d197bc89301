from setuptools import setup, find_packages


setup(
    name="queryargs",
    version="0.1",
    packages=find_packages(include=["queryargs", "queryargs.*"]),
    description="Password-protected key/value tokens for URL query arguments.",
    author="vercingetorx",
    python_requires=">=3.8",
    install_requires=[
        "pycryptodomex>=3.23.0",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "queryargs=queryargs.cli:main",
        ]
    },
)
