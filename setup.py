from setuptools import setup, find_packages

setup(
    name="traverse_tool",
    version="1.0.0",
    packages=find_packages(include=["traverse_tool", "traverse_tool.*"]),
    install_requires=[
        "pandas>=1.3.0",
        "numpy>=1.20.0",
        "geographiclib>=2.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "pyproj>=3.3",
        ],
    },
    entry_points={
        "console_scripts": [
            "traverse-cli=traverse_tool.cli.main:main",
        ],
    },
    python_requires=">=3.8",
    author="Traverse Tools",
    description="Survey traverse (bearing/distance) to KML and GeoJSON tool",
)
