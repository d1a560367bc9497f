from setuptools import setup, find_packages

setup(
    name="ricer",
    version="0.3.0",
    description="Generate configuration files from Jinja2 templates.",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "Jinja2>=3.1",
        "PyYAML>=6.0",
        "pydantic>=2.0",
        "rich>=13.0",
        "typer>=0.9",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "ricer=ricer.cli:main",
        ],
    },
)
