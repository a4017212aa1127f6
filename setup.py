from setuptools import setup, find_packages

setup(
    name="structconv",
    version="0.1.0",
    description="Validate, format, minify and inter-convert JSON, XML, YAML and TOML; decode and verify JWTs",
    author="Your Name",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "defusedxml>=0.7",
        "pyyaml>=6.0",
        "tomli-w>=1.0",
        "pydantic>=2.0",
        "pydantic-settings>=2.0",
        "python-dotenv>=1.0",
        "structlog>=23.1",
        "typer>=0.9",
        "rich>=13.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "structconv=structconv.cli:main"
        ]
    },
    python_requires=">=3.11",
    include_package_data=True,
)
