from setuptools import setup, find_packages
from pathlib import Path

# Read the contents of the README file
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text(encoding="utf-8")

setup(
    name="plume-cli",
    version="1.0.0",
    author="Plume contributors",
    description="A terminal-native heuristic detector for AI-generated French text.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "typer>=0.12.3",
        "rich>=13.7.1",
        "questionary>=2.0.1",
        "nltk>=3.8.1",
        "numpy>=1.26.0",
        "plotille>=5.0.0",
        "pyfiglet>=1.0.2",
        "python-dotenv",
        "structlog>=24.1.0",
        "PyPDF2>=3.0.0",
        "python-docx>=1.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "plume=plume_cli.main:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Environment :: Console",
        "Natural Language :: French",
    ],
    python_requires=">=3.9",
)
