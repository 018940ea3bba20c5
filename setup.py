from setuptools import setup, find_packages

setup(
    name="cyclewatch",
    version="0.1.0",
    description="Interval-training stopwatch w/ timed cycles, manual laps & saved sessions",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "typer",
        "rich",
        "python-dotenv",
        "readchar",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "cyclewatch=cyclewatch.cli:app",
        ],
    },
    python_requires=">=3.11",
)
