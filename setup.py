from setuptools import setup
from dailylog import __version__

setup(
    name="dailylog",
    long_description="dailylog routes leveled log messages to the console, to date-stamped files, or both, "
    "with size and age based rotation.",
    version=__version__,
    packages=[
        "dailylog",
        "dailylog.core",
        "dailylog.commands",
    ],
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[
        "click>=8.2.0,<9.0.0",
        "pyyaml>=6.0.0,<7.0.0",
        "pyserde>=0.12.0,<1.0.0",
        "humanfriendly>=10.0.0,<11.0.0",
        "beartype>=0.17.0,<1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-mock>=3.10.0",
        ],
    },
    entry_points="""
        [console_scripts]
        dailylog=dailylog.cli:cli
    """,
)
