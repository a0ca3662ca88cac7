# setup.py
from setuptools import setup, find_packages

setup(
    name="expense-tracker",
    version="0.1.0",
    description="A personal income and expense ledger with a CLI, reports and a web dashboard",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "click>=7.0",
        "pyyaml>=5.3",
        "python-dotenv>=0.19",
        "xlsxwriter>=3.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "openpyxl>=3.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "expense-tracker=expense_tracker.cli:main",
            "expense-tracker-web=expense_tracker.web:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
