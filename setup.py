from setuptools import setup, find_namespace_packages

setup(
    name="shici-search",
    version="1.0.0",
    packages=find_namespace_packages(include=["shici_search", "shici_search.*"]),
    install_requires=[
        "requests>=2.31.0",
        "pyyaml>=6.0",
        "click>=8.0.0",
        "flask>=3.0.0",
        "rich>=13.0.0",
        "tabulate>=0.9.0"
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0"
        ]
    },
    entry_points={
        "console_scripts": [
            "shici-search=shici_search.presentation.cli.main:main",
            "shici-search-api=shici_search.presentation.http.search_api:main",
        ],
    },
    python_requires=">=3.10",
)
