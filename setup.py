#!/usr/bin/env python

from setuptools import setup

setup(
    name="esfields",
    version="0.1.0",
    description="API for listing the fields of Elasticsearch indices",
    packages=["esfields", "esfields.api", "esfields.schema"],
    package_data={"esfields.schema": ["dashboardschema/*.json"]},
    include_package_data=True,
    zip_safe=False,
    keywords=["API", "elasticsearch", "mapping"],
    classifiers=[
        "License :: OSI Approved :: MIT License",
        "Topic :: Database",
    ],
    python_requires=">=3.10",
    install_requires=[
        "fastapi",
        "elasticsearch[async]~=8.6",
        "python-dotenv",
        "pydantic>=2",
        "pydantic-settings",
        "uvicorn",
    ],
    extras_require={
        "dev": [
            "pytest",
            "anyio",
            "httpx",
            "elastic-transport",
            "mypy",
            "flake8",
        ]
    },
    entry_points={
        "console_scripts": [
            "esfields = esfields.__main__:main"
        ]
    },
)
