from setuptools import setup, find_namespace_packages

setup(
    name="disaster_response_coordinator",
    version="0.1",
    py_modules=["main", "models", "config", "database"],
    packages=find_namespace_packages(include=["services", "utils"]),
    install_requires=[
        "fastapi>=0.111.0",
        "uvicorn[standard]>=0.30.0",
        "pydantic>=2.7.0",
        "pandas>=2.2.0",
        "requests>=2.31.0",
        "SQLAlchemy>=2.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0.0",
            "httpx>=0.27.0",
        ],
    },
)
