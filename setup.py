"""Setup configuration for event_ingestion."""
from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="event-ingestion",
    version="0.1.0",
    author="Event Ingestion Contributors",
    description="Event ingestion service with cache-backed job status tracking",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Development Status :: 3 - Alpha",
        "Framework :: FastAPI",
    ],
    python_requires=">=3.10",
    install_requires=[
        "asyncpg>=0.27.0",
        "redis>=5.0.1",
        "pydantic>=2.0.0",
        "fastapi>=0.110.0",
        "uvicorn[standard]>=0.20.0",
        "aiohttp>=3.8.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "httpx>=0.24.0",
            "testcontainers[postgres,redis]>=4.0.0",
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "httpx>=0.24.0",
            "testcontainers[postgres,redis]>=4.0.0",
            "black>=23.0.0",
            "mypy>=1.0.0",
            "flake8>=6.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "event-ingestion-server=event_ingestion.server_main:main",
            "event-ingestion-client=event_ingestion.client_main:main",
        ],
    },
)
