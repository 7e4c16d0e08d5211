"""Setup script for Lucent Backend"""

from setuptools import setup, find_packages

setup(
    name="lucent-backend",
    version="1.0.0",
    description="Commit-to-documentation backend: GitHub OAuth, repository mirroring and Gemini articles",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.100.0",
        "uvicorn[standard]>=0.23.0",
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "sqlalchemy[asyncio]>=2.0.0",
        "alembic>=1.12.0",
        "asyncpg>=0.29.0",
        "httpx>=0.25.0",
        "langchain-core>=0.1.0",
        "langchain-google-genai>=1.0.0",
        "python-jose[cryptography]>=3.3.0",
        "structlog>=23.1.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.23.0",
            "pytest-cov>=4.1.0",
            "aiosqlite>=0.19.0",
            "hypothesis>=6.90.0",
        ]
    },
)
