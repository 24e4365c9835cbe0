from setuptools import setup, find_packages

setup(
    name="corecare",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*", "alembic", "alembic.*"]),
    package_data={"corecare": ["static/*.html"]},
    include_package_data=True,
    install_requires=[
        "fastapi",
        "uvicorn",
        "sqlalchemy>=2.0",
        "alembic",
        "psycopg2-binary",
        "python-jose[cryptography]",
        "passlib[bcrypt]",
        "bcrypt>=4,<5",
        "python-multipart",
        "python-dotenv",
        "pydantic[email]>=2",
        "pydantic-settings",
        "prometheus-client",
        "prometheus-fastapi-instrumentator",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
)
