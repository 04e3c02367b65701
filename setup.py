from setuptools import find_packages, setup


setup(
    name="pg_password_encoder",
    version="1.0.0",
    description="Client side md5 and SCRAM-SHA-256 password encoding for PostgreSQL",
    packages=find_packages(exclude=["tests", "tests.*"]),
    license="LGPLv3",
    python_requires=">=3.11",
    install_requires=[
        "psycopg[binary]>=3.2",
    ],
    entry_points={
        "console_scripts": [
            "pg-password-encoder = pg_password_encoder:main",
        ],
    },
)
