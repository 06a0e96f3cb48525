from os import path

from setuptools import setup

this_dir = path.abspath(path.dirname(__file__))
with open(path.join(this_dir, "README.md")) as f:
    long_description = f.read()

setup(
    name="StoreHub",
    description="StoreHub - multi-tenant account, store and inventory API",
    long_description=long_description,
    long_description_content_type="text/markdown",
    version="0.1",
    license="MIT",
    packages=[
        "storehub",
        "storehub.core",
        "storehub.domain",
        "storehub.routes",
        "storehub.services",
        "storehub.test",
    ],
    package_data={
        "storehub": ["py.typed"],
        "storehub.core": ["py.typed"],
        "storehub.test": ["py.typed"],
    },
    keywords=["storehub", "inventory", "jwt", "sqlalchemy", "fastapi"],
    python_requires=">=3.9",
    install_requires=[
        "fastapi",
        "uvicorn",
        "sqlalchemy>=2.0",
        "pydantic>=2.0",
        "email-validator",
        "python-jose",
        "bcrypt",
        "colorama",
        "tenacity",
        "httpx",
    ],
    extras_require={
        "test": ["pytest"],
        "postgres": ["psycopg2-binary"],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Framework :: FastAPI",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3.9",
    ],
    entry_points={
        "console_scripts": [
            "storehub = storehub.command:console_main",
        ]
    },
)
