"""
Setup script for hahaha
"""

from setuptools import setup, find_packages
import pathlib

# Read the README file
HERE = pathlib.Path(__file__).parent
README = (HERE / "README.md").read_text(encoding="utf-8")

setup(
    name="hahaha",
    version="1.0.0",
    description="Shuts down lingering sidecar containers of finished Kubernetes Jobs",
    long_description=README,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["hahaha", "hahaha.*"]),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "fastapi>=0.115.0",
        "httpcore>=1.0.0",
        "kubernetes>=29.0.0",
        "prometheus-client>=0.20.0",
        "pydantic>=2.11.0",
        "pydantic-settings>=2.12.0",
        "structlog>=24.1.0",
        "urllib3>=1.26.0",
        "uvicorn>=0.29.0",
        "websocket-client>=1.7.0",
    ],
    extras_require={
        "test": [
            "httpx>=0.27.0",
            "pytest>=8.0.0",
            "pytest-asyncio>=0.23.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "hahaha=hahaha.main:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "License :: OSI Approved :: MIT License",
    ],
    keywords="kubernetes sidecar job istio linkerd cloudsql-proxy",
)
