from setuptools import setup, find_namespace_packages

setup(
    name="cloudru-containerapps-mcp",
    version="0.0.1",
    description="MCP server for Cloud.ru Container Apps, Artifact Registry and Docker",
    packages=find_namespace_packages(where="src", include=["cloudru_mcp*"]),
    package_dir={"": "src"},
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.0",
        "click>=8.0",
        "python-dotenv>=1.0",
        "mcp>=1.2,<2",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
        "dev": [
            "pytest>=7.0",
            "black>=23.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "cloudru-containerapps-mcp=cloudru_mcp.CLI.main:main",
        ],
    },
)
