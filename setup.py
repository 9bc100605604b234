import os
from setuptools import setup, find_namespace_packages

# locate files relative to this setup.py
HERE = os.path.abspath(os.path.dirname(__file__))


def parse_requirements(rel_path):
    path = os.path.join(HERE, rel_path)
    with open(path, "r") as f:
        lines = f.read().splitlines()
    return [line.strip() for line in lines if line.strip() and not line.startswith("#")]


setup(
    name="typeschema",
    version="0.1.0",
    description="JSON Schema for the exported bindings of TypeScript/JavaScript modules",
    long_description=open(os.path.join(HERE, "README.md")).read(),
    long_description_content_type="text/markdown",
    packages=find_namespace_packages(include=["typeschema", "typeschema.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.11",
    install_requires=parse_requirements("typeschema/requirements.txt"),
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": [
            "typeschema=typeschema.main:main",
        ],
    },
    package_data={
        "typeschema": ["requirements.txt"],
        "typeschema.mcp": ["tool_descriptions.toml"],
    },
    include_package_data=True,
)
