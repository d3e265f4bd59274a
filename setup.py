import os, re
from setuptools import setup, find_packages

# Read the README file
with open("README.md", encoding="utf-8") as f:
    validator_readme = f.read()

def read_file(filepath: str) -> str:
    """Read and return the content of a file."""
    with open(filepath, "r", encoding="utf-8") as f:
        return f.read().strip()

def get_dependencies() -> list:
    """Retrieve dependencies from the requirements file."""
    depfile = "requirements.txt"
    if os.path.exists(depfile):
        return [
            line.strip() for line in read_file(depfile).splitlines()
            if line.strip() and not line.startswith("#")
        ]
    return []

def get_package_name() -> str:
    """Retrieve the package name from the project directory structure."""
    packages = find_packages(exclude=["tests", "tests.*"])
    if packages:
        return packages[0]
    raise RuntimeError(
        "No package found. Ensure your project contains a valid Python package."
    )

def get_version() -> str:
    """Assemble the package version from the components in the version file."""
    package = get_package_name()
    versionfile = os.path.join(package, "_version.py")

    if not os.path.exists(versionfile):
        raise FileNotFoundError("Version file '_version.py' not found.")

    content = read_file(versionfile)
    components = {}
    for name in ("MAJOR", "MINOR", "PATCH", "SUFFIX"):
        match = re.search(
            rf"^VERSION_{name} = ['\"]?([^'\"\s#]*)['\"]?", content, re.M
        )
        if match is None:
            raise RuntimeError(f"Unable to find VERSION_{name} in '_version.py'.")
        components[name] = match.group(1)

    version = "{MAJOR}.{MINOR}.{PATCH}".format(**components)
    if components["SUFFIX"]:
        version += "-" + components["SUFFIX"]
    return version

# Define optional dependencies
extras_require = {
    # Development dependencies
    "dev": [
        "pytest>=7.4.0",
        "pytest-cov>=4.1.0",
        "hypothesis>=6.88.0",  # Property-based testing
        "black>=23.0.0",
        "flake8>=6.0.0",
        "pyright>=1.1.0",
    ],

    # Testing dependencies
    "test": [
        "pytest>=7.4.0",
        "pytest-cov>=4.1.0",
        "hypothesis>=6.88.0",
    ],
}

# Setup the package
if __name__ == '__main__':
    setup(
        name="annotation-validator",
        version=get_version(),
        description="Declarative assertions on the annotations applied to classes, methods, fields and constructors.",
        long_description=validator_readme,
        long_description_content_type="text/markdown",
        license="MIT",
        packages=find_packages(exclude=["tests", "tests.*"]),
        install_requires=get_dependencies(),
        extras_require=extras_require,
        python_requires=">=3.10",
        classifiers=[
            "Development Status :: 4 - Beta",
            "Intended Audience :: Developers",
            "License :: OSI Approved :: MIT License",
            "Operating System :: OS Independent",
            "Programming Language :: Python :: 3",
            "Programming Language :: Python :: 3.10",
            "Programming Language :: Python :: 3.11",
            "Programming Language :: Python :: 3.12",
            "Topic :: Software Development :: Testing",
            "Topic :: Software Development :: Libraries :: Python Modules",
        ],
        keywords="annotations decorators metadata validation testing pydantic",
        entry_points={
            "console_scripts": [
                "annotation-validator=annotation_validator.__main__:main",
            ],
        },
    )
