from setuptools import find_packages, setup

setup(
    name="launchdeck",
    version="0.1.0",
    description="Launchdeck - inspect, edit and reconcile launchd launch items",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.0",  # Configuration and output schemas
        "typer<0.26",  # CLI (0.26+ vendors its own click; code uses click directly)
        "click",  # CLI (imported directly)
        "rich",  # Terminal formatting
        "pyyaml",  # YAML output
        "pygments",  # Output highlighting
    ],
    extras_require={
        "test": [
            "pytest>=7.0",  # Testing framework
            "pytest-timeout>=2.1",  # Test timeouts
            "pytest-xdist>=3.0",  # Parallel test execution
        ],
        "dev": [
            "pre-commit",  # Git hook management
            "ruff",  # Linting and formatting
            "mypy",  # Static type checking
            "types-PyYAML",  # Type stubs
        ],
    },
    entry_points={
        "console_scripts": [
            "ldeck=launchdeck.cli:main",
        ],
    },
)
