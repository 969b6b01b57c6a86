from setuptools import setup, find_packages

setup(
    name="formstate",
    version="0.0.1",
    description="Reactive form state and validation",
    author="Metafor Team",
    packages=find_packages(include=["formstate", "formstate.*"]),
    include_package_data=True,
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
)
