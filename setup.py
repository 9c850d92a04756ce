from setuptools import setup, find_packages

setup(
    name="fenceblog",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "markdown>=3.4.0",
        "pygments>=2.12",
        "pyyaml>=6.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "build-blog=fenceblog.build:main",
        ],
    },
    python_requires=">=3.9",
)
