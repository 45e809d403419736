from setuptools import setup, find_packages

setup(
    name="install_md",
    version="1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    description=(
        "Checks markdown installation instructions by running them in a "
        "docker build."
    ),
    install_requires=["marko>=2.0", "peggie>=0.2.0"],
    extras_require={"test": ["pytest>=6.2"]},
    entry_points={
        "console_scripts": [
            "install-md=install_md.scripts.install_md:main",
        ],
    },
)
