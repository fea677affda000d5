from setuptools import setup, find_packages

setup(
    name="e2e_pipeline",
    version="0.0.1-alpha.1",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    package_data={"e2e_pipeline": ["static/*"]},
    install_requires=[
        "selenium>=4.10.0",
        "pytest>=7.0.0",
    ],
    entry_points={
        "console_scripts": ["e2e-pipeline=e2e_pipeline.cli:main"],
    },
)
