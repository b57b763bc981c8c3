# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="treenormalizer",
    version="1.0.0",
    description="Copy visitor that de-duplicates, orders and completes directory visits of source trees",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["treenormalizer*"]),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        'console_scripts': [
            'treenormalizer=treenormalizer.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
