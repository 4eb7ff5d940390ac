# setup.py
from setuptools import setup, find_packages

setup(
    name="arborize",
    version="0.1.0",
    description="Generic recursive tree builder with pure and asyncio variants, plus directory and divisor tree CLI",
    author="Enrique Paredes",
    author_email="eparedesbalen@gmail.com",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
        ],
    },
    entry_points={
        'console_scripts': [
            'arborize=arborize.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
