from setuptools import setup, find_packages

setup(
    name='msconfig',
    version='1.0.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    install_requires=[
        'pyyaml>=6.0',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'msconfig-check=msconfig.cli.config_cli:main',
        ],
    },
    python_requires='>=3.9',
)
