# setup.py
from setuptools import setup, find_packages

setup(
    name='WFPutils',
    version='1.0',
    description='Typed, conditional parameter resolution for command-line workflows',
    packages=find_packages(include=['WFPutils', 'WFPutils.*']),
    package_data={
        'WFPutils.templates': ['help/*.j2', 'report/*.j2'],
    },
    python_requires='>=3.9',
    install_requires=[
        'jinja2>=3.1',
        'pyyaml>=6.0',
        'pydantic>=2.0',
    ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    entry_points={
        'console_scripts': [
            'wfp = WFPutils.cli.main:main',
        ],
    },
)
