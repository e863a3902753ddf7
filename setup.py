# #!/usr/bin/env python

"""setup.py script for py_unitcalc library"""

from setuptools import setup

setup(
    name='py_unitcalc',
    version='1.0.0',
    description='Parsing, dimensional analysis and conversion of SI unit expressions',
    packages=['py_unitcalc'],
    python_requires='>=3.9',
    install_requires=[
        'typing_extensions>=4.12.0',
        'deprecated>=1.2.14',
        'tomli>=2.0.0; python_version<"3.11"',
    ],
    extras_require={
        'test': [
            'pytest>=8.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'pyuc=py_unitcalc.__main__:main',
        ],
    },
    classifiers=[
        'Intended Audience :: Science/Research',
        'Programming Language :: Python :: 3',
        'Topic :: Scientific/Engineering :: Physics',
    ],
)
