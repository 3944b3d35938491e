#!/usr/bin/env python3

from pathlib import Path
from setuptools import setup, find_packages
import re

def version():
    init = Path(__file__).parent / 'calculus' / '__init__.py'
    return re.search(r"^__version__ = '([^']+)'", init.read_text(), re.MULTILINE).group(1)

def long_description():
    readme = Path(__file__).parent / 'README.md'
    return readme.read_text() if readme.is_file() else ''

setup(
    name='calculus',
    version=version(),
    author='The calculus authors',
    description='Parse, evaluate and render plain and TeX-flavored arithmetic expressions',
    long_description=long_description(),
    long_description_content_type='text/markdown',
    packages=find_packages(exclude=['tests']),
    include_package_data=True,
    install_requires=['click'],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'calculus = calculus.cli:cli',
        ],
    },
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Intended Audience :: Education',
        'Intended Audience :: Science/Research',
        'License :: OSI Approved :: Apache Software License',
        'Natural Language :: English',
        'Operating System :: POSIX :: Linux',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Topic :: Scientific/Engineering :: Mathematics',
        'Topic :: Text Processing :: Markup :: LaTeX',
        'Topic :: Utilities',
    ],
    keywords='expression parser rpn shunting-yard latex calculator',
    python_requires='>=3.10',
)
