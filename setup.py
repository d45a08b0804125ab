#! /usr/bin/env python
#
# Copyright (c), 2026, SISSA (International School for Advanced Studies).
# All rights reserved.
# This file is distributed under the terms of the MIT License.
# See the file 'LICENSE' in the root directory of the present
# distribution, or http://opensource.org/licenses/MIT.
#
# @author Davide Brunato <brunato@sissa.it>
#
from setuptools import setup, find_packages
from pathlib import Path


with Path(__file__).parent.joinpath('README.rst').open() as readme:
    long_description = readme.read()


setup(
    name='xmlutilities',
    version='1.0.0',
    packages=find_packages(include=['xmlutilities*']),
    package_data={
        'xmlutilities': ['py.typed'],
    },
    python_requires='>=3.9',
    install_requires=['elementpath>=4.4.0, <6.0.0', 'xmlschema>=3.4.0, <5.0.0'],
    extras_require={
        'test': ['lxml'],
        'dev': ['tox', 'coverage', 'lxml', 'flake8', 'mypy', 'lxml-stubs'],
    },
    author='Davide Brunato',
    author_email='brunato@sissa.it',
    license='MIT',
    license_file='LICENSE',
    description='XSD schema sets loading, XML validation, comparison and marshaling helpers',
    long_description=long_description,
    classifiers=[
        'Development Status :: 5 - Production/Stable',
        'Intended Audience :: Developers',
        'Intended Audience :: Information Technology',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: 3 :: Only',
        'Programming Language :: Python :: 3.9',
        'Programming Language :: Python :: 3.10',
        'Programming Language :: Python :: 3.11',
        'Programming Language :: Python :: 3.12',
        'Programming Language :: Python :: 3.13',
        'Programming Language :: Python :: Implementation :: CPython',
        'Topic :: Software Development :: Libraries',
        'Topic :: Text Processing :: Markup :: XML',
    ]
)
