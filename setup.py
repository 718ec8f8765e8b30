#!/usr/bin/env python
"""
Copyright 2025 Hathor Labs

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

   http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

import re

from setuptools import find_packages, setup

# XXX: importing serbin here would need its dependencies installed before they are declared
with open('serbin/version.py') as fp:
    __version__ = re.search(r"^BASE_VERSION = '([^']+)'$", fp.read(), re.MULTILINE).group(1)

setup(
    name='serbin',
    version=__version__,
    description='Binary serialization of typed values',
    author='Hathor Team',
    author_email='contact@hathor.network',
    url='https://hathor.network/',
    license='Apache-2.0',
    entry_points={
        'console_scripts': ['serbin-cli=serbin_cli.main:main'],
    },
    classifiers=[
        'Programming Language :: Python :: 3',
        'Operating System :: OS Independent',
        'License :: OSI Approved :: Apache Software License',
    ],
    python_requires='>=3.11',
    packages=find_packages(exclude=('serbin_tests', 'serbin_tests.*')),
    install_requires=[
        'structlog>=22.3',
        'typing_extensions>=4.5',
        'pydantic>=2.0,<3',
        'PyYAML>=6.0',
        'ConfigArgParse>=1.5',
        'colorama>=0.4',
    ],
    extras_require={
        'test': ['pytest>=7.2'],
    },
)
