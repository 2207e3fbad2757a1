#!/usr/bin/env python

"""Set up the pysafesql package.

(C) Copyright 2026 The pysafesql Authors.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

This package can be installed using pip as follows:

    pip install pysafesql

To install with cryptography:

    pip install 'pysafesql[crypto]'

cryptography is needed by PyMySQL to authenticate with the
caching_sha2_password and sha256_password plugins over a non-TLS link.
"""

import os
import re

from setuptools import setup

with open(os.path.join(os.path.dirname(__file__), 'pysafesql', '__init__.py')) as v:
    m = re.search(r"^ *__version__ *= *'(.*?)'", v.read(), re.M)
    if m is None:
        raise RuntimeError("Cannot detect version in pysafesql/__init__.py")
    VERSION = m.group(1)

readme = os.path.join(os.path.dirname(__file__), 'README.rst')

setup(
    name='pysafesql',
    version=VERSION,
    author='The pysafesql Authors',
    description='Typed-placeholder queries for MySQL',
    keywords='mysql sql placeholder query builder',
    packages=['pysafesql'],
    license='BSD License',
    long_description=open(readme).read(),
    python_requires='>=3.9',
    install_requires=['PyMySQL>=1.0', 'tzlocal>=4.0', 'tzdata',
                      'pydantic>=2.0', 'pydantic-settings>=2.2',
                      'python-dotenv>=1.0'],
    extras_require=dict(crypto='cryptography>=2.6.1',
                        test=['pytest']),
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: SQL',
        'Topic :: Database :: Front-Ends',
    ],
)
