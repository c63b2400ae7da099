#!/usr/bin/env python

"""Set up the typedquery package.

(C) Copyright 2013-2025 Dassault Systemes SE.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

This package can be installed using pip as follows:

    pip install typedquery

SQLite support comes with Python.  To connect to MySQL as well:

    pip install 'typedquery[mysql]'
"""

import os
import re

from setuptools import setup

with open(os.path.join(os.path.dirname(__file__), 'typedquery', '__init__.py')) as v:
    m = re.search(r"^ *__version__ *= *'(.*?)'", v.read(), re.M)
    if m is None:
        raise RuntimeError("Cannot detect version in typedquery/__init__.py")
    VERSION = m.group(1)

readme = os.path.join(os.path.dirname(__file__), 'README.rst')

with open(readme) as f:
    long_description = f.read()

setup(
    name='typedquery',
    version=VERSION,
    author='typedquery developers',
    description='Typed query templates for Python database drivers',
    keywords='sql query template placeholder validation database',
    packages=['typedquery'],
    license='BSD License',
    long_description=long_description,
    python_requires='>=3.9',
    install_requires=['tzlocal'],
    extras_require=dict(mysql='PyMySQL>=1.0',
                        test=['pytest']),
    classifiers=[
        'Development Status :: 5 - Production/Stable',
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
