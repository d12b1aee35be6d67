# -*- coding: utf-8 -*-
#
# Copyright (c) 2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


import sys
import os


if sys.version_info < (3, 7):
    sys.exit('yamltree requires Python 3.7+')

from setuptools import setup


# Extract the version from version.py
# First load functions from fmtversion.py that are needed by version.py
fname = os.path.join(os.path.dirname(__file__), 'yamltree', 'fmtversion.py')
with open(fname, 'rb') as f:
    c = compile(f.read(), 'yamltree/fmtversion.py', 'exec')
    exec(c)
fname = os.path.join(os.path.dirname(__file__), 'yamltree', 'version.py')
with open(fname, 'r', encoding='utf8') as f:
    t = ''.join([line for line in f.readlines() if line.startswith('__version__')])
    if not t:
        raise RuntimeError('Failed to extract version from "version.py"')
    c = compile(t, 'yamltree/version.py', 'exec')
    exec(c)
version = __version__

fname = os.path.join(os.path.dirname(__file__), 'README.rst')
with open(fname, encoding='utf8') as f:
    long_description = f.read()


setup(name = 'yamltree',
      version = version,
      py_modules = [],
      packages = ['yamltree'],
      description = 'Comment-preserving YAML document trees with merge, diff, query, and transforms',
      long_description = long_description,
      author = 'Geoffrey M. Poore',
      author_email = 'gpoore@gmail.com',
      license = 'BSD',
      keywords = ['yaml', 'configuration', 'round-trip', 'merge', 'diff'],
      python_requires = '>=3.7',
      install_requires = ['ruamel.yaml>=0.18'],
      extras_require = {'test': ['pytest']},
      # https://pypi.python.org/pypi?:action=list_classifiers
      classifiers = [
          'Development Status :: 4 - Beta',
          'Intended Audience :: Developers',
          'Intended Audience :: System Administrators',
          'License :: OSI Approved :: BSD License',
          'Operating System :: OS Independent',
          'Programming Language :: Python',
          'Programming Language :: Python :: 3',
          'Topic :: Text Processing :: Markup',
          'Topic :: Utilities',
      ]
)
