# -*- coding: utf-8 -*-
#
# Copyright (c) 2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


import collections


VersionInfo = collections.namedtuple('VersionInfo', ['major', 'minor', 'micro', 'releaselevel', 'serial'])


def get_version_plus_info(major, minor, micro, releaselevel, serial):
    '''
    Create a version string and a version info tuple from version components,
    following the conventions of `sys.version_info`.
    '''
    if not all(isinstance(x, int) and x >= 0 for x in (major, minor, micro, serial)):
        raise TypeError('Version numbers must be non-negative integers')
    abbrev = {'dev': '.dev', 'alpha': 'a', 'beta': 'b', 'candidate': 'rc', 'final': ''}
    if releaselevel not in abbrev:
        raise ValueError('Invalid release level "{0}"'.format(releaselevel))
    version = '{0}.{1}.{2}'.format(major, minor, micro)
    if releaselevel != 'final':
        version += '{0}{1}'.format(abbrev[releaselevel], serial)
    return (version, VersionInfo(major, minor, micro, releaselevel, serial))
