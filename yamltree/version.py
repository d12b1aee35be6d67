# -*- coding: utf-8 -*-
#
# Copyright (c) 2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


from .fmtversion import get_version_plus_info
__version__, __version_info__ = get_version_plus_info(0, 3, 0, 'beta', 0)
