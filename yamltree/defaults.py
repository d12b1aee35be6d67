# -*- coding: utf-8 -*-
#
# Copyright (c) 2016, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


import sys


YAML_TAG_PREFIX = 'tag:yaml.org,2002:'

SHORT_TAG_PREFIX = '!!'


# Tags that override plain-scalar heuristics
CORE_TAGS = {'str':   '!!str',
             'int':   '!!int',
             'float': '!!float',
             'bool':  '!!bool',
             'null':  '!!null'}


RESERVED_WORDS = {'true': True, 'True': True, 'TRUE': True,
                  'false': False, 'False': False, 'FALSE': False,
                  'null': None, 'Null': None, 'NULL': None, '~': None, '': None}


SPECIAL_FLOATS = {'.inf': float('inf'), '.Inf': float('inf'), '.INF': float('inf'),
                  '+.inf': float('inf'), '+.Inf': float('inf'), '+.INF': float('inf'),
                  '-.inf': float('-inf'), '-.Inf': float('-inf'), '-.INF': float('-inf'),
                  '.nan': float('nan'), '.NaN': float('nan'), '.NAN': float('nan')}


RE_INT = r'[-+]?[0-9]+\Z'

RE_FLOAT = r'[-+]?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)(?:[eE][-+]?[0-9]+)?\Z'


FLOW_STYLE = 'flow'


# Emitter parameters
EMITTER = {'indent': 2,
           'width': sys.maxsize,
           'indent_sequences': True,
           'allow_unicode': True}


# Comment lines carrying one of these markers begin a section that keeps a
# blank line before it
BLANK_LINE_MARKERS = ('@schema',)

DOCUMENT_SEPARATOR = '---'

DOCUMENT_END = '...'
