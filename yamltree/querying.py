# -*- coding: utf-8 -*-
#
# Copyright (c) 2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#

'''
Path queries such as `services/web/ports/[0]` or `services/*`.

Segments are separated by `/`.  A segment is a key (matched against the
rendered text of mapping keys), `*` (every child, so keys and values
alternate for mappings), or `[n]` (a sequence index).  Segments that do
not apply to a node contribute nothing; a query never raises.
'''


import re
from .nodes import Document, NodeKind


_index_re = re.compile(r'\[(-?[0-9]+)\]\Z')




def _expand(node, segment):
    if segment == '*':
        return list(node.children)
    match = _index_re.match(segment)
    if match is not None:
        index = int(match.group(1))
        if node.kind is NodeKind.SEQUENCE and 0 <= index < len(node.children):
            return [node.children[index]]
        return []
    if node.kind is NodeKind.MAPPING:
        for key, value in node.pairs():
            if key.kind in (NodeKind.SCALAR, NodeKind.NULL) and key.text == segment:
                return [value]
    return []


def query(node, path):
    '''
    Nodes matching `path`, starting from `node`.  A Document starts from
    its content.  An empty path gives `[node]`.
    '''
    if isinstance(node, Document):
        node = node.content
    if node is None:
        return []
    results = [node]
    for segment in path.split('/'):
        if not segment:
            continue
        expanded = []
        for current in results:
            expanded.extend(_expand(current, segment))
        results = expanded
    return results


def query_one(node, path):
    '''
    First node matching `path`, or None.
    '''
    results = query(node, path)
    if results:
        return results[0]
    return None
