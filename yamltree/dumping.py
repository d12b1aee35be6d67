# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


from .encoding import TreeEncoder


_DEFAULT_ENCODER = TreeEncoder()




def dump(tree, fp, cls=None, **kwargs):
    '''
    Dump a tree to a file-like object.
    '''
    fp.write(dumps(tree, cls=cls, **kwargs))


def dumps(tree, cls=None, blank_lines=None, **kwargs):
    '''
    Dump a tree to a Unicode string.
    '''
    if cls is None:
        if not kwargs:
            return _DEFAULT_ENCODER.encode(tree, blank_lines)
        return TreeEncoder(**kwargs).encode(tree, blank_lines)
    return cls(**kwargs).encode(tree, blank_lines)


def serialize(tree, blank_lines=None, **kwargs):
    '''
    Serialize a tree as UTF-8 bytes.  An empty tree serializes to zero
    bytes.
    '''
    return dumps(tree, blank_lines=blank_lines, **kwargs).encode('utf-8')
