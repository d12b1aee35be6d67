# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


from .decoding import TreeDecoder


_DEFAULT_DECODER = TreeDecoder()


def load(fp, cls=None, **kwargs):
    '''
    Load a tree from a file-like object.
    '''
    if cls is None:
        if not kwargs:
            return _DEFAULT_DECODER.decode(fp.read())
        return TreeDecoder(**kwargs).decode(fp.read())
    return cls(**kwargs).decode(fp.read())


def loads(s, cls=None, **kwargs):
    '''
    Load a tree from a Unicode or byte string.
    '''
    if cls is None:
        if not kwargs:
            return _DEFAULT_DECODER.decode(s)
        return TreeDecoder(**kwargs).decode(s)
    return cls(**kwargs).decode(s)


def parse(data):
    '''
    Parse YAML bytes or text into a Tree.
    '''
    return _DEFAULT_DECODER.decode(data)
