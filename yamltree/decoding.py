# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


import codecs
import logging
from . import adapting
from . import erring
from . import reading
from .nodes import Tree


logger = logging.getLogger(__name__)




class TreeDecoder(object):
    '''
    Decode YAML text into a Tree.  Byte strings are decoded with `encoding`
    (UTF-8 by default); a leading byte order mark is ignored.
    '''
    __slots__ = ['encoding']

    def __init__(self, *args, **kwargs):
        if args:
            raise TypeError('Explicit keyword arguments are required')
        encoding = kwargs.pop('encoding', 'utf-8')
        if not isinstance(encoding, str):
            raise TypeError('"encoding" must be a string')
        try:
            codecs.lookup(encoding)
        except LookupError:
            raise ValueError('Unknown encoding "{0}"'.format(encoding))
        if kwargs:
            raise TypeError('Unexpected keyword argument(s) {0}'.format(', '.join('"{0}"'.format(k) for k in kwargs)))
        self.encoding = encoding


    def decode(self, s):
        '''
        Decode a Unicode or byte string.  Empty input gives a tree with one
        empty document.
        '''
        if isinstance(s, (bytes, bytearray)):
            try:
                s = bytes(s).decode(self.encoding)
            except UnicodeDecodeError as e:
                raise erring.ParseError(0, e)
        elif not isinstance(s, str):
            raise TypeError('Can only decode str or bytes, not {0}'.format(type(s).__name__))
        if s[:1] == '\ufeff':
            s = s[1:]
        tree = Tree()
        for index, raw_doc in enumerate(reading.read(s)):
            try:
                document = adapting.raw_to_document(raw_doc)
            except erring.NodeError as e:
                raise erring.ParseError(index, e)
            tree.add_document(document)
        if not tree.documents:
            tree.add_document()
        logger.debug('Decoded %d document(s)', len(tree.documents))
        return tree
