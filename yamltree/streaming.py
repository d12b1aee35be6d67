# -*- coding: utf-8 -*-
#
# Copyright (c) 2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#

'''
Read a stream of YAML documents one document at a time.

Lines are buffered until a `---` or `...` line ends the current document,
which is then parsed on its own.  Only one document's text is held in
memory at a time.
'''


import logging
from . import defaults
from . import erring
from .decoding import TreeDecoder
from .reading import only_directives


logger = logging.getLogger(__name__)




class StreamReader(object):
    '''
    Split `source` into documents and pass each to `callback(index, tree)`.

    `source` is a file-like object or any iterable of lines (str or bytes).
    An exception raised by the callback ends the stream and is raised again
    as StreamCallbackError.
    '''
    __slots__ = ['source', 'callback', 'decoder']

    def __init__(self, source, callback=None, **kwargs):
        if callback is not None and not callable(callback):
            raise TypeError('"callback" must be callable')
        self.source = source
        self.callback = callback
        self.decoder = TreeDecoder(**kwargs)


    def _regions(self):
        buffer = []
        for line in self.source:
            if isinstance(line, (bytes, bytearray)):
                line = bytes(line).decode(self.decoder.encoding)
            if not line.endswith(('\n', '\r')):
                line += '\n'
            stripped = line.strip()
            if stripped in (defaults.DOCUMENT_SEPARATOR, defaults.DOCUMENT_END):
                if stripped == defaults.DOCUMENT_SEPARATOR and only_directives(buffer):
                    buffer.append(line)
                    continue
                if any(x.strip() for x in buffer):
                    yield ''.join(buffer)
                buffer = []
            else:
                buffer.append(line)
        if any(x.strip() for x in buffer):
            yield ''.join(buffer)


    def iter_trees(self):
        '''
        Yield (document index, tree) for each document in the stream.
        '''
        index = 0
        for region in self._regions():
            try:
                tree = self.decoder.decode(region)
            except erring.ParseError as e:
                raise erring.ParseError(index + e.doc_index, e.cause)
            yield (index, tree)
            index += len(tree.documents)


    def read(self):
        '''
        Pass each parsed region to the callback.  Returns the number of
        documents read, which exceeds the number of callback calls when a
        region holds more than one document.
        '''
        if self.callback is None:
            raise TypeError('A callback is required to read a stream')
        count = 0
        for index, tree in self.iter_trees():
            try:
                self.callback(index, tree)
            except Exception as e:
                raise erring.StreamCallbackError(index, e)
            count += len(tree.documents)
        logger.debug('Streamed %d document(s)', count)
        return count
