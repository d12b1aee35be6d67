# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


import logging
from . import adapting
from . import defaults
from . import writing
from .nodes import Tree
from .spacing import BlankLineConfig


logger = logging.getLogger(__name__)




class TreeEncoder(object):
    '''
    Encode a Tree as YAML text.

    `blank_lines` is the BlankLineConfig used when none is passed to
    `encode()`.  `indent`, `width`, `indent_sequences` and `allow_unicode`
    control the emitter.
    '''
    __slots__ = ['indent', 'width', 'indent_sequences', 'allow_unicode', 'blank_lines']

    def __init__(self, *args, **kwargs):
        if args:
            raise TypeError('Explicit keyword arguments are required')
        indent = kwargs.pop('indent', defaults.EMITTER['indent'])
        width = kwargs.pop('width', defaults.EMITTER['width'])
        if not all(isinstance(x, int) and not isinstance(x, bool) for x in (indent, width)):
            raise TypeError('"indent" and "width" must be integers')
        if not 1 < indent < 10:
            raise ValueError('"indent" must be between 2 and 9')
        if width <= 2*indent:
            raise ValueError('"width" must be greater than twice "indent"')
        indent_sequences = kwargs.pop('indent_sequences', defaults.EMITTER['indent_sequences'])
        allow_unicode = kwargs.pop('allow_unicode', defaults.EMITTER['allow_unicode'])
        if not all(x in (True, False) for x in (indent_sequences, allow_unicode)):
            raise TypeError('"indent_sequences" and "allow_unicode" must be boolean')
        blank_lines = kwargs.pop('blank_lines', None)
        if blank_lines is None:
            blank_lines = BlankLineConfig.default()
        elif not isinstance(blank_lines, BlankLineConfig):
            raise TypeError('"blank_lines" must be a BlankLineConfig')
        if kwargs:
            raise TypeError('Unexpected keyword argument(s) {0}'.format(', '.join('"{0}"'.format(k) for k in kwargs)))
        self.indent = indent
        self.width = width
        self.indent_sequences = indent_sequences
        self.allow_unicode = allow_unicode
        self.blank_lines = blank_lines


    def encode(self, tree, blank_lines=None):
        '''
        Encode a tree as a Unicode string.  Documents after the first are
        preceded by a `---` line.
        '''
        if not isinstance(tree, Tree):
            raise TypeError('Can only encode Tree objects, not {0}'.format(type(tree).__name__))
        if blank_lines is None:
            blank_lines = self.blank_lines
        elif not isinstance(blank_lines, BlankLineConfig):
            raise TypeError('"blank_lines" must be a BlankLineConfig')
        parts = []
        for index, document in enumerate(tree.documents):
            raw_doc = adapting.document_to_raw(document, blank_lines)
            text = writing.write(raw_doc, indent=self.indent, width=self.width,
                                 indent_sequences=self.indent_sequences,
                                 allow_unicode=self.allow_unicode)
            if index > 0:
                text = defaults.DOCUMENT_SEPARATOR + '\n' + text
            parts.append(text)
        logger.debug('Encoded %d document(s) with %r', len(tree.documents), blank_lines)
        return ''.join(parts)
