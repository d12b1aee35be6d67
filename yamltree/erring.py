# -*- coding: utf-8 -*-
#
# Copyright (c) 2016-2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


class YamlTreeException(Exception):
    '''
    Base yamltree exception.
    '''
    pass


class ParseError(YamlTreeException):
    '''
    Error in parsing a document.  Carries the zero-based index of the
    document in which the error occurred and the underlying reader error.
    '''
    def __init__(self, doc_index, cause):
        self.doc_index = doc_index
        self.cause = cause
        msg = 'Failed to parse document {0}: {1}'.format(doc_index, cause)
        super().__init__(msg)


class NodeError(YamlTreeException, ValueError):
    '''
    Invalid structural operation on a node.
    '''
    def __init__(self, msg, node=None):
        self.node = node
        super().__init__(msg)

    def __str__(self):
        msg = self.args[0]
        if self.node is not None and self.node.line:
            return '{0} (at line {1}:{2})'.format(msg, self.node.line, self.node.column)
        return msg


class AliasCycleError(NodeError):
    '''
    An alias that refers, directly or indirectly, to a node containing it.
    '''
    def __init__(self, anchor, node=None):
        self.anchor = anchor
        msg = 'Alias "*{0}" refers to a node that contains it'.format(anchor)
        super().__init__(msg, node)


class TransformError(YamlTreeException):
    '''
    Failure of a single transform operation.
    '''
    def __init__(self, operation, cause):
        self.operation = operation
        self.cause = cause
        msg = 'Transform "{0}" failed: {1}'.format(operation, cause)
        super().__init__(msg)


class StreamCallbackError(YamlTreeException):
    '''
    Error raised by a streaming callback, which ends the stream.
    '''
    def __init__(self, doc_index, cause):
        self.doc_index = doc_index
        self.cause = cause
        msg = 'Callback failed for document {0}: {1}'.format(doc_index, cause)
        super().__init__(msg)


class Bug(YamlTreeException):
    '''
    Internal inconsistency that should never occur.
    '''
    pass
