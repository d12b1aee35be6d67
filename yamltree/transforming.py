# -*- coding: utf-8 -*-
#
# Copyright (c) 2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#

'''
Chainable tree transformations.

    pipeline = Pipeline().remove_key('debug').rename_key('host', 'hostname')
    new_tree = pipeline.apply(tree)

Operations are applied in the order they were added, to every node of each
document, parents before children:  the document root, then each mapping
key before its value.  An operation may return None to drop a node; dropping
either a mapping key or its value drops the pair, and dropping the document
root leaves the document empty.  `set_value()` and `add_comment()` change
value nodes only, and leave mapping keys and the document root as they are.

A pipeline containing `select()` does only that selection:  it keeps the
mapping entries whose values match the predicate, along with the nested
mappings leading to them, and no other operation runs.
'''


import collections
import logging
from . import erring
from .nodes import Node, NodeKind, NodeStyle, Document, Tree


logger = logging.getLogger(__name__)


Operation = collections.namedtuple('Operation', ['name', 'description', 'function', 'values_only'])




def _rebuild(node, children):
    '''
    Replace the children of a collection.  `children` holds (key, value)
    pairs for mappings and nodes otherwise.
    '''
    for child in node.children:
        child.parent = None
    node.children = []
    if node.kind is NodeKind.MAPPING:
        for key, value in children:
            node.add_key_value(key, value)
    else:
        for child in children:
            node.add_child(child)


def _select(node, predicate):
    if node.kind is NodeKind.DOCUMENT:
        if not node.children:
            return None
        selected = _select(node.children[0], predicate)
        if selected is None:
            return None
        _rebuild(node, [selected])
        return node
    if node.kind is NodeKind.MAPPING:
        kept = []
        for key, value in list(node.pairs()):
            if predicate(value):
                kept.append((key, value))
            elif value.kind is NodeKind.MAPPING:
                selected = _select(value, predicate)
                if selected is not None:
                    kept.append((key, selected))
        if not kept:
            return None
        _rebuild(node, kept)
        return node
    if predicate(node):
        return node
    return None




def _set_value(value):
    def operation(node):
        if node.kind in (NodeKind.SCALAR, NodeKind.NULL):
            node.kind = NodeKind.SCALAR
            node.value = value
            node.metadata.pop('text', None)
        return node
    return operation


def _add_comment(text):
    def operation(node):
        node.head_comment.append(text)
        return node
    return operation


def _remove_key(name):
    def operation(node):
        if node.kind is NodeKind.MAPPING:
            _rebuild(node, [(k, v) for k, v in node.pairs() if k.text != name])
        return node
    return operation


def _rename_key(old, new):
    def operation(node):
        key = node.get_key(old) if node.kind is NodeKind.MAPPING else None
        if key is not None:
            key.kind = NodeKind.SCALAR
            key.value = new
            key.metadata.pop('text', None)
        return node
    return operation


def _sort_keys(node):
    if node.kind is NodeKind.MAPPING:
        _rebuild(node, sorted(node.pairs(), key=lambda pair: pair[0].text))
    return node


def _flatten_into(node, prefix, pairs):
    for key, value in node.pairs():
        path = key.text if not prefix else '{0}.{1}'.format(prefix, key.text)
        if value.kind is NodeKind.MAPPING:
            _flatten_into(value, path, pairs)
        else:
            flat_key = Node.scalar(path)
            flat_key.head_comment = list(key.head_comment)
            flat_key.line_comment = key.line_comment
            flat_key.foot_comment = list(key.foot_comment)
            pairs.append((flat_key, value))


def _flatten(node):
    if node.kind is not NodeKind.MAPPING:
        return node
    pairs = []
    _flatten_into(node, '', pairs)
    flat = Node.mapping(NodeStyle.FLOW if node.style is NodeStyle.FLOW else NodeStyle.DEFAULT)
    flat.anchor = node.anchor
    flat.tag = node.tag
    flat.head_comment = list(node.head_comment)
    flat.line_comment = node.line_comment
    flat.foot_comment = list(node.foot_comment)
    flat.blank_lines_before = node.blank_lines_before
    for key, value in pairs:
        value.parent = None
        flat.add_key_value(key, value)
    return flat




class Pipeline(object):
    '''
    Ordered list of operations.  Each builder method appends an operation
    and returns the pipeline, so that calls can be chained.
    '''
    __slots__ = ['operations']

    def __init__(self):
        self.operations = []


    def __repr__(self):
        return '<Pipeline {0}>'.format(', '.join(op.name for op in self.operations))

    def __len__(self):
        return len(self.operations)


    def _add(self, name, description, function, values_only=False):
        self.operations.append(Operation(name, description, function, values_only))
        return self


    def select(self, predicate):
        if not callable(predicate):
            raise TypeError('"predicate" must be callable')
        return self._add('select', 'Select nodes by predicate', predicate)

    def map(self, function):
        '''
        Apply `function(node)` to each node, including mapping keys and the
        document root.  The node it returns takes the original's place;
        None drops the node.
        '''
        if not callable(function):
            raise TypeError('"function" must be callable')
        return self._add('map', 'Transform each node', function)

    def set_value(self, value):
        if value is not None and not isinstance(value, (str, int, float)):
            raise TypeError('Scalar values must be str, int, float, bool, or None')
        return self._add('set_value', 'Set value to {0!r}'.format(value), _set_value(value), True)

    def add_comment(self, text):
        if not isinstance(text, str):
            raise TypeError('"text" must be a string')
        return self._add('add_comment', 'Add comment', _add_comment(text), True)

    def remove_key(self, name):
        return self._add('remove_key', "Remove key '{0}'".format(name), _remove_key(name))

    def rename_key(self, old, new):
        return self._add('rename_key', "Rename key '{0}' to '{1}'".format(old, new), _rename_key(old, new))

    def sort_keys(self):
        return self._add('sort_keys', 'Sort mapping keys', _sort_keys)

    def flatten(self):
        return self._add('flatten', 'Flatten nested mappings', _flatten)


    def _run(self, node, is_value=True):
        for operation in self.operations:
            if operation.values_only and not is_value:
                continue
            try:
                node = operation.function(node)
            except Exception as e:
                raise erring.TransformError(operation.name, e)
            if node is None:
                return None
            if not isinstance(node, Node):
                raise erring.TransformError(operation.name, TypeError('Operations must return a Node or None'))
        return node


    def _apply_to_node(self, node, is_value=True):
        node = self._run(node, is_value and node.kind is not NodeKind.DOCUMENT)
        if node is None:
            return None
        if node.kind is NodeKind.MAPPING:
            pairs = []
            for key, value in list(node.pairs()):
                key = self._apply_to_node(key, False)
                if key is None:
                    continue
                value = self._apply_to_node(value)
                if value is not None:
                    pairs.append((key, value))
            _rebuild(node, pairs)
        elif node.kind in (NodeKind.SEQUENCE, NodeKind.DOCUMENT):
            children = []
            for child in list(node.children):
                child = self._apply_to_node(child)
                if child is not None:
                    children.append(child)
            _rebuild(node, children)
        return node


    def apply_to_node(self, node):
        '''
        Transform a copy of `node` and its descendants.  Returns None when
        the node itself is dropped.
        '''
        if node is None:
            return None
        node = node.clone()
        for operation in self.operations:
            if operation.name == 'select':
                try:
                    return _select(node, operation.function)
                except Exception as e:
                    raise erring.TransformError(operation.name, e)
        return self._apply_to_node(node)


    def apply(self, tree):
        '''
        Return a transformed copy of `tree`.  The input is not modified,
        including when an operation fails with TransformError.
        '''
        if not isinstance(tree, Tree):
            raise TypeError('Pipelines apply to Tree objects')
        result = Tree()
        for document in tree.documents:
            new_document = Document()
            new_document.directives = list(document.directives)
            new_document.set_root(self.apply_to_node(document.root))
            new_document.rebuild_anchors()
            result.add_document(new_document)
        logger.debug('Applied %d operation(s) to %d document(s)', len(self.operations), len(tree.documents))
        return result
