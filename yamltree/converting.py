# -*- coding: utf-8 -*-
#
# Copyright (c) 2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#

'''
Conversion between plain Python data and trees, and merging of inputs that
may be either.
'''


import copy
from . import loading
from . import merging
from .nodes import Node, NodeStyle, Document, Tree




def from_python(data, flow=False):
    '''
    Build a node from plain data.  Dicts become mappings (in insertion
    order), lists and tuples become sequences, and None becomes a null
    node.  Tuple keys become flow sequences.
    '''
    style = NodeStyle.FLOW if flow else NodeStyle.DEFAULT
    if isinstance(data, Node):
        return data.clone()
    if data is None:
        return Node.null()
    if isinstance(data, dict):
        node = Node.mapping(style)
        for key, value in data.items():
            node.add_key_value(from_python(key, flow=True), from_python(value, flow))
        return node
    if isinstance(data, (list, tuple)):
        node = Node.sequence(style)
        for item in data:
            node.add_item(from_python(item, flow))
        return node
    if isinstance(data, (str, int, float)):
        return Node.scalar(data)
    raise TypeError('Cannot convert {0} to a node'.format(type(data).__name__))


def to_tree(data):
    '''
    Tree for `data`.  None gives a tree with one empty document, a Tree is
    returned unchanged, text is parsed, and anything else is converted as
    plain data.
    '''
    if data is None:
        tree = Tree()
        tree.add_document()
        return tree
    if isinstance(data, Tree):
        return data
    if isinstance(data, (bytes, bytearray, str)):
        return loading.parse(data)
    if isinstance(data, Document):
        return Tree([data.clone()])
    root = Node.document()
    root.add_child(from_python(data))
    return Tree([Document(root)])


def to_python(data):
    '''
    Plain data of a Tree (its first document), a Document, or a Node.
    '''
    if isinstance(data, Document):
        return None if data.root is None else data.root.to_python()
    if isinstance(data, (Tree, Node)):
        return data.to_python()
    raise TypeError('Cannot convert {0} to plain data'.format(type(data).__name__))




def merge_data(base, overlay):
    '''
    Merge plain data by the same rules as tree merging.  Dicts are merged
    recursively; a shared key whose values are not both dicts takes the
    overlay's value.  Two lists given directly are concatenated.  Otherwise
    the overlay wins.  Neither input is modified.
    '''
    if overlay is None:
        return copy.deepcopy(base)
    if base is None:
        return copy.deepcopy(overlay)
    if isinstance(base, list) and isinstance(overlay, list):
        return copy.deepcopy(base) + copy.deepcopy(overlay)
    return _merge_values(base, overlay)


def _merge_values(base, overlay):
    if not (isinstance(base, dict) and isinstance(overlay, dict)):
        return copy.deepcopy(overlay)
    result = {}
    for key, value in base.items():
        if key in overlay:
            result[key] = _merge_values(value, overlay[key])
        else:
            result[key] = copy.deepcopy(value)
    for key, value in overlay.items():
        if key not in base:
            result[key] = copy.deepcopy(value)
    return result


def _is_text(data):
    return isinstance(data, (bytes, bytearray, str))


def merge_flexible(base, overlay):
    '''
    Merge inputs that may be trees, YAML text, or plain data.

    If either input is None, the other is returned.  If either is a Tree,
    the result is a merged Tree.  If either is text, both are merged as
    trees and the result is serialized.  Plain data on both sides is merged
    with `merge_data()` and serialized.
    '''
    if base is None:
        return overlay
    if overlay is None:
        return base
    if isinstance(base, Tree) or isinstance(overlay, Tree):
        return merging.merge(to_tree(base), to_tree(overlay))
    if _is_text(base) or _is_text(overlay):
        return merging.merge(to_tree(base), to_tree(overlay)).serialize()
    return to_tree(merge_data(base, overlay)).serialize()


def merge_flexible_to_tree(base, overlay):
    '''
    Merge inputs of any kind accepted by `to_tree()` into a Tree.
    '''
    return merging.merge(to_tree(base), to_tree(overlay))


def merge_flexible_to_bytes(base, overlay):
    return merge_flexible_to_tree(base, overlay).serialize()
