# -*- coding: utf-8 -*-
#
# Copyright (c) 2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#

'''
Structural comparison of trees.

Nodes are compared by position:  mapping values by key text and sequence
items by index.  Paths are relative to a document's content, as in
`.settings[2].host`; `DiffEntry.location` prefixes the document.
'''


import enum
import logging
from .nodes import NodeKind


logger = logging.getLogger(__name__)




class DiffKind(enum.Enum):
    NONE = 'None'
    ADDED = 'Added'
    REMOVED = 'Removed'
    MODIFIED = 'Modified'
    COMMENT_CHANGED = 'CommentChanged'
    STYLE_CHANGED = 'StyleChanged'
    REORDERED = 'Reordered'

    def __str__(self):
        return self.value




class DiffEntry(object):
    '''
    One difference between two trees.
    '''
    __slots__ = ['kind', 'path', 'old_value', 'new_value', 'old_node', 'new_node',
                 'old_comment', 'new_comment', 'description', 'document']

    def __init__(self, kind, path, **kwargs):
        if not isinstance(kind, DiffKind):
            raise TypeError('Invalid diff kind {0!r}'.format(kind))
        self.kind = kind
        self.path = path
        self.old_value = kwargs.pop('old_value', None)
        self.new_value = kwargs.pop('new_value', None)
        self.old_node = kwargs.pop('old_node', None)
        self.new_node = kwargs.pop('new_node', None)
        self.old_comment = kwargs.pop('old_comment', None)
        self.new_comment = kwargs.pop('new_comment', None)
        self.description = kwargs.pop('description', '')
        self.document = kwargs.pop('document', 0)
        if kwargs:
            raise TypeError('Unexpected keyword argument(s) {0}'.format(', '.join('"{0}"'.format(k) for k in kwargs)))


    def __repr__(self):
        return '<DiffEntry {0} {1}>'.format(self.kind, self.location)

    def __str__(self):
        return '{0} {1}: {2}'.format(self.kind, self.location, self.description)


    @property
    def location(self):
        return '$[document:{0}]{1}'.format(self.document, self.path)




def _kind(node):
    # Null nodes compare as null scalars
    if node.kind is NodeKind.NULL:
        return NodeKind.SCALAR
    return node.kind


def _scalar_text(node):
    if node.kind in (NodeKind.SCALAR, NodeKind.NULL, NodeKind.ALIAS):
        return node.text
    return None


def _key_map(node):
    '''
    Ordered key texts, and text-to-key and text-to-value maps, for the
    scalar keys of a mapping.  For a repeated key the last pair is used.
    '''
    order = []
    keys = {}
    values = {}
    for key, value in node.pairs():
        text = _scalar_text(key)
        if text is None:
            continue
        if text not in values:
            order.append(text)
        keys[text] = key
        values[text] = value
    return order, keys, values


def _check_properties(old, new, path, diffs):
    if old.style is not new.style:
        diffs.append(DiffEntry(DiffKind.STYLE_CHANGED, path, old_value=old.style, new_value=new.style,
                               old_node=old, new_node=new,
                               description='Style changed at {0}'.format(path or '$')))
    for label, old_comment, new_comment in (('Head', old.head_comment, new.head_comment),
                                            ('Line', old.line_comment, new.line_comment),
                                            ('Foot', old.foot_comment, new.foot_comment)):
        if old_comment != new_comment:
            diffs.append(DiffEntry(DiffKind.COMMENT_CHANGED, path, old_node=old, new_node=new,
                                   old_comment=old_comment, new_comment=new_comment,
                                   description='{0} comment changed at {1}'.format(label, path or '$')))
    if old.tag != new.tag:
        diffs.append(DiffEntry(DiffKind.MODIFIED, path, old_value=old.tag, new_value=new.tag,
                               old_node=old, new_node=new,
                               description="Tag changed at {0} from '{1}' to '{2}'".format(path or '$', old.tag, new.tag)))


def diff_nodes(old, new, path=''):
    '''
    Differences between two nodes.  `path` is the location of the pair.
    '''
    diffs = []
    if old is None and new is None:
        return diffs
    if old is None:
        diffs.append(DiffEntry(DiffKind.ADDED, path, new_value=new.value, new_node=new,
                               description='Added node at {0}'.format(path or '$')))
        return diffs
    if new is None:
        diffs.append(DiffEntry(DiffKind.REMOVED, path, old_value=old.value, old_node=old,
                               description='Removed node at {0}'.format(path or '$')))
        return diffs
    if _kind(old) is not _kind(new):
        diffs.append(DiffEntry(DiffKind.MODIFIED, path, old_value=old.kind, new_value=new.kind,
                               old_node=old, new_node=new,
                               description='Node kind changed at {0} from {1} to {2}'.format(path or '$', old.kind.value, new.kind.value)))
        return diffs

    old_text = _scalar_text(old)
    if old_text is not None and old_text != new.text:
        diffs.append(DiffEntry(DiffKind.MODIFIED, path, old_value=old.value, new_value=new.value,
                               old_node=old, new_node=new,
                               description="Value changed at {0} from '{1}' to '{2}'".format(path or '$', old_text, new.text)))
    _check_properties(old, new, path, diffs)

    if old.kind is NodeKind.MAPPING:
        old_order, old_keys, old_values = _key_map(old)
        new_order, new_keys, new_values = _key_map(new)
        for text in old_order:
            if text not in new_values:
                value = old_values[text]
                diffs.append(DiffEntry(DiffKind.REMOVED, '{0}.{1}'.format(path, text),
                                       old_value=value.value, old_node=value,
                                       description="Key '{0}' removed".format(text)))
        for text in new_order:
            child_path = '{0}.{1}'.format(path, text)
            if text in old_values:
                # Comments written ahead of an entry belong to its key
                _check_properties(old_keys[text], new_keys[text], child_path, diffs)
                diffs.extend(diff_nodes(old_values[text], new_values[text], child_path))
            else:
                value = new_values[text]
                diffs.append(DiffEntry(DiffKind.ADDED, child_path, new_value=value.value, new_node=value,
                                       description="Key '{0}' added".format(text)))
    elif old.kind is NodeKind.SEQUENCE:
        old_items = old.children
        new_items = new.children
        common = min(len(old_items), len(new_items))
        for index in range(common):
            diffs.extend(diff_nodes(old_items[index], new_items[index], '{0}[{1}]'.format(path, index)))
        for index in range(common, len(old_items)):
            diffs.append(DiffEntry(DiffKind.REMOVED, '{0}[{1}]'.format(path, index),
                                   old_value=old_items[index].value, old_node=old_items[index],
                                   description='Sequence item {0} removed'.format(index)))
        for index in range(common, len(new_items)):
            diffs.append(DiffEntry(DiffKind.ADDED, '{0}[{1}]'.format(path, index),
                                   new_value=new_items[index].value, new_node=new_items[index],
                                   description='Sequence item {0} added'.format(index)))
    elif old.kind is NodeKind.DOCUMENT:
        old_content = old.children[0] if old.children else None
        new_content = new.children[0] if new.children else None
        diffs.extend(diff_nodes(old_content, new_content, path))
    return diffs




def _document_entry(kind, index, document):
    if kind is DiffKind.ADDED:
        return DiffEntry(kind, '', new_node=document.root, document=index,
                         description='Document {0} added'.format(index))
    return DiffEntry(kind, '', old_node=document.root, document=index,
                     description='Document {0} removed'.format(index))


def diff(old, new):
    '''
    Differences between two trees, document by document.  Each entry
    records the index of the document it belongs to.
    '''
    diffs = []
    old_documents = old.documents if old is not None else []
    new_documents = new.documents if new is not None else []
    for index in range(max(len(old_documents), len(new_documents))):
        if index >= len(old_documents):
            diffs.append(_document_entry(DiffKind.ADDED, index, new_documents[index]))
        elif index >= len(new_documents):
            diffs.append(_document_entry(DiffKind.REMOVED, index, old_documents[index]))
        else:
            for entry in diff_nodes(old_documents[index].root, new_documents[index].root):
                entry.document = index
                diffs.append(entry)
    logger.debug('Found %d difference(s)', len(diffs))
    return diffs
