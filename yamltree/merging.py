# -*- coding: utf-8 -*-
#
# Copyright (c) 2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#

'''
Merge trees, documents, and nodes.  The overlay takes precedence; comments
are kept from whichever side has them.  Inputs are never modified.
'''


import logging
from .nodes import Node, NodeKind, Document, Tree


logger = logging.getLogger(__name__)




def _fallback_comments(result, other):
    '''
    Give `result` each class of comment it lacks but `other` has.
    '''
    if not result.head_comment and other.head_comment:
        result.head_comment = list(other.head_comment)
    if not result.line_comment and other.line_comment:
        result.line_comment = other.line_comment
    if not result.foot_comment and other.foot_comment:
        result.foot_comment = list(other.foot_comment)


def _override_comments(key, overlay_key):
    '''
    Replace each class of comment on `key` that `overlay_key` carries.
    '''
    if overlay_key.head_comment:
        key.head_comment = list(overlay_key.head_comment)
    if overlay_key.line_comment:
        key.line_comment = overlay_key.line_comment
    if overlay_key.foot_comment:
        key.foot_comment = list(overlay_key.foot_comment)


def _lookup_text(key):
    if key.kind in (NodeKind.SCALAR, NodeKind.NULL):
        return key.text
    return None


def _merge_mappings(base, overlay):
    result = base.clone()
    positions = {}
    for index in range(0, len(result.children)-1, 2):
        text = _lookup_text(result.children[index])
        if text is not None:
            positions.setdefault(text, index)
    for overlay_key, overlay_value in overlay.pairs():
        text = _lookup_text(overlay_key)
        index = positions.get(text) if text is not None else None
        if index is None:
            if text is not None:
                positions[text] = len(result.children)
            result.add_key_value(overlay_key.clone(), overlay_value.clone())
            continue
        base_value = result.children[index+1]
        if base_value.kind is NodeKind.MAPPING and overlay_value.kind is NodeKind.MAPPING:
            merged = merge_nodes(base_value, overlay_value)
        else:
            merged = overlay_value.clone()
            _fallback_comments(merged, base_value)
            _override_comments(result.children[index], overlay_key)
        result.children[index+1].replace_with(merged)
    _fallback_comments(result, overlay)
    return result


def merge_nodes(base, overlay):
    '''
    Merge two nodes.

      * Mappings are merged key by key.  Keys only in the overlay are
        appended in overlay order.  Values of shared keys are merged when
        both are mappings and otherwise replaced by the overlay's value,
        which keeps any class of comment it lacks from the base value.
      * Sequences are concatenated.
      * Anything else is replaced by the overlay, which keeps each class of
        comment (head, line, foot) from the base if it has none itself.
    '''
    if base is None:
        if overlay is None:
            return None
        return overlay.clone()
    if overlay is None:
        return base.clone()
    if base.kind is NodeKind.MAPPING and overlay.kind is NodeKind.MAPPING:
        return _merge_mappings(base, overlay)
    if base.kind is NodeKind.SEQUENCE and overlay.kind is NodeKind.SEQUENCE:
        result = base.clone()
        for item in overlay.children:
            result.add_child(item.clone())
        _fallback_comments(result, overlay)
        return result
    result = overlay.clone()
    _fallback_comments(result, base)
    return result




def merge_documents(base, overlay):
    '''
    Merge two documents.  Directives are combined by name, with the base's
    directive kept when both have one of the same name.
    '''
    if base is None:
        if overlay is None:
            return None
        return overlay.clone()
    if overlay is None:
        return base.clone()
    merged = Document()
    merged.directives = list(base.directives)
    names = set(d.name for d in base.directives)
    for directive in overlay.directives:
        if directive.name not in names:
            merged.directives.append(directive)
            names.add(directive.name)
    content = merge_nodes(base.content, overlay.content)
    root = Node.document()
    for source in (base.root, overlay.root):
        if source is not None and source.kind is NodeKind.DOCUMENT:
            _fallback_comments(root, source)
    if content is not None:
        root.add_child(content)
    merged.set_root(root)
    merged.rebuild_anchors()
    return merged


def merge(base, overlay):
    '''
    Merge two trees.  The first documents are merged; the remaining
    documents of the base and then of the overlay follow unchanged.
    '''
    if base is None:
        return None if overlay is None else overlay.clone()
    if overlay is None:
        return base.clone()
    result = Tree()
    if base.documents and overlay.documents:
        result.add_document(merge_documents(base.documents[0], overlay.documents[0]))
        for document in base.documents[1:] + overlay.documents[1:]:
            result.add_document(document.clone())
    else:
        for document in base.documents or overlay.documents:
            result.add_document(document.clone())
    if result.documents:
        result.current = result.documents[0]
    logger.debug('Merged trees of %d and %d document(s)', len(base.documents), len(overlay.documents))
    return result
