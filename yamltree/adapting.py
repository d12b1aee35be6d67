# -*- coding: utf-8 -*-
#
# Copyright (c) 2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#

'''
Conversion between generic `RawNode` graphs and the `Node` tree.

Scalar source text is kept in `Node.metadata['text']` when it differs from
the rendered value, so that spellings like `~`, `1e3` or `0.10` are written
back unchanged as long as the value has not been modified.
'''


from . import defaults
from . import erring
from .nodes import (Node, NodeKind, NodeStyle, ScalarType, Document,
                    decode_plain, decode_tagged, format_value, same_value)
from .reading import RawNode
from .spacing import BlankLineConfig




_RAW_STYLES = {'': NodeStyle.DEFAULT,
               "'": NodeStyle.SINGLE_QUOTED,
               '"': NodeStyle.DOUBLE_QUOTED,
               '|': NodeStyle.LITERAL,
               '>': NodeStyle.FOLDED,
               defaults.FLOW_STYLE: NodeStyle.FLOW}

_SCALAR_STYLE_CHARS = {NodeStyle.SINGLE_QUOTED: "'",
                       NodeStyle.DOUBLE_QUOTED: '"',
                       NodeStyle.LITERAL: '|',
                       NodeStyle.FOLDED: '>'}

_TYPE_TAGS = {ScalarType.STRING: defaults.CORE_TAGS['str'],
              ScalarType.INTEGER: defaults.CORE_TAGS['int'],
              ScalarType.FLOAT: defaults.CORE_TAGS['float'],
              ScalarType.BOOLEAN: defaults.CORE_TAGS['bool'],
              ScalarType.NULL: defaults.CORE_TAGS['null']}


def _lines(text):
    if not text:
        return []
    return text.split('\n')


def decode_scalar(text, tag, style_char):
    '''
    Typed value of scalar text.  Core tags decide the type when present;
    otherwise plain scalars are resolved by their text and all other
    styles are strings.
    '''
    if tag is not None and tag != '!':
        return decode_tagged(text, tag)
    if not style_char and tag is None:
        return decode_plain(text)
    return text




class _NodeBuilder(object):
    '''
    Build the nodes of one document.  Anchors are registered as nodes are
    built; aliases are resolved once the whole document exists.
    '''
    def __init__(self, document):
        self.document = document
        self.aliases = []


    def node(self, raw):
        kind = raw.kind
        style = _RAW_STYLES.get(raw.style, NodeStyle.DEFAULT)
        if kind == 'scalar':
            value = decode_scalar(raw.value, raw.tag, raw.style)
            node = Node(NodeKind.SCALAR, value, tag=raw.tag, style=style)
            if raw.value != format_value(value):
                node.metadata['text'] = raw.value
        elif kind == 'alias':
            node = Node(NodeKind.ALIAS, raw.value)
            self.aliases.append(node)
        elif kind in ('mapping', 'sequence'):
            node = Node(NodeKind.MAPPING if kind == 'mapping' else NodeKind.SEQUENCE, tag=raw.tag, style=style)
            for child in raw.content:
                node.add_child(self.node(child))
            if kind == 'mapping':
                for key, value in node.pairs():
                    value.key = key
        else:
            raise erring.Bug('Unexpected raw node kind "{0}"'.format(kind))
        if raw.anchor:
            self.document.register_anchor(raw.anchor, node)
        node.head_comment = _lines(raw.head_comment)
        node.line_comment = raw.line_comment
        node.foot_comment = _lines(raw.foot_comment)
        node.blank_lines_before = raw.blank_lines_before
        node.line = raw.line
        node.column = raw.column
        return node


    def resolve_aliases(self):
        for alias in self.aliases:
            target = self.document.get_anchor(alias.value)
            if target is None:
                raise erring.NodeError('Alias "*{0}" refers to an unknown anchor'.format(alias.value), alias)
            alias.alias = target


def raw_to_document(raw_doc):
    '''
    Convert a document raw node into a Document.  The root is a
    document-kind node holding the document's comments and its content.
    '''
    document = Document()
    for name, value in raw_doc.directives:
        document.add_directive(name, value)
    root = Node.document()
    root.head_comment = _lines(raw_doc.head_comment)
    root.foot_comment = _lines(raw_doc.foot_comment)
    root.line = raw_doc.line
    builder = _NodeBuilder(document)
    if raw_doc.content:
        root.add_child(builder.node(raw_doc.content[0]))
    builder.resolve_aliases()
    document.set_root(root)
    return document




def render_scalar(node):
    '''
    Return (text, tag, style character) for writing a scalar node.
    '''
    value = node.value
    tag = node.tag
    style_char = _SCALAR_STYLE_CHARS.get(node.style, '')
    if node.style is NodeStyle.TAGGED and tag is None:
        tag = _TYPE_TAGS[node.scalar_type]
    if not isinstance(value, str) and tag is None:
        style_char = ''
    text = node.metadata.get('text')
    if text is None or not same_value(decode_scalar(text, tag, style_char), value):
        text = value if isinstance(value, str) else format_value(value)
    if (isinstance(value, str) and not style_char and tag is None and
            not same_value(decode_plain(text), value)):
        style_char = '"'
    return (text, tag, style_char)


class _RawBuilder(object):
    '''
    Build raw nodes for writing, applying a blank-line configuration.
    '''
    def __init__(self, blank_lines):
        self.blank_lines = blank_lines


    def node(self, node, first=True, at_start=False):
        kind = node.kind
        if kind is NodeKind.DOCUMENT:
            if node.children:
                return self.node(node.children[0], first, at_start)
            raw = RawNode('scalar', 'null')
        elif kind is NodeKind.NULL:
            raw = RawNode('scalar', 'null', node.tag)
        elif kind is NodeKind.SCALAR:
            text, tag, style_char = render_scalar(node)
            raw = RawNode('scalar', text, tag, style=style_char)
        elif kind is NodeKind.ALIAS:
            name = node.value
            if node.alias is not None and node.alias.anchor:
                name = node.alias.anchor
            raw = RawNode('alias', name)
        else:
            style = defaults.FLOW_STYLE if node.style is NodeStyle.FLOW else ''
            raw = RawNode(kind.value, '', node.tag, style=style)
            children = node.children
            if kind is NodeKind.MAPPING:
                for index in range(0, len(children)-1, 2):
                    entry_start = at_start and index == 0 and node.style is not NodeStyle.FLOW
                    raw.content.append(self.node(children[index], index == 0, entry_start))
                    raw.content.append(self.node(children[index+1], True, False))
            else:
                for index, child in enumerate(children):
                    entry_start = at_start and index == 0 and node.style is not NodeStyle.FLOW
                    raw.content.append(self.node(child, index == 0, entry_start))
        if kind is not NodeKind.ALIAS:
            raw.anchor = node.anchor
        blank, head = self.blank_lines.arrange_head(node.blank_lines_before, node.head_comment,
                                                    first_in_collection=first, at_document_start=at_start)
        raw.blank_lines_before = blank
        raw.head_comment = '\n'.join(head)
        raw.line_comment = node.line_comment
        raw.foot_comment = '\n'.join(self.blank_lines.arrange_foot(node.foot_comment))
        return raw


def document_to_raw(document, blank_lines=None):
    '''
    Convert a Document into a document raw node for writing.
    '''
    if blank_lines is None:
        blank_lines = BlankLineConfig.default()
    raw_doc = RawNode('document')
    raw_doc.directives = [(d.name, d.value) for d in document.directives]
    root = document.root
    if root is None:
        return raw_doc
    builder = _RawBuilder(blank_lines)
    if root.kind is NodeKind.DOCUMENT:
        head = blank_lines.arrange_document_head(root.head_comment)
        raw_doc.foot_comment = '\n'.join(blank_lines.arrange_foot(root.foot_comment))
        content = root.children[0] if root.children else None
    else:
        head = []
        content = root
    if content is None:
        while head and not head[-1]:
            head.pop()
    else:
        raw_doc.content.append(builder.node(content, True, True))
    raw_doc.head_comment = '\n'.join(head)
    return raw_doc
