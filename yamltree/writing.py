# -*- coding: utf-8 -*-
#
# Copyright (c) 2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#

'''
Write generic `RawNode` graphs as YAML text.

Raw nodes become ruamel.yaml events, and ruamel.yaml's round-trip emitter
writes them.  Comments travel on the events the way ruamel.yaml's own
parser leaves them:  `event.comment` is a pair of an end-of-line comment
token and a list of comment tokens written ahead of the event.  Each
token carries the column it is written at, so the columns of entries are
worked out here from the indentation settings.

Comments inside flow collections, and foot comments of nodes that are not
block collections, have no place in the output and are dropped.
'''


import io
import logging
from ruamel.yaml import YAML
from ruamel.yaml import events
from ruamel.yaml.emitter import RoundTripEmitter
from ruamel.yaml.error import CommentMark
from ruamel.yaml.tag import Tag
from ruamel.yaml.tokens import CommentToken
from . import defaults


logger = logging.getLogger(__name__)


_STR_TAG = defaults.YAML_TAG_PREFIX + 'str'




def full_tag(tag):
    '''
    Expand `!!name` tags to the YAML namespace.
    '''
    if tag is not None and tag.startswith(defaults.SHORT_TAG_PREFIX):
        return defaults.YAML_TAG_PREFIX + tag[len(defaults.SHORT_TAG_PREFIX):]
    return tag


def comment_lines(text):
    if not text:
        return []
    return text.split('\n')


def comment_text(line):
    if line.startswith('#'):
        return line
    return '# ' + line


def _before(node):
    return [''] * node.blank_lines_before + comment_lines(node.head_comment)


def _has_entries(node):
    return node.is_block_collection and len(node.content) > 0


def _join_comments(first, second):
    if first and second:
        return first + ' ' + second
    return first or second


def _pre_tokens(lines, column):
    '''
    Comment tokens for lines written ahead of an entry.  An empty line is
    a blank line.
    '''
    tokens = []
    for line in lines:
        if line:
            tokens.append(CommentToken(comment_text(line) + '\n', CommentMark(column)))
        else:
            tokens.append(CommentToken('\n', CommentMark(0)))
    return tokens or None


def _post_token(text):
    if not text:
        return None
    # Column 0 gives a single space after the content
    return CommentToken(comment_text(text), CommentMark(0))


def _event_comment(post, pre):
    if post is None and pre is None:
        return None
    return [post, pre]


def _tag(tag):
    if tag is None:
        return None
    return Tag(suffix=tag)




class _EventBuilder(object):
    '''
    Convert one document raw node into a list of events.

    Entry columns follow the emitter settings:  a mapping that is a
    mapping value is indented by `indent`, a block sequence that is a
    mapping value has its dashes at `offset` from the key, and the
    content of a sequence item starts two columns after its dash.
    '''
    def __init__(self, indent, offset):
        self.indent = indent
        self.offset = offset
        self.events = []
        self.dropped = 0


    def document(self, doc):
        version = None
        tags = {}
        for name, value in doc.directives:
            if name == 'YAML':
                major, minor = value.split('.', 1)
                version = (int(major), int(minor))
            elif name == 'TAG':
                handle, prefix = value.split(None, 1)
                tags[handle] = prefix
        root = doc.content[0]
        head = comment_lines(doc.head_comment) + _before(root)
        self.events.append(events.DocumentStartEvent(explicit=bool(version or tags),
                                                     version=version, tags=tags or None,
                                                     comment=_event_comment(None, _pre_tokens(head, 0))))
        self.node(root, 'root', [], False, 0)
        foot = comment_lines(doc.foot_comment)
        if not _has_entries(root):
            foot = comment_lines(root.foot_comment) + foot
        self.events.append(events.DocumentEndEvent(explicit=False,
                                                   comment=_event_comment(None, _pre_tokens(foot, 0))))
        return self.events


    def _drop(self, node):
        if node.head_comment or node.line_comment or node.foot_comment:
            self.dropped += 1


    def node(self, node, context, before, in_flow, column, line_comment=None):
        '''
        Append the events for a node.  `before` holds the lines to write
        ahead of the node's entry, which starts at `column`.  For values
        these lines have already been moved onto the key, and `column` is
        the key's column.
        '''
        if line_comment is None:
            line_comment = node.line_comment
        if in_flow:
            self._drop(node)
        elif _has_entries(node):
            self._block_collection(node, context, before, column, line_comment)
            return
        elif node.foot_comment and context != 'root':
            self.dropped += 1
        pre = None if in_flow else _pre_tokens(before, column)
        post = None if in_flow else _post_token(line_comment)
        tag = full_tag(node.tag)
        if node.kind == 'alias':
            self.events.append(events.AliasEvent(node.value, comment=_event_comment(post, pre)))
        elif node.kind == 'scalar':
            value = node.value
            if not value and not node.style and tag is None and (in_flow or context == 'key'):
                value = 'null'
            comment = _event_comment(post, pre)
            if node.style in ('|', '>') and post is not None:
                # The emitter writes a block scalar's comment on its header
                # line, which it only supports for values and roots
                if context in ('value', 'root'):
                    comment = [None, [' ' + post.value]]
                else:
                    self.dropped += 1
                    comment = _event_comment(None, pre)
            if tag is None:
                ctag, implicit = Tag(suffix=_STR_TAG), (True, True, True)
            else:
                ctag, implicit = Tag(suffix=tag), (False, False, False)
            self.events.append(events.ScalarEvent(node.anchor, ctag, implicit, value,
                                                  style=node.style or None, comment=comment))
        else:
            if node.kind == 'mapping':
                start_class, end_class = events.MappingStartEvent, events.MappingEndEvent
            else:
                start_class, end_class = events.SequenceStartEvent, events.SequenceEndEvent
            self.events.append(start_class(node.anchor, _tag(tag), tag is None, flow_style=True,
                                           comment=_event_comment(None, pre)))
            for child in node.content:
                self.node(child, 'item', [], True, column)
            self.events.append(end_class(comment=_event_comment(post, None)))


    def _block_collection(self, node, context, before, column, line_comment):
        tag = full_tag(node.tag)
        mapping = node.kind == 'mapping'
        if context == 'root':
            inner = 0
        elif context == 'value':
            inner = column + (self.indent if mapping else self.offset)
        else:
            inner = column + 2
        first = node.content[0]
        if context in ('item', 'key'):
            # Written ahead of the `-` or `?` that introduces this collection
            lines = before + _before(first)
            if line_comment:
                lines.append(line_comment)
            comment = _event_comment(None, _pre_tokens(lines, column))
            carried = []
        else:
            comment = _event_comment(_post_token(line_comment), None)
            carried = before + _before(first)
        if mapping:
            start_class, end_class = events.MappingStartEvent, events.MappingEndEvent
        else:
            start_class, end_class = events.SequenceStartEvent, events.SequenceEndEvent
        self.events.append(start_class(node.anchor, _tag(tag), tag is None, flow_style=False,
                                       comment=comment))
        if mapping:
            content = node.content
            for index in range(0, len(content)-1, 2):
                key, value = content[index], content[index+1]
                key_before = carried if index == 0 else _before(key)
                if _has_entries(value):
                    value_before = _before(value)
                else:
                    key_before = key_before + _before(value)
                    value_before = []
                self.node(key, 'key', key_before, False, inner, '')
                self.node(value, 'value', value_before, False, inner,
                          _join_comments(key.line_comment, value.line_comment))
        else:
            for index, item in enumerate(node.content):
                self.node(item, 'item', carried if index == 0 else _before(item), False, inner)
        foot = _pre_tokens(comment_lines(node.foot_comment), inner)
        self.events.append(end_class(comment=_event_comment(None, foot)))




class CommentEmitter(RoundTripEmitter):
    '''
    Round-trip emitter that also writes document head and foot comments
    and line comments after aliases.

    A block sequence that is a mapping value has its dashes at the
    configured offset from the key.  Any other block sequence has its
    dashes at the column where its parent's content starts.
    '''
    def expect_document_start(self, first=False):
        event = self.event
        super().expect_document_start(first)
        if isinstance(event, events.DocumentStartEvent):
            self.write_pre_comment(event)


    def expect_document_end(self):
        if isinstance(self.event, events.DocumentEndEvent):
            self.write_pre_comment(self.event)
        super().expect_document_end()
        # Documents are always separated by explicit markers
        self.open_ended = False


    def expect_alias(self):
        event = self.event
        super().expect_alias()
        if event.comment and event.comment[0] is not None and not self.flow_level:
            self.write_comment(event.comment[0])


    def expect_block_sequence_item(self, first=False):
        values = self.indents.values
        if len(values) > 1 and not values[-2][1]:
            super().expect_block_sequence_item(first)
            return
        offset, indent = self.sequence_dash_offset, self.best_sequence_indent
        self.sequence_dash_offset, self.best_sequence_indent = 0, 2
        try:
            super().expect_block_sequence_item(first)
        finally:
            self.sequence_dash_offset, self.best_sequence_indent = offset, indent




def write(doc, **kwargs):
    '''
    Write one document raw node as text.  A document without content is
    written as its head comment alone.
    '''
    indent = kwargs.pop('indent', defaults.EMITTER['indent'])
    width = kwargs.pop('width', defaults.EMITTER['width'])
    indent_sequences = kwargs.pop('indent_sequences', defaults.EMITTER['indent_sequences'])
    allow_unicode = kwargs.pop('allow_unicode', defaults.EMITTER['allow_unicode'])
    if kwargs:
        raise TypeError('Unexpected keyword argument(s) {0}'.format(', '.join('"{0}"'.format(k) for k in kwargs)))
    if not doc.content:
        lines = comment_lines(doc.head_comment)
        if not lines:
            return ''
        return '\n'.join(comment_text(line) if line else line for line in lines) + '\n'
    offset = indent if indent_sequences else 0
    builder = _EventBuilder(indent, offset)
    document = builder.document(doc)
    if builder.dropped:
        logger.warning('Dropped comments on %d node(s) that cannot carry them', builder.dropped)
    yaml = YAML(typ='rt', pure=True)
    yaml.Emitter = CommentEmitter
    yaml.width = width
    yaml.allow_unicode = allow_unicode
    yaml.indent(mapping=indent, sequence=offset+2, offset=offset)
    stream = io.StringIO()
    yaml.emit([events.StreamStartEvent()] + document + [events.StreamEndEvent()], stream)
    return stream.getvalue()
