# -*- coding: utf-8 -*-
#
# Copyright (c) 2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#

'''
Read YAML text into generic `RawNode` graphs.

ruamel.yaml's round-trip parser supplies the event stream and source
marks.  Its scanner is extended to record where each comment starts, and
comments and blank lines are then attached to the raw nodes by position:

  * A comment following content on a line is the line comment of the node
    that ends furthest right on that line.  The comment on a block
    scalar's header line comes with the scalar's event.

  * Comment lines and blank lines between two entries (mapping pairs or
    sequence items) form a gap.  A comment line in a gap is a foot comment
    of the innermost collection that the gap closes and whose indentation
    does not exceed the comment's column.  Otherwise it is a head comment
    of the entry that follows.
'''


import logging
import re
from ruamel.yaml import YAML
from ruamel.yaml import events
from ruamel.yaml.error import YAMLError
from ruamel.yaml.scanner import RoundTripScanner
from . import defaults
from . import erring


logger = logging.getLogger(__name__)


_line_break_re = re.compile('\r\n|[\r\n\x85\u2028\u2029]')




class RawNode(object):
    '''
    Generic parse node:  kind, source text, tag, anchor, style, comment
    text, and ordered content.  Comment text joins lines with `\\n`; an
    empty line is a blank line within the comment block.
    '''
    __slots__ = ['kind', 'value', 'tag', 'anchor', 'style', 'content',
                 'head_comment', 'line_comment', 'foot_comment',
                 'blank_lines_before', 'directives', 'line', 'column',
                 'start_mark', 'end_mark']

    def __init__(self, kind, value='', tag=None, anchor=None, style='', content=None):
        self.kind = kind
        self.value = value
        self.tag = tag
        self.anchor = anchor
        self.style = style
        self.content = [] if content is None else content
        self.head_comment = ''
        self.line_comment = ''
        self.foot_comment = ''
        self.blank_lines_before = 0
        self.directives = []
        self.line = 0
        self.column = 0
        self.start_mark = None
        self.end_mark = None

    def __repr__(self):
        return '<RawNode {0} {1!r}>'.format(self.kind, self.value)

    @property
    def is_block_collection(self):
        return self.kind in ('mapping', 'sequence') and self.style != defaults.FLOW_STYLE




def short_tag(tag):
    '''
    Abbreviate tags in the YAML namespace as `!!name`.
    '''
    if tag is not None and tag.startswith(defaults.YAML_TAG_PREFIX):
        return defaults.SHORT_TAG_PREFIX + tag[len(defaults.YAML_TAG_PREFIX):]
    return tag


def split_lines(text):
    '''
    Split text into lines the same way the reader counts lines.  Returns
    (lines, offsets), where offsets are the starting index of each line.
    '''
    lines = []
    offsets = []
    start = 0
    for match in _line_break_re.finditer(text):
        lines.append(text[start:match.start()])
        offsets.append(start)
        start = match.end()
    lines.append(text[start:])
    offsets.append(start)
    return (lines, offsets)


def only_directives(lines):
    directive = False
    for line in lines:
        stripped = line.strip()
        if stripped.startswith('%'):
            directive = True
        elif stripped and not stripped.startswith('#'):
            return False
    return directive


def split_documents(text):
    '''
    Split text into document regions at lines that are exactly `---` or
    `...` after trimming.  A region holding only directives continues
    through its `---`.  Regions that are empty or whitespace-only are
    dropped.  Returns a list of (first line number, region text).
    '''
    lines, offsets = split_lines(text)
    regions = []
    start = 0
    current = []

    def close(end):
        if any(line.strip() for line in current):
            regions.append((start, text[offsets[start]:end]))

    for index, line in enumerate(lines):
        stripped = line.strip()
        if stripped in (defaults.DOCUMENT_SEPARATOR, defaults.DOCUMENT_END):
            if stripped == defaults.DOCUMENT_SEPARATOR and only_directives(current):
                current.append(line)
                continue
            close(offsets[index])
            start = index + 1
            current = []
        else:
            current.append(line)
    if current:
        close(len(text))
    return regions




def _header_comment(comment):
    '''
    The comment on a block scalar's header line, which the round-trip
    scanner keeps as a string among the scalar's leading comments.
    '''
    if comment and comment[1]:
        for item in comment[1]:
            if isinstance(item, str) and item.strip():
                return item.strip()
    return ''


def _build_node(event, stream):
    if isinstance(event, events.AliasEvent):
        node = RawNode('alias', event.anchor)
        node.end_mark = event.end_mark
    elif isinstance(event, events.ScalarEvent):
        value = event.value
        if event.style == '>':
            # Fold points are marked with `\a` in round-trip mode
            value = value.replace('\a', '')
        node = RawNode('scalar', value, short_tag(event.tag), event.anchor, event.style or '')
        if event.style in ('|', '>'):
            node.line_comment = _header_comment(event.comment)
        node.end_mark = event.end_mark
    elif isinstance(event, (events.SequenceStartEvent, events.MappingStartEvent)):
        if isinstance(event, events.SequenceStartEvent):
            kind, end_type = 'sequence', events.SequenceEndEvent
        else:
            kind, end_type = 'mapping', events.MappingEndEvent
        style = defaults.FLOW_STYLE if event.flow_style else ''
        node = RawNode(kind, '', short_tag(event.tag), event.anchor, style)
        child_event = next(stream)
        while not isinstance(child_event, end_type):
            node.content.append(_build_node(child_event, stream))
            child_event = next(stream)
        node.end_mark = child_event.end_mark
    else:
        raise erring.Bug('Unexpected event {0!r}'.format(event))
    node.start_mark = event.start_mark
    return node


def build_documents(stream):
    '''
    Assemble a list of document raw nodes from a ruamel.yaml event stream.
    '''
    docs = []
    stream = iter(stream)
    for event in stream:
        if not isinstance(event, events.DocumentStartEvent):
            continue
        doc = RawNode('document')
        doc.start_mark = event.start_mark
        if event.version is not None:
            doc.directives.append(('YAML', '{0}.{1}'.format(*event.version)))
        if event.tags:
            for handle, prefix in event.tags.items():
                doc.directives.append(('TAG', '{0} {1}'.format(handle, prefix)))
        doc.content.append(_build_node(next(stream), stream))
        doc.end_mark = next(stream).end_mark
        docs.append(doc)
    return docs




class _CommentScanner(RoundTripScanner):
    '''
    Round-trip scanner that records the line, column and text of each
    comment it passes over.
    '''
    def __init__(self, loader=None):
        super().__init__(loader)
        self.comment_positions = {}


    def scan_to_next_token(self):
        found = super().scan_to_next_token()
        if found is not None:
            value, start_mark, end_mark = found
            # Chunks of blank lines start with a line break
            if value.startswith('#'):
                text = _line_break_re.split(value, 1)[0].rstrip()
                self.comment_positions[start_mark.line] = (start_mark.column, text)
        return found




class _Entry(object):
    '''
    Start of a mapping pair or sequence item, or a non-collection root.
    '''
    __slots__ = ['line', 'receiver', 'chain']

    def __init__(self, line, receiver, chain):
        self.line = line
        self.receiver = receiver
        self.chain = chain


class _CommentAttacher(object):
    '''
    Attach comments and blank lines in lines `first` through `last - 1`
    to the nodes of one document.  `comments` maps a line number to the
    (column, text) of the comment the scanner found on that line.
    '''
    def __init__(self, doc, lines, comments, first, last):
        self.doc = doc
        self.lines = lines
        self.comments = comments
        self.first = first
        self.last = last
        self.interior = set()
        self.blocked = set()
        self.ends = {}
        self.depth = {}
        self.indent = {}
        self.entries = []
        self.heads = {}
        self.feet = {}
        self.doc_head = []
        self.doc_foot = []


    def attach(self):
        doc = self.doc
        if doc.content:
            root = doc.content[0]
            self._scan(root, 0, False)
            if root.is_block_collection:
                self._collect_entries(root, [])
            else:
                self.entries.append(_Entry(root.start_mark.line, root, []))
        self._assign()
        self._store()


    def _scan(self, node, depth, in_flow):
        '''
        Record line extents of nodes, the lines inside multi-line scalars
        and flow collections, and the nodes that can take line comments.
        '''
        self.depth[id(node)] = depth
        start = node.start_mark
        end = node.end_mark
        if node.kind == 'scalar' and node.style in ('|', '>'):
            last = end.line
            if not self.lines[end.line][:end.column].strip():
                last -= 1
            # Trailing blank lines belong to the scalar only when kept
            if not node.value.endswith('\n\n'):
                while last > start.line and not self.lines[last].strip():
                    last -= 1
            self.interior.update(range(start.line+1, last+1))
            self.blocked.add(start.line)
            return
        multiline = end.line > start.line
        if node.kind in ('scalar', 'alias') or node.style == defaults.FLOW_STYLE:
            if multiline:
                self.interior.update(range(start.line+1, end.line))
                self.blocked.add(start.line)
            if not in_flow:
                self.ends.setdefault(end.line, []).append(node)
            in_flow = True
        for child in node.content:
            self._scan(child, depth+1, in_flow)


    def _collect_entries(self, node, chain):
        chain = chain + [node]
        if node.kind == 'mapping':
            content = node.content
            for index in range(0, len(content)-1, 2):
                key, value = content[index], content[index+1]
                self.entries.append(_Entry(key.start_mark.line, key, chain))
                if value.is_block_collection:
                    self._collect_entries(value, chain)
            self.indent[id(node)] = content[0].start_mark.column
        else:
            for item in node.content:
                self.entries.append(_Entry(item.start_mark.line, item, chain))
                if item.is_block_collection:
                    self._collect_entries(item, chain)
            first = node.content[0].start_mark
            line = self.lines[first.line]
            dash = line.rfind('-', 0, first.column)
            if dash >= 0 and not line[dash+1:first.column].strip():
                self.indent[id(node)] = dash
            else:
                self.indent[id(node)] = node.start_mark.column


    def _line_comment(self, index):
        '''
        Find a comment following content on a line.  Returns (node,
        column, text); node is None when no node on the line can hold it.
        '''
        if index in self.blocked or index not in self.comments:
            return None
        column, text = self.comments[index]
        candidates = self.ends.get(index, [])
        if not candidates:
            return (None, column, text)
        best = None
        for node in candidates:
            if (best is None or node.end_mark.column > best.end_mark.column or
                    (node.end_mark.column == best.end_mark.column and
                     self.depth[id(node)] < self.depth[id(best)])):
                best = node
        return (best, column, text)


    def _assign(self):
        lines = self.lines
        entries = self.entries
        pending = []
        next_entry = 0
        previous = None
        for index in range(self.first, self.last):
            if index in self.interior:
                continue
            stripped = lines[index].strip()
            if not stripped:
                pending.append(('blank', 0, ''))
                continue
            column = len(lines[index]) - len(lines[index].lstrip())
            if index in self.comments and self.comments[index][0] == column:
                pending.append(('comment', column, self.comments[index][1]))
                continue
            if next_entry < len(entries) and entries[next_entry].line <= index:
                entry = entries[next_entry]
                if previous is None:
                    self._assign_first_gap(pending, entry)
                else:
                    closing = [c for c in reversed(previous.chain)
                               if not any(c is x for x in entry.chain)]
                    self._assign_gap(pending, closing, entry.receiver)
                pending = []
                while next_entry < len(entries) and entries[next_entry].line <= index:
                    previous = entries[next_entry]
                    next_entry += 1
            found = self._line_comment(index)
            if found is not None:
                node, column, text = found
                if node is None:
                    pending.append(('comment', column, text))
                else:
                    node.line_comment = text
        if previous is None:
            self.doc_head = self._comment_block(pending)
        else:
            self._assign_gap(pending, list(reversed(previous.chain)), None)
            while self.doc_foot and not self.doc_foot[-1]:
                self.doc_foot.pop()
            for foot in self.feet.values():
                while foot and not foot[-1]:
                    foot.pop()


    def _comment_block(self, pending):
        block = [text for kind, column, text in pending]
        while block and not block[0]:
            block.pop(0)
        while block and not block[-1]:
            block.pop()
        return block


    def _assign_first_gap(self, pending, entry):
        split = None
        seen_comment = False
        for index, (kind, column, text) in enumerate(pending):
            if kind == 'comment':
                seen_comment = True
            elif seen_comment:
                split = index
        if split is not None:
            block = [text for kind, column, text in pending[:split+1]]
            while block and not block[0]:
                block.pop(0)
            self.doc_head = block
            pending = pending[split+1:]
        while pending and pending[0][0] == 'blank':
            pending.pop(0)
        self._assign_gap(pending, [], entry.receiver)


    def _assign_gap(self, pending, closing, receiver):
        '''
        Distribute one gap.  `closing` lists the collections the gap
        closes, innermost first.  A `receiver` of None means the end of the
        document.
        '''
        if not pending:
            return
        level = 0
        target = None
        blanks = 0
        for kind, column, text in pending:
            if kind == 'blank':
                blanks += 1
                continue
            while level < len(closing) and column < self.indent[id(closing[level])]:
                level += 1
            if level < len(closing):
                new_target = self.feet.setdefault(id(closing[level]), [])
            elif receiver is None:
                new_target = self.doc_foot
            else:
                new_target = self.heads.setdefault(id(receiver), [])
                if target is not new_target and not new_target:
                    receiver.blank_lines_before = blanks
                    blanks = 0
            new_target.extend([''] * blanks)
            new_target.append(text)
            target = new_target
            blanks = 0
        if blanks and receiver is not None:
            head = self.heads.get(id(receiver))
            if head and target is head:
                head.extend([''] * blanks)
            else:
                receiver.blank_lines_before = blanks


    def _store(self):
        doc = self.doc
        doc.head_comment = '\n'.join(self.doc_head)
        doc.foot_comment = '\n'.join(self.doc_foot)
        if not doc.content:
            return
        stack = [doc.content[0]]
        while stack:
            node = stack.pop()
            if id(node) in self.heads:
                node.head_comment = '\n'.join(self.heads[id(node)])
            if id(node) in self.feet:
                node.foot_comment = '\n'.join(self.feet[id(node)])
            stack.extend(node.content)




def _set_positions(node, line_offset):
    node.line = node.start_mark.line + line_offset + 1
    node.column = node.start_mark.column + 1
    for child in node.content:
        _set_positions(child, line_offset)


def read_region(region, line_offset=0):
    '''
    Read one document region into a list of document raw nodes.  A region
    without any document content gives one document holding the region's
    comments as its head comment.
    '''
    yaml = YAML(typ='rt', pure=True)
    yaml.Scanner = _CommentScanner
    docs = build_documents(yaml.parse(region))
    comments = yaml.scanner.comment_positions
    lines = split_lines(region)[0]
    if not docs:
        doc = RawNode('document')
        _CommentAttacher(doc, lines, comments, 0, len(lines)).attach()
        return [doc]
    for index, doc in enumerate(docs):
        first = 0 if index == 0 else doc.start_mark.line
        last = docs[index+1].start_mark.line if index+1 < len(docs) else len(lines)
        _CommentAttacher(doc, lines, comments, first, last).attach()
        doc.line = line_offset + doc.start_mark.line + 1
        _set_positions(doc.content[0], line_offset)
    return docs


def read(text):
    '''
    Read text into a list of document raw nodes.  Errors from the reader
    are raised as ParseError carrying the index of the failing document.
    '''
    docs = []
    for line_offset, region in split_documents(text):
        try:
            docs.extend(read_region(region, line_offset))
        except YAMLError as e:
            raise erring.ParseError(len(docs), e)
    logger.debug('Read %d document(s)', len(docs))
    return docs
