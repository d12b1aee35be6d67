# -*- coding: utf-8 -*-
#
# Copyright (c) 2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#

'''
Blank-line policy used when rendering a tree.

Comment blocks are lists of lines in which an empty string stands for a
blank line.  Blank lines directly before an entry that are not part of a
comment block are counted separately, as `blank_lines_before`.
'''


import enum
from . import defaults




class BlankLinePolicy(enum.Enum):
    KEEP = 'keep'
    NORMALIZE = 'normalize'
    REMOVE = 'remove'




def _split_runs(lines):
    '''
    Split a comment block into (leading blank count, [(comment, blanks
    after)]).
    '''
    leading = 0
    groups = []
    for line in lines:
        if line:
            groups.append([line, 0])
        elif groups:
            groups[-1][1] += 1
        else:
            leading += 1
    return leading, groups


def _join_runs(groups, count, trailing):
    lines = []
    last = len(groups) - 1
    for index, (line, blanks) in enumerate(groups):
        lines.append(line)
        if index < last:
            if blanks:
                lines.extend([''] * count)
        elif trailing:
            lines.extend([''] * count)
    return lines




class BlankLineConfig(object):
    '''
    Blank-line handling for serialization.

    `policy` is a BlankLinePolicy.  `count` is the number of blank lines
    used at section boundaries under NORMALIZE.  `preserve_before_comments`
    makes an entry with a head comment a section boundary under NORMALIZE.
    `preserve_after_comments` puts `count` blank lines after every head
    comment block under NORMALIZE.  `markers` are strings that, when they
    begin a comment block following non-comment content, keep a blank line
    before the block under KEEP.
    '''
    __slots__ = ['policy', 'count', 'preserve_before_comments',
                 'preserve_after_comments', 'markers']

    def __init__(self, **kwargs):
        policy = kwargs.pop('policy', BlankLinePolicy.KEEP)
        if isinstance(policy, str):
            try:
                policy = BlankLinePolicy(policy)
            except ValueError:
                raise ValueError('Invalid blank-line policy "{0}"'.format(policy))
        if not isinstance(policy, BlankLinePolicy):
            raise TypeError('"policy" must be a BlankLinePolicy')
        count = kwargs.pop('count', 1)
        if not isinstance(count, int) or isinstance(count, bool):
            raise TypeError('"count" must be an integer')
        if count < 0:
            raise ValueError('"count" must be non-negative')
        preserve_before_comments = kwargs.pop('preserve_before_comments', True)
        preserve_after_comments = kwargs.pop('preserve_after_comments', False)
        if not all(x in (True, False) for x in (preserve_before_comments, preserve_after_comments)):
            raise TypeError('"preserve_before_comments" and "preserve_after_comments" must be boolean')
        markers = kwargs.pop('markers', defaults.BLANK_LINE_MARKERS)
        if isinstance(markers, str) or not all(isinstance(x, str) and x for x in markers):
            raise TypeError('"markers" must be a sequence of non-empty strings')
        if kwargs:
            raise TypeError('Unexpected keyword argument(s) {0}'.format(', '.join('"{0}"'.format(k) for k in kwargs)))
        self.policy = policy
        self.count = count
        self.preserve_before_comments = preserve_before_comments
        self.preserve_after_comments = preserve_after_comments
        self.markers = tuple(markers)


    def __repr__(self):
        return 'BlankLineConfig(policy={0}, count={1})'.format(self.policy, self.count)


    @classmethod
    def default(cls):
        '''
        Keep blank lines as they were read.
        '''
        return cls()

    @classmethod
    def normalized(cls, count=1):
        return cls(policy=BlankLinePolicy.NORMALIZE, count=count)

    @classmethod
    def none(cls):
        return cls(policy=BlankLinePolicy.REMOVE)


    def _has_marker(self, lines):
        for line in lines:
            if line:
                return any(marker in line for marker in self.markers)
        return False


    def arrange_head(self, blank_lines, head, first_in_collection=False, at_document_start=False):
        '''
        Blank lines and comment lines to write before an entry.  Returns
        (blank line count, comment lines).
        '''
        policy = self.policy
        if policy is BlankLinePolicy.KEEP:
            blank = 0 if at_document_start else blank_lines
            lines = list(head)
            if at_document_start:
                while lines and not lines[0]:
                    lines.pop(0)
            elif blank == 0 and lines and lines[0] and self._has_marker(lines):
                blank = 1
            return (blank, lines)
        leading, groups = _split_runs(head)
        if policy is BlankLinePolicy.REMOVE:
            return (0, [line for line, blanks in groups])
        count = self.count
        if at_document_start or first_in_collection:
            blank = 0
        elif blank_lines or leading or (self.preserve_before_comments and groups):
            blank = count
        else:
            blank = 0
        trailing = bool(groups) and (groups[-1][1] > 0 or self.preserve_after_comments)
        return (blank, _join_runs(groups, count, trailing))


    def arrange_foot(self, foot):
        '''
        Comment lines to write after the last entry of a collection.
        '''
        policy = self.policy
        if policy is BlankLinePolicy.KEEP:
            lines = list(foot)
            if lines and lines[0] and self._has_marker(lines):
                lines.insert(0, '')
            return lines
        leading, groups = _split_runs(foot)
        if policy is BlankLinePolicy.REMOVE or not groups:
            return [line for line, blanks in groups]
        lines = []
        if leading:
            lines.extend([''] * self.count)
        lines.extend(_join_runs(groups, self.count, False))
        return lines


    def arrange_document_head(self, head):
        return self.arrange_head(0, head, at_document_start=True)[1]
