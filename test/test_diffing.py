# -*- coding: utf-8 -*-
#
# Copyright (c) 2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


import sys
import os

if all(os.path.isdir(x) for x in ('yamltree', 'test')):
    sys.path.insert(0, '.')

import yamltree.diffing as mdl
from yamltree.loading import parse
from yamltree.merging import merge
from yamltree.nodes import Node, NodeKind, NodeStyle

import pytest




CONFIG = '''\
# Config file

# Database settings
database:
  host: localhost # primary
  port: 5432

  # Pool options
  pool: 10
list:
  - a
  - b
'''


def summary(diffs):
    return [(d.kind, d.path) for d in diffs]


def test_identity():
    assert(mdl.diff(parse(CONFIG), parse(CONFIG)) == [])
    tree = parse(CONFIG)
    assert(mdl.diff(tree, tree.clone()) == [])
    assert(mdl.diff(None, None) == [])


def test_merge_duality():
    base = parse('a: 1\nb: 2\n')
    merged = merge(base, parse('b: 3\nc: 4\n'))
    diffs = mdl.diff(base, merged)
    assert(summary(diffs) == [(mdl.DiffKind.MODIFIED, '.b'), (mdl.DiffKind.ADDED, '.c')])
    assert(diffs[0].old_value == 2 and diffs[0].new_value == 3)
    assert(diffs[1].new_value == 4)
    assert(diffs[0].location == '$[document:0].b')
    assert(str(diffs[0]) == "Modified $[document:0].b: Value changed at .b from '2' to '3'")


def test_key_order():
    diffs = mdl.diff(parse('a: 1\nb: 2\nc: 3\n'), parse('c: 3\nd: 4\n'))
    assert(summary(diffs) == [(mdl.DiffKind.REMOVED, '.a'), (mdl.DiffKind.REMOVED, '.b'),
                              (mdl.DiffKind.ADDED, '.d')])
    assert(diffs[0].old_value == 1)
    # Moving a key is not a difference
    assert(mdl.diff(parse('a: 1\nb: 2\n'), parse('b: 2\na: 1\n')) == [])


def test_comment_changes():
    diffs = mdl.diff(parse('a: 1 # one\n'), parse('a: 1 # uno\n'))
    assert(summary(diffs) == [(mdl.DiffKind.COMMENT_CHANGED, '.a')])
    assert(diffs[0].old_comment == '# one' and diffs[0].new_comment == '# uno')
    diffs = mdl.diff(parse('# head\na: 1\n'), parse('a: 1\n'))
    assert(summary(diffs) == [(mdl.DiffKind.COMMENT_CHANGED, '.a')])
    assert(diffs[0].old_comment == ['# head'] and diffs[0].new_comment == [])


def test_style_and_tag_changes():
    diffs = mdl.diff(parse('a: x\n'), parse("a: 'x'\n"))
    assert(summary(diffs) == [(mdl.DiffKind.STYLE_CHANGED, '.a')])
    assert(diffs[0].old_value is NodeStyle.DEFAULT)
    assert(diffs[0].new_value is NodeStyle.SINGLE_QUOTED)
    diffs = mdl.diff(parse('a: 42\n'), parse('a: !!str 42\n'))
    assert(summary(diffs) == [(mdl.DiffKind.MODIFIED, '.a')])
    assert(diffs[0].old_value is None and diffs[0].new_value == '!!str')


def test_kind_changes():
    diffs = mdl.diff(parse('a: 1\n'), parse('a:\n  b: 1\n'))
    assert(summary(diffs) == [(mdl.DiffKind.MODIFIED, '.a')])
    assert(diffs[0].old_value is NodeKind.SCALAR and diffs[0].new_value is NodeKind.MAPPING)
    # Null nodes compare with scalars by value
    assert(summary(mdl.diff_nodes(Node.null(), Node.scalar(1))) == [(mdl.DiffKind.MODIFIED, '')])
    assert(mdl.diff_nodes(Node.null(), Node.scalar(None)) == [])


def test_sequences():
    diffs = mdl.diff(parse('l: [1, 2, 3]\n'), parse('l: [1, 5]\n'))
    assert(summary(diffs) == [(mdl.DiffKind.MODIFIED, '.l[1]'), (mdl.DiffKind.REMOVED, '.l[2]')])
    diffs = mdl.diff(parse('l:\n  - a\n'), parse('l:\n  - a\n  - b: 1\n'))
    assert(summary(diffs) == [(mdl.DiffKind.ADDED, '.l[1]')])
    assert(diffs[0].new_node.kind is NodeKind.MAPPING)


def test_documents():
    diffs = mdl.diff(parse('a: 1\n'), parse('a: 1\n---\nb: 2\n'))
    assert(summary(diffs) == [(mdl.DiffKind.ADDED, '')])
    assert(diffs[0].document == 1 and diffs[0].location == '$[document:1]')
    diffs = mdl.diff(parse('a: 1\n---\nb: 2\n'), parse('a: 1\n'))
    assert(summary(diffs) == [(mdl.DiffKind.REMOVED, '')])
    diffs = mdl.diff(parse('a: 1\n---\nb: 2\n'), parse('a: 1\n---\nb: 3\n'))
    assert(diffs[0].location == '$[document:1].b')
    diffs = mdl.diff(parse(''), parse('a: 1\n'))
    assert(summary(diffs) == [(mdl.DiffKind.ADDED, '')])
    assert(mdl.diff(parse('a: 1\n'), None)[0].kind is mdl.DiffKind.REMOVED)


def test_diff_entry():
    entry = mdl.DiffEntry(mdl.DiffKind.ADDED, '.a', new_value=1)
    assert(entry.old_value is None and entry.new_value == 1)
    assert(entry.document == 0)
    assert(str(mdl.DiffKind.COMMENT_CHANGED) == 'CommentChanged')
    with pytest.raises(TypeError):
        mdl.DiffEntry('Added', '.a')
    with pytest.raises(TypeError):
        mdl.DiffEntry(mdl.DiffKind.ADDED, '.a', value=1)
