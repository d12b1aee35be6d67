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

import yamltree.transforming as mdl
import yamltree.erring as err
from yamltree.dumping import dumps
from yamltree.loading import parse
from yamltree.nodes import Node, NodeKind

import pytest




APP = '''\
name: app
# Server settings
server:
  host: localhost # local only
  port: 8080
debug: true
'''


def test_builders():
    pipeline = mdl.Pipeline().remove_key('debug').rename_key('host', 'hostname').sort_keys()
    assert(len(pipeline) == 3)
    assert([op.name for op in pipeline.operations] == ['remove_key', 'rename_key', 'sort_keys'])
    assert(pipeline.operations[1].description == "Rename key 'host' to 'hostname'")
    with pytest.raises(TypeError):
        mdl.Pipeline().map('not callable')
    with pytest.raises(TypeError):
        mdl.Pipeline().select(None)
    with pytest.raises(TypeError):
        mdl.Pipeline().set_value([1, 2])
    with pytest.raises(TypeError):
        mdl.Pipeline().add_comment(1)
    with pytest.raises(TypeError):
        mdl.Pipeline().apply(parse(APP)[0])


def test_remove_and_rename():
    tree = parse(APP)
    result = mdl.Pipeline().remove_key('debug').rename_key('host', 'hostname').apply(tree)
    assert(dumps(result) == 'name: app\n# Server settings\nserver:\n  hostname: localhost # local only\n  port: 8080\n')
    # Input is unchanged
    assert(dumps(tree) == APP)


def test_order_sensitive():
    tree = parse('a: 1\n')
    first = mdl.Pipeline().rename_key('a', 'b').remove_key('b').apply(tree)
    assert(first.to_python() == {})
    second = mdl.Pipeline().remove_key('b').rename_key('a', 'b').apply(tree)
    assert(second.to_python() == {'b': 1})


def test_sort_keys():
    tree = parse('b: 1\na:\n  z: 1\n  y: 2\nc: 3\n')
    result = mdl.Pipeline().sort_keys().apply(tree)
    assert(dumps(result) == 'a:\n  y: 2\n  z: 1\nb: 1\nc: 3\n')


def test_flatten():
    tree = parse('server:\n  # Host\n  host: localhost\n  tls:\n    enabled: true\nname: app\n')
    result = mdl.Pipeline().flatten().apply(tree)
    content = result[0].content
    assert([k.text for k in content.keys()] == ['server.host', 'server.tls.enabled', 'name'])
    assert(content.get_key('server.host').head_comment == ['# Host'])
    assert(result.to_python() == {'server.host': 'localhost', 'server.tls.enabled': True, 'name': 'app'})
    assert(mdl.Pipeline().flatten().apply(parse('- a: {b: 1}\n')).to_python() == [{'a.b': 1}])


def test_set_value_and_comment():
    tree = parse('a: 1\nb:\n  - x\n')
    result = mdl.Pipeline().set_value('v').apply(tree)
    assert(result.to_python() == {'a': 'v', 'b': ['v']})
    tree = parse('a: 1e3\n')
    result = mdl.Pipeline().set_value(5).apply(tree)
    assert(dumps(result) == 'a: 5\n')
    result = mdl.Pipeline().add_comment('# checked').apply(parse('a: 1\n'))
    content = result[0].content
    assert(content.head_comment == ['# checked'])
    assert(content.get_value('a').head_comment == ['# checked'])
    assert(content.get_key('a').head_comment == [])


def test_map():
    def double(node):
        if node.kind is NodeKind.SCALAR and isinstance(node.value, int):
            return Node.scalar(node.value * 2)
        return node
    def drop_secrets(node):
        if node.key is not None and node.key.text == 'secret':
            return None
        return node
    tree = parse('a: 1\nb: [2, 3]\nsecret: x\n')
    result = mdl.Pipeline().map(double).map(drop_secrets).apply(tree)
    assert(result.to_python() == {'a': 2, 'b': [4, 6]})
    for key, value in result[0].content.pairs():
        assert(value.key is key)


def test_select():
    tree = parse('name: x\nport: 80\ndb:\n  host: h\n  port: 5432\n')
    def is_int(node):
        return node.kind is NodeKind.SCALAR and isinstance(node.value, int)
    result = mdl.Pipeline().select(is_int).remove_key('port').apply(tree)
    assert(result.to_python() == {'port': 80, 'db': {'port': 5432}})
    result = mdl.Pipeline().select(lambda node: False).apply(tree)
    assert(result[0].root is None)
    assert(len(result) == 1)


def test_transform_error():
    tree = parse(APP)
    def fail(node):
        if node.kind is NodeKind.SCALAR and node.value == 8080:
            raise RuntimeError('boom')
        return node
    with pytest.raises(err.TransformError) as excinfo:
        mdl.Pipeline().remove_key('debug').map(fail).apply(tree)
    assert(excinfo.value.operation == 'map')
    assert(isinstance(excinfo.value.cause, RuntimeError))
    assert(dumps(tree) == APP)
    with pytest.raises(err.TransformError):
        mdl.Pipeline().map(lambda node: 'text').apply(tree)


def test_apply_keeps_documents():
    tree = parse('%YAML 1.2\n---\na: &x 1\nb: *x\n---\nc: 2\n')
    result = mdl.Pipeline().sort_keys().apply(tree)
    assert(len(result) == 2)
    assert(result[0].directives == tree[0].directives)
    assert(result[0].content.get_value('b').alias is result[0].get_anchor('x'))
    assert(result[0].get_anchor('x') is result[0].content.get_value('a'))


def test_map_visits_keys_and_root():
    seen = []
    def record(node):
        seen.append(node.kind if node.kind is NodeKind.DOCUMENT else node.text)
        return node
    mdl.Pipeline().map(record).apply(parse('a: 1\nb: [x]\n'))
    assert(seen == [NodeKind.DOCUMENT, 'a', '1', 'b', '', 'x'])
    def upper_keys(node):
        if node.parent is not None and node.parent.kind is NodeKind.MAPPING and node.key is None:
            return Node.scalar(node.text.upper())
        return node
    result = mdl.Pipeline().map(upper_keys).apply(parse('a: 1\nb:\n  c: 2\n'))
    assert(result.to_python() == {'A': 1, 'B': {'C': 2}})
    assert(result[0].content.get_value('B').key.text == 'B')
    def drop_key(node):
        if node.key is None and node.text == 'b':
            return None
        return node
    result = mdl.Pipeline().map(drop_key).apply(parse('a: 1\nb: 2\nc: b\n'))
    assert(result.to_python() == {'a': 1, 'c': 'b'})
    result = mdl.Pipeline().map(lambda node: None if node.kind is NodeKind.DOCUMENT else node).apply(parse('a: 1\n'))
    assert(len(result) == 1 and result[0].root is None)
