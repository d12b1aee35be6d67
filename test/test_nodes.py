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
import math

if all(os.path.isdir(x) for x in ('yamltree', 'test')):
    sys.path.insert(0, '.')

import yamltree.nodes as mdl
import yamltree.erring as err

import pytest




def build_config():
    root = mdl.Node.mapping()
    server = root.add_key_value('server', mdl.Node.mapping())
    server.add_key_value('host', 'localhost')
    server.add_key_value('port', 8080)
    ports = root.add_key_value('ports', mdl.Node.sequence())
    ports.add_item(80)
    ports.add_item(443)
    root.add_key_value('debug', False)
    return root




def test_format_value():
    assert(mdl.format_value(None) == 'null')
    assert(mdl.format_value(True) == 'true')
    assert(mdl.format_value(False) == 'false')
    assert(mdl.format_value(42) == '42')
    assert(mdl.format_value(1.5) == '1.5')
    assert(mdl.format_value(float('inf')) == '.inf')
    assert(mdl.format_value(float('-inf')) == '-.inf')
    assert(mdl.format_value(float('nan')) == '.nan')
    assert(mdl.format_value('text') == 'text')


def test_decode_plain():
    assert(mdl.decode_plain('true') is True)
    assert(mdl.decode_plain('False') is False)
    assert(mdl.decode_plain('~') is None)
    assert(mdl.decode_plain('') is None)
    assert(mdl.decode_plain('null') is None)
    assert(mdl.decode_plain('-17') == -17)
    big = mdl.decode_plain('12345678901234567890')
    assert(isinstance(big, int) and big == 12345678901234567890)
    assert(mdl.decode_plain('1e3') == 1000.0)
    assert(isinstance(mdl.decode_plain('1e3'), float))
    assert(mdl.decode_plain('.5') == 0.5)
    assert(mdl.decode_plain('-.inf') == float('-inf'))
    assert(math.isnan(mdl.decode_plain('.nan')))
    assert(mdl.decode_plain('1.2.3') == '1.2.3')
    assert(mdl.decode_plain('yes') == 'yes')


def test_decode_tagged():
    assert(mdl.decode_tagged('42', '!!str') == '42')
    assert(mdl.decode_tagged('42', '!!int') == 42)
    assert(mdl.decode_tagged('42', '!!float') == 42.0)
    assert(isinstance(mdl.decode_tagged('42', '!!float'), float))
    assert(mdl.decode_tagged('TRUE', '!!bool') is True)
    assert(mdl.decode_tagged('anything', '!!null') is None)
    assert(mdl.decode_tagged('abc', '!!int') == 'abc')
    assert(mdl.decode_tagged('abc', '!custom') == 'abc')


def test_same_value():
    assert(mdl.same_value(1, 1))
    assert(not mdl.same_value(1, 1.0))
    assert(not mdl.same_value(1, True))
    assert(mdl.same_value(float('nan'), float('nan')))
    assert(mdl.same_value(None, None))


def test_scalar_type():
    assert(mdl.Node.scalar('a').scalar_type is mdl.ScalarType.STRING)
    assert(mdl.Node.scalar(1).scalar_type is mdl.ScalarType.INTEGER)
    assert(mdl.Node.scalar(1.0).scalar_type is mdl.ScalarType.FLOAT)
    assert(mdl.Node.scalar(True).scalar_type is mdl.ScalarType.BOOLEAN)
    assert(mdl.Node.scalar(None).scalar_type is mdl.ScalarType.NULL)
    assert(mdl.Node.null().scalar_type is mdl.ScalarType.NULL)


def test_constructors():
    with pytest.raises(TypeError):
        mdl.Node('mapping')
    with pytest.raises(TypeError):
        mdl.Node(mdl.NodeKind.SCALAR, 1, style='plain')
    with pytest.raises(TypeError):
        mdl.Node.scalar([1, 2])
    node = mdl.Node.scalar('x', mdl.NodeStyle.DOUBLE_QUOTED)
    assert(node.style is mdl.NodeStyle.DOUBLE_QUOTED)
    assert(node.text == 'x')
    assert(mdl.Node.null().is_null)
    assert(mdl.Node.scalar(None).is_null)
    assert(not mdl.Node.scalar(0).is_null)




def test_mapping_invariants():
    root = build_config()
    assert(len(root.children) % 2 == 0)
    for child in root.children:
        assert(child.parent is root)
        assert(sum(1 for c in root.children if c is child) == 1)
    for key, value in root.pairs():
        assert(value.key is key)
    assert([k.text for k in root.keys()] == ['server', 'ports', 'debug'])
    assert(root.get_value('server').get_value('port').value == 8080)
    assert(root.get_key('debug').text == 'debug')
    assert(root.get_value('missing') is None)
    assert([n.value for n in root.get_value('ports').items()] == [80, 443])
    assert(root.items() == [])


def test_add_errors():
    seq = mdl.Node.sequence()
    with pytest.raises(err.NodeError):
        seq.add_key_value('a', 1)
    mapping = mdl.Node.mapping()
    with pytest.raises(err.NodeError):
        mapping.add_item(1)
    with pytest.raises(ValueError):
        mapping.add_item(1)


def test_remove():
    root = build_config()
    ports = root.get_value('ports')
    ports.children[0].remove()
    assert([n.value for n in ports.children] == [443])
    root.get_key('server').remove()
    assert([k.text for k in root.keys()] == ['ports', 'debug'])
    root.get_value('debug').remove()
    assert([k.text for k in root.keys()] == ['ports'])
    assert(len(root.children) == 2)
    with pytest.raises(err.NodeError):
        root.remove()


def test_replace_with():
    root = build_config()
    old = root.get_value('debug')
    new = mdl.Node.scalar(True)
    old.replace_with(new)
    assert(root.get_value('debug') is new)
    assert(new.parent is root)
    assert(new.key is root.get_key('debug'))
    assert(old.parent is None)
    with pytest.raises(err.NodeError):
        root.replace_with(mdl.Node.mapping())


def test_path():
    root = build_config()
    assert(root.path() == '$')
    assert(root.get_value('server').get_value('host').path() == '$.server.host')
    assert(root.get_value('ports').children[1].path() == '$.ports[1]')
    document = mdl.Node.document()
    document.add_child(root)
    assert(root.get_value('debug').path() == '$.debug')




def test_walk():
    root = build_config()
    seen = []
    def visitor(node):
        seen.append(node)
    assert(root.walk(visitor))
    assert(seen == list(root.iter_nodes()))
    assert(len(seen) == 1 + 2 + 4 + 2 + 2 + 2)

    seen = []
    def skip_server(node):
        seen.append(node)
        if node.kind is mdl.NodeKind.MAPPING and node is not root:
            return mdl.WalkSignal.SKIP_CHILDREN
        return mdl.WalkSignal.CONTINUE
    assert(root.walk(skip_server))
    assert(not any(n.text == 'localhost' for n in seen))
    assert(any(n.value == 443 for n in seen))

    seen = []
    def stop_at_ports(node):
        seen.append(node)
        if node.text == 'ports':
            return mdl.WalkSignal.STOP
    assert(not root.walk(stop_at_ports))
    assert(seen[-1].text == 'ports')

    with pytest.raises(TypeError):
        root.walk(lambda node: True)


def test_find():
    root = build_config()
    assert(root.find(lambda n: n.value == 443).path() == '$.ports[1]')
    assert(root.find(lambda n: n.value == 'nowhere') is None)
    ints = root.find_all(lambda n: n.scalar_type is mdl.ScalarType.INTEGER and n.kind is mdl.NodeKind.SCALAR)
    assert([n.value for n in ints] == [8080, 80, 443])


def test_str():
    root = build_config()
    root.get_key('debug').head_comment = ['# flags']
    text = str(root)
    assert(text.splitlines()[0] == 'mapping')
    assert('  # flags' in text.splitlines())
    assert("  scalar 'localhost'" not in text.splitlines())
    assert("    scalar 'localhost'" in text.splitlines())




def test_clone():
    root = build_config()
    root.get_key('server').head_comment = ['# server']
    root.get_value('debug').line_comment = '# off'
    copy = root.clone()
    assert(copy is not root)
    assert(copy.to_python() == root.to_python())
    assert(copy.get_key('server').head_comment == ['# server'])
    assert(copy.get_value('debug').line_comment == '# off')
    copy.get_key('server').head_comment.append('# more')
    copy.get_value('server').get_value('port').value = 9090
    assert(root.get_key('server').head_comment == ['# server'])
    assert(root.get_value('server').get_value('port').value == 8080)
    for key, value in copy.pairs():
        assert(value.key is key and value.parent is copy)


def test_clone_aliases():
    root = mdl.Node.mapping()
    target = root.add_key_value('base', mdl.Node.mapping())
    target.anchor = 'b'
    target.add_key_value('x', 1)
    alias = root.add_key_value('other', mdl.Node.alias_to(target))
    assert(alias.resolve() is target)
    copy = root.clone()
    assert(copy.get_value('other').alias is copy.get_value('base'))
    # Cloning only the alias keeps the original target
    assert(alias.clone().alias is target)
    with pytest.raises(err.NodeError):
        mdl.Node.alias_to(mdl.Node.mapping())


def test_to_python():
    root = build_config()
    assert(root.to_python() == {'server': {'host': 'localhost', 'port': 8080},
                                'ports': [80, 443], 'debug': False})
    root = mdl.Node.mapping()
    key = mdl.Node.sequence(mdl.NodeStyle.FLOW)
    key.add_item(1)
    key.add_item(2)
    root.add_key_value(key, 'pair')
    assert(root.to_python() == {(1, 2): 'pair'})


def test_to_python_alias_cycle():
    root = mdl.Node.mapping()
    inner = root.add_key_value('a', mdl.Node.mapping())
    inner.anchor = 'x'
    inner.add_key_value('self', mdl.Node.alias_to(inner))
    with pytest.raises(err.AliasCycleError):
        root.to_python()
    assert(root.clone().get_value('a').get_value('self').alias is not inner)


def test_resolve_unresolved():
    alias = mdl.Node(mdl.NodeKind.ALIAS, 'missing')
    with pytest.raises(err.NodeError):
        alias.resolve()
    with pytest.raises(err.NodeError):
        alias.to_python()




def test_document():
    document = mdl.Document()
    assert(document.content is None)
    root = mdl.Node.document()
    content = root.add_child(mdl.Node.mapping())
    document.set_root(root)
    assert(document.content is content)
    node = content.add_key_value('a', 1)
    document.register_anchor('first', node)
    assert(document.get_anchor('first') is node)
    assert(node.anchor == 'first')
    with pytest.raises(err.NodeError):
        document.register_anchor('', node)
    directive = document.add_directive('YAML', '1.2')
    assert(directive.name == 'YAML' and directive.value == '1.2')

    copy = document.clone()
    assert(copy.get_anchor('first') is copy.content.get_value('a'))
    assert(copy.directives == document.directives)


def test_rebuild_anchors():
    root = mdl.Node.mapping()
    first = root.add_key_value('a', 1)
    first.anchor = 'n'
    alias = root.add_key_value('b', mdl.Node(mdl.NodeKind.ALIAS, 'n'))
    document = mdl.Document(root)
    document.rebuild_anchors()
    assert(document.get_anchor('n') is first)
    assert(alias.alias is first)


def test_tree():
    tree = mdl.Tree()
    assert(len(tree) == 0)
    assert(tree.current is None)
    assert(tree.to_python() is None)
    first = tree.add_document()
    assert(tree.current is first)
    first.set_root(build_config())
    other = mdl.Tree()
    other.add_document(mdl.Document(mdl.Node.scalar('second')))
    tree.extend(other)
    assert(len(tree) == 2)
    assert(tree[1] is not other[0])
    assert(tree[1].root.value == 'second')
    assert(tree.to_python()['debug'] is False)
    copy = tree.clone()
    assert(copy.current is copy[1])
    assert([d.root.to_python() for d in copy] == [d.root.to_python() for d in tree])
