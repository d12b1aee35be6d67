# -*- coding: utf-8 -*-
#
# Copyright (c) 2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#

'''
Document tree nodes.

A `Node` owns its `children`.  `parent`, `key` and `alias` are references
only:  `parent` is the immediate container, `key` is the key node when the
node is the value half of a mapping pair, and `alias` is the anchored node
an alias refers to.  Mapping children alternate key, value, key, value.
'''


import collections
import enum
import math
import re
from . import defaults
from . import erring




class NodeKind(enum.Enum):
    DOCUMENT = 'document'
    MAPPING = 'mapping'
    SEQUENCE = 'sequence'
    SCALAR = 'scalar'
    ALIAS = 'alias'
    NULL = 'null'


class NodeStyle(enum.Enum):
    DEFAULT = 'default'
    SINGLE_QUOTED = 'single_quoted'
    DOUBLE_QUOTED = 'double_quoted'
    LITERAL = 'literal'
    FOLDED = 'folded'
    FLOW = 'flow'
    TAGGED = 'tagged'


class ScalarType(enum.Enum):
    STRING = 'string'
    INTEGER = 'integer'
    FLOAT = 'float'
    BOOLEAN = 'boolean'
    NULL = 'null'


class WalkSignal(enum.Enum):
    '''
    Return values for `Node.walk()` visitors.  A visitor returning None is
    treated as CONTINUE.
    '''
    CONTINUE = 'continue'
    SKIP_CHILDREN = 'skip_children'
    STOP = 'stop'


Directive = collections.namedtuple('Directive', ['name', 'value'])




_int_re = re.compile(defaults.RE_INT)
_float_re = re.compile(defaults.RE_FLOAT)


def scalar_type(value):
    '''
    Classify a scalar value.
    '''
    if value is None:
        return ScalarType.NULL
    if isinstance(value, bool):
        return ScalarType.BOOLEAN
    if isinstance(value, int):
        return ScalarType.INTEGER
    if isinstance(value, float):
        return ScalarType.FLOAT
    return ScalarType.STRING


def format_value(value):
    '''
    Render a scalar value as text.  This is the text used for comparing,
    looking up and sorting scalars, and the default text for emitting them.
    '''
    if value is None:
        return 'null'
    if value is True:
        return 'true'
    if value is False:
        return 'false'
    if isinstance(value, float):
        if math.isnan(value):
            return '.nan'
        if math.isinf(value):
            return '.inf' if value > 0 else '-.inf'
        return repr(value)
    return str(value)


def decode_plain(text):
    '''
    Decode the text of a plain, untagged scalar.  Integers are tried before
    floats so that large integers keep full precision.
    '''
    if text in defaults.RESERVED_WORDS:
        return defaults.RESERVED_WORDS[text]
    if _int_re.match(text):
        return int(text)
    if text in defaults.SPECIAL_FLOATS:
        return defaults.SPECIAL_FLOATS[text]
    if _float_re.match(text):
        return float(text)
    return text


def decode_tagged(text, tag):
    '''
    Decode scalar text according to a core tag.  Text that does not fit the
    tag, and text under any other tag, is kept as a string.
    '''
    if tag == defaults.CORE_TAGS['str']:
        return text
    if tag == defaults.CORE_TAGS['null']:
        return None
    if tag == defaults.CORE_TAGS['bool']:
        lowered = text.lower()
        if lowered in ('true', 'false'):
            return lowered == 'true'
        return text
    if tag == defaults.CORE_TAGS['int']:
        if _int_re.match(text):
            return int(text)
        return text
    if tag == defaults.CORE_TAGS['float']:
        if text in defaults.SPECIAL_FLOATS:
            return defaults.SPECIAL_FLOATS[text]
        if _float_re.match(text):
            return float(text)
        return text
    return text


def same_value(a, b):
    '''
    Equality for scalar values that distinguishes `1`, `1.0` and `True`, and
    treats NaN as equal to itself.
    '''
    if type(a) is not type(b):
        return False
    if isinstance(a, float) and math.isnan(a) and math.isnan(b):
        return True
    return a == b


def _index_of(nodes, node):
    for i, n in enumerate(nodes):
        if n is node:
            return i
    raise erring.Bug('Node is not among the children of its parent')




class Node(object):
    '''
    Universal document tree element.
    '''
    __slots__ = ['kind', 'value', 'tag', 'style', 'anchor', 'alias',
                 'children', 'key', 'parent',
                 'head_comment', 'line_comment', 'foot_comment',
                 'blank_lines_before', 'line', 'column', 'metadata']

    def __init__(self, kind, value=None, tag=None, style=NodeStyle.DEFAULT, anchor=None):
        if not isinstance(kind, NodeKind):
            raise TypeError('Invalid node kind {0!r}'.format(kind))
        if not isinstance(style, NodeStyle):
            raise TypeError('Invalid node style {0!r}'.format(style))
        self.kind = kind
        self.value = value
        self.tag = tag
        self.style = style
        self.anchor = anchor
        self.alias = None
        self.children = []
        self.key = None
        self.parent = None
        self.head_comment = []
        self.line_comment = ''
        self.foot_comment = []
        self.blank_lines_before = 0
        self.line = 0
        self.column = 0
        self.metadata = {}


    @classmethod
    def scalar(cls, value, style=NodeStyle.DEFAULT, tag=None):
        if isinstance(value, (list, tuple, dict, set, Node)):
            raise TypeError('Scalar values must be str, int, float, bool, or None')
        return cls(NodeKind.SCALAR, value, tag=tag, style=style)

    @classmethod
    def mapping(cls, style=NodeStyle.DEFAULT):
        return cls(NodeKind.MAPPING, style=style)

    @classmethod
    def sequence(cls, style=NodeStyle.DEFAULT):
        return cls(NodeKind.SEQUENCE, style=style)

    @classmethod
    def document(cls):
        return cls(NodeKind.DOCUMENT)

    @classmethod
    def null(cls):
        return cls(NodeKind.NULL)

    @classmethod
    def alias_to(cls, target):
        '''
        Create an alias of an anchored node.
        '''
        if not target.anchor:
            raise erring.NodeError('Cannot alias a node without an anchor', target)
        node = cls(NodeKind.ALIAS, target.anchor)
        node.alias = target
        return node


    def __repr__(self):
        if self.kind in (NodeKind.SCALAR, NodeKind.ALIAS):
            return '<Node {0} {1!r}>'.format(self.kind.value, self.value)
        return '<Node {0} ({1} children)>'.format(self.kind.value, len(self.children))


    def __str__(self):
        lines = []
        self._describe(lines, 0)
        return '\n'.join(lines)


    def _describe(self, lines, depth):
        parts = ['  '*depth + self.kind.value]
        if self.kind is NodeKind.SCALAR:
            parts.append(repr(self.value))
        elif self.kind is NodeKind.ALIAS:
            parts.append('*{0}'.format(self.value))
        if self.anchor:
            parts.append('&{0}'.format(self.anchor))
        if self.tag:
            parts.append(self.tag)
        if self.style is not NodeStyle.DEFAULT:
            parts.append('[{0}]'.format(self.style.value))
        for line in self.head_comment:
            lines.append('  '*depth + line)
        if self.line_comment:
            parts.append(self.line_comment)
        lines.append(' '.join(parts))
        for child in self.children:
            child._describe(lines, depth+1)
        for line in self.foot_comment:
            lines.append('  '*depth + line)


    @property
    def scalar_type(self):
        if self.kind is NodeKind.NULL:
            return ScalarType.NULL
        return scalar_type(self.value)

    @property
    def text(self):
        '''
        Rendered text of a scalar or alias.  Collections render as an empty
        string.
        '''
        if self.kind in (NodeKind.SCALAR, NodeKind.NULL):
            return format_value(self.value)
        if self.kind is NodeKind.ALIAS:
            return '*{0}'.format(self.value)
        return ''

    @property
    def is_null(self):
        return self.kind is NodeKind.NULL or (self.kind is NodeKind.SCALAR and self.value is None)

    @property
    def has_comments(self):
        return bool(self.head_comment or self.line_comment or self.foot_comment)


    def add_child(self, child):
        child.parent = self
        self.children.append(child)
        return child


    def add_key_value(self, key, value):
        '''
        Append a key/value pair to a mapping.  Plain scalar keys and values
        are wrapped in scalar nodes.
        '''
        if self.kind is not NodeKind.MAPPING:
            raise erring.NodeError('Cannot add a key/value pair to a {0} node'.format(self.kind.value), self)
        if not isinstance(key, Node):
            key = Node.scalar(key)
        if not isinstance(value, Node):
            value = Node.null() if value is None else Node.scalar(value)
        self.add_child(key)
        self.add_child(value)
        value.key = key
        return value


    def add_item(self, item):
        '''
        Append an item to a sequence.
        '''
        if self.kind is not NodeKind.SEQUENCE:
            raise erring.NodeError('Cannot add an item to a {0} node'.format(self.kind.value), self)
        if not isinstance(item, Node):
            item = Node.null() if item is None else Node.scalar(item)
        return self.add_child(item)


    def pairs(self):
        '''
        Iterate over (key, value) node pairs of a mapping.
        '''
        if self.kind is not NodeKind.MAPPING:
            return
        children = self.children
        for i in range(0, len(children)-1, 2):
            yield (children[i], children[i+1])


    def get_key(self, name):
        '''
        Key node whose rendered text is `name`, or None.
        '''
        for k, v in self.pairs():
            if k.text == name:
                return k
        return None


    def get_value(self, name):
        '''
        Value node for the key whose rendered text is `name`, or None.
        '''
        for k, v in self.pairs():
            if k.text == name:
                return v
        return None


    def keys(self):
        '''
        Key nodes of a mapping, in order.
        '''
        return [k for k, v in self.pairs()]


    def items(self):
        '''
        Item nodes of a sequence.
        '''
        if self.kind is not NodeKind.SEQUENCE:
            return []
        return list(self.children)


    def index_in_parent(self):
        if self.parent is None:
            return None
        return _index_of(self.parent.children, self)


    def remove(self):
        '''
        Detach this node from its parent.  Removing either half of a mapping
        pair removes the whole pair.
        '''
        parent = self.parent
        if parent is None:
            raise erring.NodeError('Cannot remove a node without a parent', self)
        index = _index_of(parent.children, self)
        if parent.kind is NodeKind.MAPPING:
            start = index - index % 2
            removed = parent.children[start:start+2]
            del parent.children[start:start+2]
        else:
            removed = [self]
            del parent.children[index]
        for node in removed:
            node.parent = None
            node.key = None


    def replace_with(self, replacement):
        '''
        Put `replacement` in this node's position within its parent.
        '''
        parent = self.parent
        if parent is None:
            raise erring.NodeError('Cannot replace a node without a parent', self)
        index = _index_of(parent.children, self)
        if replacement.parent is not None:
            replacement.remove()
        parent.children[index] = replacement
        replacement.parent = parent
        if parent.kind is NodeKind.MAPPING:
            if index % 2:
                replacement.key = parent.children[index-1]
            elif index+1 < len(parent.children):
                parent.children[index+1].key = replacement
        self.parent = None
        self.key = None


    def walk(self, visitor):
        '''
        Visit this node and its descendants depth first.  Aliases are not
        followed.  Returns False if the walk was stopped by the visitor.
        '''
        return self._walk(visitor) is not WalkSignal.STOP


    def _walk(self, visitor):
        signal = visitor(self)
        if signal is None or signal is WalkSignal.CONTINUE:
            for child in list(self.children):
                if child._walk(visitor) is WalkSignal.STOP:
                    return WalkSignal.STOP
            return WalkSignal.CONTINUE
        if signal is WalkSignal.SKIP_CHILDREN:
            return WalkSignal.CONTINUE
        if signal is WalkSignal.STOP:
            return WalkSignal.STOP
        raise TypeError('Walk visitors must return a WalkSignal or None, not {0!r}'.format(signal))


    def iter_nodes(self):
        '''
        Iterate over this node and its descendants in document order.
        '''
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


    def find(self, predicate):
        for node in self.iter_nodes():
            if predicate(node):
                return node
        return None


    def find_all(self, predicate):
        return [node for node in self.iter_nodes() if predicate(node)]


    def path(self):
        '''
        Location from the root, as in `$.services.web.ports[0]`.
        '''
        parts = []
        node = self
        while node.parent is not None:
            parent = node.parent
            index = _index_of(parent.children, node)
            if parent.kind is NodeKind.MAPPING:
                key = parent.children[index - index % 2]
                parts.append('.{0}'.format(key.text))
            elif parent.kind is NodeKind.SEQUENCE:
                parts.append('[{0}]'.format(index))
            node = parent
        return '$' + ''.join(reversed(parts))


    def resolve(self):
        '''
        Follow aliases to the node they refer to.
        '''
        node = self
        seen = set()
        while node.kind is NodeKind.ALIAS:
            if id(node) in seen:
                raise erring.AliasCycleError(self.value, self)
            seen.add(id(node))
            if node.alias is None:
                raise erring.NodeError('Unresolved alias "*{0}"'.format(node.value), node)
            node = node.alias
        return node


    def clone(self, memo=None):
        '''
        Deep copy of this subtree.  Aliases whose targets lie within the
        subtree refer to the copied targets; other aliases keep their
        original targets.  `memo` maps `id()` of original nodes to copies.
        '''
        if memo is None:
            memo = {}
        copy = self._clone(memo)
        for node in memo.values():
            if node.alias is not None and id(node.alias) in memo:
                node.alias = memo[id(node.alias)]
        return copy


    def _clone(self, memo):
        if id(self) in memo:
            return memo[id(self)]
        new = Node(self.kind, self.value, self.tag, self.style, self.anchor)
        memo[id(self)] = new
        new.alias = self.alias
        new.head_comment = list(self.head_comment)
        new.line_comment = self.line_comment
        new.foot_comment = list(self.foot_comment)
        new.blank_lines_before = self.blank_lines_before
        new.line = self.line
        new.column = self.column
        new.metadata = dict(self.metadata)
        for index, child in enumerate(self.children):
            child_copy = child._clone(memo)
            child_copy.parent = new
            new.children.append(child_copy)
            if self.kind is NodeKind.MAPPING and index % 2:
                child_copy.key = new.children[index-1]
        return new


    def to_python(self):
        '''
        Convert to plain Python data.  Aliases are expanded; an alias that
        refers to a node containing it raises AliasCycleError.
        '''
        return self._to_python(set())


    def _to_python(self, active):
        if self.kind is NodeKind.ALIAS:
            if self.alias is None:
                raise erring.NodeError('Unresolved alias "*{0}"'.format(self.value), self)
            if id(self.alias) in active:
                raise erring.AliasCycleError(self.value, self)
            return self.alias._to_python(active)
        if self.kind is NodeKind.NULL:
            return None
        if self.kind is NodeKind.SCALAR:
            return self.value
        active.add(id(self))
        try:
            if self.kind is NodeKind.DOCUMENT:
                if not self.children:
                    return None
                return self.children[0]._to_python(active)
            if self.kind is NodeKind.SEQUENCE:
                return [child._to_python(active) for child in self.children]
            data = {}
            for k, v in self.pairs():
                key = k._to_python(active)
                if isinstance(key, list):
                    key = tuple(key)
                elif isinstance(key, dict):
                    key = tuple(key.items())
                data[key] = v._to_python(active)
            return data
        finally:
            active.discard(id(self))




class Document(object):
    '''
    One YAML document:  a root node, the anchors registered in it, and its
    directives.
    '''
    __slots__ = ['root', 'anchors', 'directives']

    def __init__(self, root=None):
        self.root = None
        self.anchors = {}
        self.directives = []
        if root is not None:
            self.set_root(root)


    def __repr__(self):
        return '<Document root={0!r}>'.format(self.root)


    def set_root(self, node):
        if node is not None:
            node.parent = None
            node.key = None
        self.root = node


    @property
    def content(self):
        '''
        Top-level data node, looking through a document-kind root.
        '''
        root = self.root
        if root is not None and root.kind is NodeKind.DOCUMENT:
            return root.children[0] if root.children else None
        return root


    def register_anchor(self, name, node):
        if not name:
            raise erring.NodeError('Anchor names cannot be empty', node)
        node.anchor = name
        self.anchors[name] = node


    def get_anchor(self, name):
        return self.anchors.get(name)


    def rebuild_anchors(self):
        '''
        Rebuild the anchor registry from the nodes of the document, and
        point aliases at the registered nodes.  Of two anchors with the
        same name, the later one in document order is registered.
        '''
        self.anchors = {}
        if self.root is None:
            return
        aliases = []
        for node in self.root.iter_nodes():
            if node.kind is NodeKind.ALIAS:
                aliases.append(node)
            elif node.anchor:
                self.anchors[node.anchor] = node
        for alias in aliases:
            target = self.anchors.get(alias.value)
            if target is not None:
                alias.alias = target


    def add_directive(self, name, value):
        directive = Directive(name, value)
        self.directives.append(directive)
        return directive


    def clone(self):
        new = Document()
        if self.root is not None:
            memo = {}
            new.root = self.root.clone(memo)
            for name, node in self.anchors.items():
                new.anchors[name] = memo.get(id(node), node)
        else:
            new.anchors = dict(self.anchors)
        new.directives = list(self.directives)
        return new




class Tree(object):
    '''
    Ordered collection of documents.  `current` is the most recently added
    document.
    '''
    __slots__ = ['documents', 'current']

    def __init__(self, documents=None):
        self.documents = []
        self.current = None
        if documents is not None:
            for doc in documents:
                self.add_document(doc)


    def __repr__(self):
        return '<Tree ({0} documents)>'.format(len(self.documents))

    def __len__(self):
        return len(self.documents)

    def __iter__(self):
        return iter(self.documents)

    def __getitem__(self, index):
        return self.documents[index]


    def add_document(self, document=None):
        if document is None:
            document = Document()
        self.documents.append(document)
        self.current = document
        return document


    def extend(self, other):
        '''
        Append copies of the documents of another tree.
        '''
        for doc in other.documents:
            self.add_document(doc.clone())


    def clone(self):
        new = Tree([doc.clone() for doc in self.documents])
        if self.current is not None and self.documents:
            new.current = new.documents[_index_of(self.documents, self.current)]
        return new


    def serialize(self, blank_lines=None, **kwargs):
        '''
        Render the tree as UTF-8 text.
        '''
        from .dumping import serialize
        return serialize(self, blank_lines=blank_lines, **kwargs)


    def to_python(self):
        '''
        Plain data of the first document.
        '''
        if not self.documents or self.documents[0].root is None:
            return None
        return self.documents[0].root.to_python()
