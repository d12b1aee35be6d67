# -*- coding: utf-8 -*-
#
# Copyright (c) 2017, Geoffrey M. Poore
# All rights reserved.
#
# Licensed under the BSD 3-Clause License:
# http://opensource.org/licenses/BSD-3-Clause
#


from .version import __version__, __version_info__


from .loading import load, loads, parse
from .dumping import dump, dumps, serialize
from .nodes import Node, NodeKind, NodeStyle, ScalarType, WalkSignal, Directive, Document, Tree
from .spacing import BlankLinePolicy, BlankLineConfig
from .decoding import TreeDecoder
from .encoding import TreeEncoder
from .merging import merge, merge_documents, merge_nodes
from .diffing import DiffKind, DiffEntry, diff, diff_nodes
from .querying import query, query_one
from .transforming import Pipeline
from .converting import (to_tree, to_python, from_python, merge_data, merge_flexible,
                         merge_flexible_to_tree, merge_flexible_to_bytes)
from .streaming import StreamReader
from .erring import (YamlTreeException, ParseError, NodeError, AliasCycleError,
                     TransformError, StreamCallbackError)
