# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import ast
from argparse import ArgumentParser, Namespace
from collections import OrderedDict, deque
from typing import Any

import serbin
from serbin.shapes import make_shape

# the only names an annotation can use
ANNOTATION_NAMESPACE: dict[str, Any] = {
    'bool': bool,
    'int': int,
    'float': float,
    'str': str,
    'bytes': bytes,
    'list': list,
    'tuple': tuple,
    'set': set,
    'frozenset': frozenset,
    'dict': dict,
    'deque': deque,
    'OrderedDict': OrderedDict,
    **{name: getattr(serbin, name) for name in (
        'Int8', 'Int16', 'Int32', 'Int64', 'UInt8', 'UInt16', 'UInt32', 'UInt64', 'Float32', 'Float64', 'WideStr',
        'Array', 'Unique', 'Shared',
    )},
}


def parse_annotation(text: str) -> Any:
    """ Build an annotation written with builtin containers and the fixed-width types.

    The text is parsed, not evaluated: only names, subscripts, tuples, `|`, `None`, `...` and non-negative integers
    (for `Array` lengths) are accepted.

    >>> parse_annotation('dict[str, list[Int32]]')
    dict[str, list[serbin.types.Int32]]
    >>> parse_annotation('__import__("os")')
    Traceback (most recent call last):
    ...
    ValueError: invalid annotation: '__import__("os")'
    """
    try:
        tree = ast.parse(text.strip(), mode='eval')
        return _build(tree.body)
    except (SyntaxError, TypeError, ValueError) as e:
        raise ValueError(f'invalid annotation: {text!r}') from e


def _build(node: ast.expr) -> Any:
    match node:
        case ast.Name(id=name) if name in ANNOTATION_NAMESPACE:
            return ANNOTATION_NAMESPACE[name]
        case ast.Constant(value=None):
            return None
        case ast.Constant(value=value) if value is Ellipsis or type(value) is int:
            return value
        case ast.Tuple(elts=elts):
            return tuple(_build(elt) for elt in elts)
        case ast.Subscript(value=value, slice=slice_):
            return _build(value)[_build(slice_)]
        case ast.BinOp(left=left, op=ast.BitOr(), right=right):
            return _build(left) | _build(right)
    raise ValueError(f'unexpected {type(node).__name__} in annotation')


def describe(type_: Any) -> list[str]:
    shape = make_shape(type_)
    fixed_size = shape.fixed_size()
    return [
        repr(shape),
        'fixed size: {}'.format('variable' if fixed_size is None else f'{fixed_size} bytes'),
        'trivially copyable: {}'.format('yes' if shape.is_trivially_copyable() else 'no'),
    ]


def create_parser() -> ArgumentParser:
    from serbin_cli.util import create_parser
    parser = create_parser()
    parser.add_argument('annotation', help='Type annotation, for example "dict[str, list[Int32 | None]]"')
    return parser


def execute(args: Namespace) -> None:
    for line in describe(parse_annotation(args.annotation)):
        print(line)


def main() -> None:
    parser = create_parser()
    args = parser.parse_args()
    execute(args)
