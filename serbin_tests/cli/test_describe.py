from argparse import Namespace
from collections import OrderedDict
from contextlib import redirect_stdout
from io import StringIO

import pytest

from serbin import Array, Float32, Int8, Int32, Unique, UnsupportedTypeError, WideStr
from serbin_cli.describe import describe, execute, parse_annotation


@pytest.mark.parametrize(
    ['text', 'expected'],
    [
        ('int', int),
        ('list[Int32 | None]', list[Int32 | None]),
        ('Array[Int32, 4]', Array[Int32, 4]),
        ('tuple[()]', tuple[()]),
        ('tuple[Float32, ...]', tuple[Float32, ...]),
        ('Unique[Int8] | None', Unique[Int8] | None),
        ('  OrderedDict[str, WideStr]', OrderedDict[str, WideStr]),
    ]
)
def test_parse_annotation(text: str, expected: object) -> None:
    assert parse_annotation(text) == expected


@pytest.mark.parametrize(
    'text',
    [
        'open',
        'list[',
        'Int128',
        'list[Int32',
        '().__class__.__bases__[0].__subclasses__()',
        'Int32.__supertype__',
        '[int]',
        '"int"',
        'True',
        'Array[Int32, -1]',
        'Array[Int32]',
        'list[int] if True else int',
    ]
)
def test_parse_invalid_annotation(text: str) -> None:
    with pytest.raises(ValueError, match='invalid annotation'):
        parse_annotation(text)


def test_describe() -> None:
    assert describe(Int32) == ['Int32Shape()', 'fixed size: 4 bytes', 'trivially copyable: yes']
    assert describe(Array[Int32, 4]) == [
        'ArrayShape(Int32Shape(), 4)',
        'fixed size: 16 bytes',
        'trivially copyable: no',
    ]
    assert describe(list[Int32 | None]) == [
        'ListShape(OptionalShape(Int32Shape()))',
        'fixed size: variable',
        'trivially copyable: no',
    ]


def test_describe_unsupported() -> None:
    with pytest.raises(UnsupportedTypeError):
        describe(complex)


def test_execute() -> None:
    f = StringIO()
    with redirect_stdout(f):
        execute(Namespace(annotation='dict[str, list[Int32]]'))
    assert f.getvalue().splitlines()[0] == 'DictShape(StrShape(), ListShape(Int32Shape()))'
