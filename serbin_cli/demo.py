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

"""
Writes a small graph of values to a file with one type each, reads it back and compares.

This exercises optionals, mappings, wide strings and user records going through a real file.
"""

import sys
from argparse import ArgumentParser, Namespace
from typing import Any, Optional

from structlog import get_logger

from serbin import Float32, Float64, Int32, Int64, Reader, Record, Unique, WideStr, Writer

logger = get_logger()

CustomData = tuple[Float32, Float64, Int64]


class Custom(Record):
    """A record that owns a tuple of numbers of different widths."""

    def __init__(self) -> None:
        self.data: Unique[CustomData] = Unique((0.0, 0.0, 0))

    def write_to(self, writer: Writer) -> Writer:
        return writer.write(Unique[CustomData], self.data)

    def read_from(self, reader: Reader) -> Reader:
        self.data = reader.read(Unique[CustomData])
        return reader

    def __repr__(self) -> str:
        return f'Custom({self.data!r})'

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Custom):
            return NotImplemented
        return self.data == other.data


# (type, value) pairs, written and read in this order
def build_demo() -> list[tuple[Any, Any]]:
    custom = Custom()
    custom.data.reset((67.0, 0.125678, 800009))
    return [
        (list[Int32 | None], [None, 456, 7890]),
        (dict[str, bool], {'Aurora': True, 'Borealis': False, 'Club': True}),
        (set[WideStr], {'Dread', 'Elemental', 'Fang'}),
        (Custom, custom),
    ]


def write_demo(path: str, values: Optional[list[tuple[Any, Any]]] = None) -> None:
    if values is None:
        values = build_demo()
    with Writer.open(path) as writer:
        for type_, value in values:
            writer.write(type_, value)


def read_demo(path: str) -> list[Any]:
    types = [type_ for type_, _ in build_demo()]
    with Reader.open(path) as reader:
        values = list(reader.read_many(*types))
        reader.finalize()
    return values


def create_parser() -> ArgumentParser:
    from serbin_cli.util import create_parser
    parser = create_parser()
    parser.add_argument('file', help='Where to write the demo values')
    return parser


def execute(args: Namespace) -> int:
    expected = build_demo()
    write_demo(args.file, expected)
    logger.info('demo written', path=args.file)

    values = read_demo(args.file)
    ok = True
    for (_, expected_value), value in zip(expected, values):
        matched = value == expected_value
        ok &= matched
        print('{:<40} {}'.format(repr(value), 'ok' if matched else 'MISMATCH'))

    if not ok:
        print('round trip failed', file=sys.stderr)
        return 1
    print('round trip ok')
    return 0


def main() -> int:
    parser = create_parser()
    args = parser.parse_args()
    return execute(args)
