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

from argparse import ArgumentParser, Namespace
from typing import Iterator

BYTES_PER_LINE = 16


def hexdump_lines(data: bytes, *, width: int = BYTES_PER_LINE) -> Iterator[str]:
    r""" Format bytes as lines of offset, hex and printable ascii.

    >>> list(hexdump_lines(b'Club\x00\x01'))
    ['00000000  43 6c 75 62 00 01                                |Club..|']
    """
    for offset in range(0, len(data), width):
        chunk = data[offset:offset + width]
        hex_part = ' '.join(f'{b:02x}' for b in chunk)
        ascii_part = ''.join(chr(b) if 0x20 <= b < 0x7f else '.' for b in chunk)
        yield f'{offset:08x}  {hex_part:<{width * 3 - 1}}  |{ascii_part}|'


def create_parser() -> ArgumentParser:
    from serbin_cli.util import create_parser
    parser = create_parser()
    parser.add_argument('file', help='File to dump')
    parser.add_argument('--limit', type=int, help='Only dump the first LIMIT bytes')
    return parser


def execute(args: Namespace) -> None:
    with open(args.file, 'rb') as fp:
        data = fp.read() if args.limit is None else fp.read(args.limit)
    for line in hexdump_lines(data):
        print(line)
    print(f'{len(data):08x}')


def main() -> None:
    parser = create_parser()
    args = parser.parse_args()
    execute(args)
