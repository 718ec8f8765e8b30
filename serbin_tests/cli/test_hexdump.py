import os
from argparse import Namespace
from contextlib import redirect_stdout
from io import StringIO

from serbin import dump
from serbin_cli.hexdump import execute, hexdump_lines
from serbin_tests import unittest


class HexdumpTest(unittest.TestCase):
    def test_empty(self):
        self.assertEqual(list(hexdump_lines(b'')), [])

    def test_multiple_lines(self):
        lines = list(hexdump_lines(bytes(range(20))))
        self.assertEqual(len(lines), 2)
        self.assertTrue(lines[0].startswith('00000000  00 01 02 03'))
        self.assertTrue(lines[1].startswith('00000010  10 11 12 13 '))
        self.assertTrue(lines[1].endswith('|....|'))

    def test_width(self):
        lines = list(hexdump_lines(b'abcd', width=2))
        self.assertEqual(lines, ['00000000  61 62  |ab|', '00000002  63 64  |cd|'])

    def test_execute(self):
        path = os.path.join(self.mkdtemp(), 'value.bin')
        dump(bytes, b'Club', path)
        size = len(self.encode(bytes, b'Club'))

        f = StringIO()
        with redirect_stdout(f):
            execute(Namespace(file=path, limit=None))
        output = f.getvalue().strip().splitlines()
        self.assertEqual(len(output), 2)
        self.assertIn('|', output[0])
        self.assertTrue(output[0].rstrip('|').endswith('Club'))
        self.assertEqual(output[-1], f'{size:08x}')

    def test_execute_limit(self):
        path = os.path.join(self.mkdtemp(), 'value.bin')
        with open(path, 'wb') as fp:
            fp.write(bytes(100))

        f = StringIO()
        with redirect_stdout(f):
            execute(Namespace(file=path, limit=10))
        output = f.getvalue().strip().splitlines()
        self.assertEqual(output[-1], '0000000a')
        self.assertEqual(len(output), 2)
