import os
from argparse import Namespace
from contextlib import redirect_stdout
from io import StringIO

from structlog.testing import capture_logs

from serbin import Float32, Float64, Int32, Reader, Unique
from serbin_cli.demo import Custom, build_demo, execute, read_demo, write_demo
from serbin_tests import unittest


class DemoTest(unittest.TestCase):
    def test_write_and_read(self):
        path = os.path.join(self.mkdtemp(), 'demo.bin')
        write_demo(path)
        values = read_demo(path)
        self.assertEqual(values, [value for _, value in build_demo()])

    def test_file_layout(self):
        path = os.path.join(self.mkdtemp(), 'demo.bin')
        write_demo(path)
        with Reader.open(path) as reader:
            self.assertEqual(reader.read(list[Int32 | None]), [None, 456, 7890])

    def test_custom_record(self):
        custom = Custom()
        custom.data.reset((67.0, 0.125678, 800009))
        value = self.assertRoundTrip(Custom, custom)
        self.assertIsInstance(value, Custom)
        self.assertEqual(value.data.get(), (67.0, 0.125678, 800009))

        data = self.encode(Unique[tuple[Float32, Float64, int]], custom.data)
        self.assertEqual(self.encode(Custom, custom), data)

    def test_execute(self):
        path = os.path.join(self.mkdtemp(), 'demo.bin')
        f = StringIO()
        with capture_logs(), redirect_stdout(f):
            code = execute(Namespace(file=path))
        self.assertEqual(code, 0)
        output = f.getvalue().strip().splitlines()
        self.assertEqual(len(output), 5)
        self.assertTrue(all(line.endswith(' ok') for line in output[:4]))
        self.assertEqual(output[-1], 'round trip ok')
        self.assertTrue(os.path.isfile(path))
