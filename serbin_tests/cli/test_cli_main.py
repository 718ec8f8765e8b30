import sys
import unittest
from contextlib import redirect_stdout
from io import StringIO
from unittest.mock import patch

from structlog.testing import capture_logs

from serbin_cli import main


class CliMainTest(unittest.TestCase):
    def test_init(self):
        # basically making sure importing works
        cli = main.CliManager()

        f = StringIO()
        with capture_logs():
            with redirect_stdout(f):
                cli.help()
        output = f.getvalue().strip().splitlines()

        self.assertIn('Available subcommands:', output)
        self.assertIn('[codec]', ''.join(output))
        self.assertIn('[inspect]', ''.join(output))
        for cmd in ('demo', 'hexdump', 'describe'):
            self.assertIn(cmd, cli.command_list)

    def test_no_command(self):
        cli = main.CliManager()
        f = StringIO()
        with patch.object(sys, 'argv', ['serbin-cli']):
            with redirect_stdout(f):
                code = cli.execute_from_command_line()
        self.assertEqual(code, 0)
        self.assertIn('Available subcommands:', f.getvalue())

    def test_unknown_command(self):
        cli = main.CliManager()
        f = StringIO()
        with patch.object(sys, 'argv', ['serbin-cli', 'frobnicate']):
            with redirect_stdout(f):
                code = cli.execute_from_command_line()
        self.assertEqual(code, -1)
        self.assertIn('Unknown command: "frobnicate"', f.getvalue())

    def test_help(self):
        cli = main.CliManager()

        f = StringIO()
        with self.assertRaises(SystemExit) as cm:
            with capture_logs():
                with redirect_stdout(f):
                    with patch.object(sys, 'argv', ['serbin-cli', 'describe', '--disable-logs', '--help']):
                        cli.execute_from_command_line()

        # Must exit with code 0
        self.assertEqual(cm.exception.args[0], 0)
        self.assertIn('annotation', f.getvalue())

    def test_main_exit_code(self):
        f = StringIO()
        with self.assertRaises(SystemExit) as cm:
            with redirect_stdout(f):
                with patch.object(sys, 'argv', ['serbin-cli', 'frobnicate']):
                    main.main()
        self.assertEqual(cm.exception.args[0], -1)
