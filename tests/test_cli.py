"""
Tests for the command line entry point and its exit codes.
"""

import io
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

# Add project root to Python path
import sys
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

# Local imports
from wsfix.cli import EXIT_CONFIG, EXIT_FAIL, EXIT_PASS, main


@patch("wsfix.config.load_dotenv")
class TestCli(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.dirty = self.root / "dirty.txt"
        self.dirty.write_bytes(b"foo  \r\nbar")
        self.clean = self.root / "clean.txt"
        self.clean.write_bytes(b"ok\n")

    def tearDown(self):
        self._tmp.cleanup()

    def run_main(self, argv):
        with patch("sys.stdout", new_callable=io.StringIO) as out:
            code = main(argv)
        return code, out.getvalue()

    def test_fix_mode_passes_and_rewrites(self, _mock_dotenv):
        code, output = self.run_main([str(self.dirty), str(self.clean)])

        self.assertEqual(code, EXIT_PASS)
        self.assertEqual(self.dirty.read_bytes(), b"foo\nbar\n")
        self.assertIn(f"{self.dirty}:1: trailing whitespace", output)
        self.assertIn(f"{self.dirty}:1: CRLF line ending, LF expected", output)
        self.assertIn(f"{self.dirty}:2: no newline at end of file", output)
        self.assertIn(f"Fixed: {self.dirty}", output)

    def test_check_mode_fails_without_writing(self, _mock_dotenv):
        code, output = self.run_main(["--check", str(self.dirty)])

        self.assertEqual(code, EXIT_FAIL)
        self.assertEqual(self.dirty.read_bytes(), b"foo  \r\nbar")
        self.assertIn(f"Would fix: {self.dirty}", output)
        self.assertIn("Files needing fixes: 1", output)

    def test_check_mode_passes_on_clean_files(self, _mock_dotenv):
        code, output = self.run_main(["--check", str(self.clean)])

        self.assertEqual(code, EXIT_PASS)
        self.assertEqual(output, "")

    def test_crlf_flag(self, _mock_dotenv):
        code, _ = self.run_main(["--line-ending", "crlf", str(self.clean)])

        self.assertEqual(code, EXIT_PASS)
        self.assertEqual(self.clean.read_bytes(), b"ok\r\n")

    def test_missing_file_fails(self, _mock_dotenv):
        missing = self.root / "missing.txt"

        code, output = self.run_main([str(missing), str(self.clean)])

        self.assertEqual(code, EXIT_FAIL)
        self.assertIn(f"Error reading {missing}", output)

    def test_advisory_warnings_do_not_fail(self, _mock_dotenv):
        long_file = self.root / "long.txt"
        long_file.write_bytes(b"x" * 30 + b"\n")

        code, output = self.run_main(["--check", "--line-length", "20", str(long_file)])

        self.assertEqual(code, EXIT_PASS)
        self.assertIn(f"{long_file}:1: warning: line too long (30 > 20 columns)", output)

    def test_parallel_jobs(self, _mock_dotenv):
        code, _ = self.run_main(["-j", "3", str(self.dirty), str(self.clean)])

        self.assertEqual(code, EXIT_PASS)
        self.assertEqual(self.dirty.read_bytes(), b"foo\nbar\n")

    def test_invalid_configuration(self, _mock_dotenv):
        with patch.dict(os.environ, {"WSFIX_MAX_WORKERS": "many"}):
            with patch("sys.stderr", new_callable=io.StringIO) as err:
                code, _ = self.run_main([str(self.clean)])

        self.assertEqual(code, EXIT_CONFIG)
        self.assertIn("invalid configuration", err.getvalue())

    def test_invalid_flag_value(self, _mock_dotenv):
        with patch("sys.stderr", new_callable=io.StringIO):
            code, _ = self.run_main(["--jobs", "0", str(self.clean)])

        self.assertEqual(code, EXIT_CONFIG)


if __name__ == "__main__":
    unittest.main()
