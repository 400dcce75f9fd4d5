"""
Tests for the repository hygiene script.
"""

import errno
import io
import os
import tempfile
import unittest
from unittest.mock import patch

# Add project root to Python path
import sys
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

# Local imports
from scripts.fix_repo_whitespace import collect_files, main


class TestCollectFiles(unittest.TestCase):

    def test_collects_text_files_in_project_dirs(self):
        with tempfile.TemporaryDirectory() as root:
            os.makedirs(os.path.join(root, "wsfix", "__pycache__"))
            os.makedirs(os.path.join(root, "other"))
            for name in ("pyproject.toml", "wsfix/a.py", "wsfix/b.md", "wsfix/logo.png",
                         "wsfix/__pycache__/a.py", "other/c.py"):
                with open(os.path.join(root, name), "w") as f:
                    f.write("x\n")

            paths = collect_files(root)

        relative = [os.path.relpath(p, root) for p in paths]
        self.assertEqual(relative, ["pyproject.toml", os.path.join("wsfix", "a.py"), os.path.join("wsfix", "b.md")])

    def test_repository_is_clean(self):
        """The project's own files already satisfy the whitespace rules."""
        from wsfix.models import Options
        from wsfix.runner import run

        result = run(collect_files(), Options(check_only=True))

        self.assertEqual(result.files_errored, 0)
        self.assertFalse(result.any_changes, [r.path for r in result.results if r.status.value == "changed"])



@patch("wsfix.config.load_dotenv")
class TestScriptMain(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = self._tmp.name
        os.makedirs(os.path.join(self.root, "wsfix"))
        self.path = os.path.join(self.root, "wsfix", "a.py")
        with open(self.path, "wb") as f:
            f.write(b"x = 1  \n")

    def tearDown(self):
        self._tmp.cleanup()

    def read(self):
        with open(self.path, "rb") as f:
            return f.read()

    def test_failed_write_is_reported_as_error(self, _dotenv):
        with patch.dict(os.environ, {"WSFIX_CHECK_ONLY": "false"}), \
                patch("wsfix.runner.os.replace", side_effect=OSError(errno.EACCES, "Permission denied")):
            with patch("sys.stdout", new_callable=io.StringIO) as out:
                code = main([], root=self.root)

        self.assertEqual(code, 1)
        self.assertNotIn("Fixed:", out.getvalue())
        self.assertIn(f"Error writing {os.path.join('wsfix', 'a.py')}: Permission denied", out.getvalue())
        self.assertEqual(self.read(), b"x = 1  \n")

    def test_environment_check_only_is_honoured(self, _dotenv):
        with patch.dict(os.environ, {"WSFIX_CHECK_ONLY": "true"}):
            with patch("sys.stdout", new_callable=io.StringIO) as out:
                code = main([], root=self.root)

        self.assertEqual(code, 1)
        self.assertIn("Needs fixing:", out.getvalue())
        self.assertEqual(self.read(), b"x = 1  \n")

    def test_fix_mode_rewrites(self, _dotenv):
        with patch.dict(os.environ, {"WSFIX_CHECK_ONLY": "false"}):
            with patch("sys.stdout", new_callable=io.StringIO) as out:
                code = main([], root=self.root)

        self.assertEqual(code, 0)
        self.assertIn("Fixed:", out.getvalue())
        self.assertEqual(self.read(), b"x = 1\n")


if __name__ == "__main__":
    unittest.main()
