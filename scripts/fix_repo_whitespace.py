#!/usr/bin/env python3
"""Script to fix whitespace in this repository's own source files.

Walks the project directories, collects text files by extension and hands the
list to the batch runner. Pass --check to only report.
"""

import os
import sys

# Add project root to Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from wsfix.config import load_options
from wsfix.models import FileStatus
from wsfix.runner import BatchRunner

DIRS_TO_PROCESS = ['wsfix', 'tests', 'scripts']
ROOT_FILES = ['pyproject.toml', 'DESIGN.md']
EXTENSIONS = ('.py', '.md', '.toml', '.txt')


def collect_files(root=project_root):
    """Collect the repository files that should be kept clean."""
    paths = [os.path.join(root, name) for name in ROOT_FILES if os.path.exists(os.path.join(root, name))]

    for directory in DIRS_TO_PROCESS:
        directory = os.path.join(root, directory)
        if os.path.exists(directory):
            for current, dirs, files in os.walk(directory):
                dirs[:] = sorted(d for d in dirs if d != '__pycache__')
                for file in sorted(files):
                    if file.endswith(EXTENSIONS):
                        paths.append(os.path.join(current, file))
    return paths


def main(argv=None, root=project_root):
    """Main function to fix all repository files."""
    argv = sys.argv[1:] if argv is None else argv
    # None leaves WSFIX_CHECK_ONLY in charge when --check is absent
    options = load_options(check_only=True if '--check' in argv else None)
    result = BatchRunner(options).run(collect_files(root))

    for file_result in result.results:
        name = os.path.relpath(file_result.path, root)
        if file_result.status is FileStatus.CHANGED:
            print(f"{'Needs fixing' if options.check_only else 'Fixed'}: {name}")
        elif file_result.error is not None:
            verb = "reading" if file_result.error.kind == "read" else "writing"
            print(f"Error {verb} {name}: {file_result.error.message}")

    print(f"\nTotal files {'needing fixes' if options.check_only else 'fixed'}: {result.files_changed}")
    return 0 if result.passed else 1


if __name__ == "__main__":
    sys.exit(main())
