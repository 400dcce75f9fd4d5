"""
Command line entry point.

Takes an explicit list of files (the way pre-commit passes them), runs the
batch and maps the result to an exit code: 0 on pass, 1 on fail and 2 for
invalid configuration.
"""

# Standard library imports
import argparse
import sys
from typing import List, Optional

# Local imports
from . import __version__
from .config import load_options
from .exceptions import ConfigError
from .logger import set_level
from .models import BatchResult, FileStatus, LineEnding
from .runner import BatchRunner

EXIT_PASS = 0
EXIT_FAIL = 1
EXIT_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wsfix",
        description="Fix trailing whitespace, line endings and final newlines in text files.",
    )
    parser.add_argument("paths", nargs="*", help="Files to check")
    parser.add_argument("--check", action="store_const", const=True, default=None,
                        help="Report files that need fixing without modifying them")
    parser.add_argument("--line-ending", choices=[e.value for e in LineEnding],
                        help="Line ending to enforce (default: lf)")
    parser.add_argument("--line-length", type=int, metavar="N",
                        help="Warn about lines longer than N columns")
    parser.add_argument("--tab-size", type=int, metavar="N",
                        help="Tab width used when measuring line length (default: 4)")
    parser.add_argument("--check-tabs", action="store_const", const=True, default=None,
                        help="Warn about tabs that follow other characters")
    parser.add_argument("--no-modeline", dest="use_modeline", action="store_const", const=False, default=None,
                        help="Ignore vim/vi/ex modelines")
    parser.add_argument("-j", "--jobs", dest="max_workers", type=int, metavar="N",
                        help="Number of worker threads (default: 1)")
    parser.add_argument("--progress", dest="show_progress", action="store_const", const=True, default=None,
                        help="Show a progress bar")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable info logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def print_report(result: BatchResult) -> None:
    """Print per-file diagnostics followed by a summary."""
    for file_result in result.results:
        if file_result.outcome is not None:
            for diagnostic in file_result.outcome.diagnostics:
                print(diagnostic.format(file_result.path))
        if file_result.status is FileStatus.CHANGED:
            action = "Fixed" if file_result.written else "Would fix"
            print(f"{action}: {file_result.path} ({', '.join(file_result.outcome.summary.rules)})")
        elif file_result.error is not None:
            verb = "reading" if file_result.error.kind == "read" else "writing"
            print(f"Error {verb} {file_result.path}: {file_result.error.message}")

    if not result.files_changed and not result.files_errored:
        return

    print("=" * 50)
    print(f"📊 Files scanned: {result.files_scanned}")
    print(f"✏️  Files {'needing fixes' if result.check_only else 'changed'}: {result.files_changed}")
    print(f"📈 Lines changed: {result.lines_changed}")
    print(f"⏭️  Binary files skipped: {result.files_binary}")
    print(f"❌ Errors: {result.files_errored}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the command line."""
    args = build_parser().parse_args(argv)
    if args.verbose:
        set_level("INFO")

    try:
        options = load_options(
            check_only=args.check,
            line_ending=args.line_ending,
            line_length=args.line_length,
            tab_size=args.tab_size,
            check_tabs=args.check_tabs,
            use_modeline=args.use_modeline,
            max_workers=args.max_workers,
            show_progress=args.show_progress,
        )
    except ConfigError as e:
        print(f"wsfix: invalid configuration: {e}", file=sys.stderr)
        return EXIT_CONFIG

    result = BatchRunner(options).run(args.paths)
    print_report(result)

    return EXIT_PASS if result.passed else EXIT_FAIL


if __name__ == "__main__":
    sys.exit(main())
