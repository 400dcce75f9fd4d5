"""
Batch runner.

This module drives the fixer over an ordered list of paths: it reads each file,
analyzes it, writes corrected content back with an atomic replace (unless the
run is check-only) and folds the per-file results into one BatchResult.
Files can be processed sequentially or on a thread pool; both produce the same
result.
"""

# Standard library imports
import contextlib
import os
import shutil
import tempfile
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Iterable, List, Optional, Union

# Third-party imports
from tqdm import tqdm

# Local imports
from .exceptions import FileAccessError, ReadError, WriteError
from .fixer import analyze
from .logger import logger
from .models import BatchResult, FileError, FileResult, FileStatus, Options, OutcomeKind

PathLike = Union[str, os.PathLike]


def _reason(exc: Exception) -> str:
    return getattr(exc, "strerror", None) or str(exc)


def read_file(path: PathLike) -> bytes:
    """Read the whole file, converting OS failures into ReadError."""
    try:
        return Path(path).read_bytes()
    except (OSError, ValueError) as exc:
        raise ReadError(path, _reason(exc)) from exc


def atomic_write(path: PathLike, data: bytes) -> None:
    """
    Replace the content of a file without ever exposing a partial write.

    The data goes to a temporary file next to the real file (symlinks are
    followed, so the link itself survives), which receives the original's
    permission bits and is then renamed over it.

    Args:
        path: File to replace
        data: New content

    Raises:
        WriteError: If any step fails; the original file is left untouched
    """
    tmp_name = None
    try:
        target = Path(os.path.realpath(path))
        fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        shutil.copymode(target, tmp_name)
        os.replace(tmp_name, target)
        tmp_name = None
    except (OSError, ValueError) as exc:
        raise WriteError(path, _reason(exc)) from exc
    finally:
        if tmp_name is not None:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_name)


def accumulate(result: BatchResult, file_result: FileResult) -> BatchResult:
    """Fold one file's result into the running batch result."""
    update = {
        "files_scanned": result.files_scanned + 1,
        "results": result.results + (file_result,),
    }
    if file_result.status is FileStatus.CHANGED:
        update["files_changed"] = result.files_changed + 1
        update["lines_changed"] = result.lines_changed + file_result.outcome.summary.total
        if file_result.written:
            update["files_written"] = result.files_written + 1
    elif file_result.status is FileStatus.BINARY:
        update["files_binary"] = result.files_binary + 1
    elif file_result.status is FileStatus.UNCHANGED:
        update["files_unchanged"] = result.files_unchanged + 1

    if file_result.error is not None:
        update["files_errored"] = result.files_errored + 1
        update["errors"] = result.errors + (file_result.error,)

    return result.model_copy(update=update)


class BatchRunner:
    """
    Runs the fixer over a list of files and aggregates the outcome.

    Each file is read, analyzed and (when needed) rewritten as one unit; a
    failure on one file is recorded against it and never stops the others.
    """

    def __init__(self, options: Optional[Options] = None):
        """
        Initialize the runner.

        Args:
            options: Resolved options (defaults to LF endings, fix mode)
        """
        self.options = options or Options()

    def process_file(self, path: PathLike) -> FileResult:
        """
        Read, analyze and rewrite a single file.

        Args:
            path: File to process

        Returns:
            FileResult for the file; errors are captured, not raised
        """
        name = str(path)
        written = False
        outcome = None
        try:
            data = read_file(path)
            outcome = analyze(data, self.options)

            if outcome.kind is OutcomeKind.BINARY:
                logger.debug("Skipping binary file: %s", name)
                return FileResult(path=name, status=FileStatus.BINARY, outcome=outcome)

            if outcome.kind is OutcomeKind.UNCHANGED:
                return FileResult(path=name, status=FileStatus.UNCHANGED, outcome=outcome)

            if not self.options.check_only:
                atomic_write(path, outcome.corrected)
                written = True
                logger.info("Fixed %s (%s)", name, ", ".join(outcome.summary.rules))
            else:
                logger.info("Needs fixing: %s (%s)", name, ", ".join(outcome.summary.rules))

            return FileResult(
                path=name, status=FileStatus.CHANGED, outcome=outcome.without_content(), written=written
            )

        except FileAccessError as e:
            logger.error("Error processing %s: %s", name, e.message)
            error = FileError(path=name, kind=e.kind, message=e.message)
            return FileResult(
                path=name,
                status=FileStatus.ERROR,
                outcome=outcome.without_content() if outcome is not None else None,
                error=error,
            )

    def _process_sequential(self, paths: List[PathLike]) -> List[FileResult]:
        return [self.process_file(path) for path in paths]

    def _process_parallel(self, paths: List[PathLike]) -> List[FileResult]:
        """Process files on a thread pool, returning results in input order."""
        results: List[Optional[FileResult]] = [None] * len(paths)

        with ThreadPoolExecutor(max_workers=self.options.max_workers) as executor:
            future_to_index = {
                executor.submit(self.process_file, path): index
                for index, path in enumerate(paths)
            }

            try:
                with tqdm(total=len(paths), desc="Checking whitespace", unit="file",
                          disable=not self.options.show_progress) as pbar:
                    for future in as_completed(future_to_index):
                        result = future.result()
                        results[future_to_index[future]] = result
                        if result.status is FileStatus.CHANGED:
                            pbar.set_postfix({"changed": Path(result.path).name})
                        pbar.update(1)
            except KeyboardInterrupt:
                logger.warning("Interrupted; waiting for in-flight files to finish")
                executor.shutdown(wait=True, cancel_futures=True)
                raise

        return results

    def run(self, paths: Iterable[PathLike]) -> BatchResult:
        """
        Process every path in order and return the aggregate result.

        Args:
            paths: Ordered file paths to process

        Returns:
            Immutable BatchResult covering every path
        """
        paths = list(paths)
        logger.info("Processing %d files (check_only=%s, workers=%d)",
                    len(paths), self.options.check_only, self.options.max_workers)

        if self.options.max_workers > 1 and len(paths) > 1:
            file_results = self._process_parallel(paths)
        else:
            file_results = self._process_sequential(paths)

        result = BatchResult(check_only=self.options.check_only)
        for file_result in file_results:
            result = accumulate(result, file_result)

        logger.info("Scanned %d files: %d changed, %d binary, %d errors -> %s",
                    result.files_scanned, result.files_changed, result.files_binary,
                    result.files_errored, result.status)
        return result


def run(paths: Iterable[PathLike], options: Optional[Options] = None) -> BatchResult:
    """Run a batch over paths with the given options."""
    return BatchRunner(options).run(paths)
