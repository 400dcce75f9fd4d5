"""
Error types raised by the whitespace fixer.

Binary files are not errors; they are a normal classification reported
through FixOutcome.
"""


class WhitespaceFixError(Exception):
    """Base class for all errors raised by wsfix."""


class ConfigError(WhitespaceFixError):
    """Raised when options cannot be resolved from the environment or flags."""


class FileAccessError(WhitespaceFixError):
    """An I/O failure tied to a single file."""

    kind = "io"

    def __init__(self, path, message):
        self.path = str(path)
        self.message = message
        super().__init__(f"{self.path}: {message}")


class ReadError(FileAccessError):
    """The file could not be read (missing, permission denied, a directory)."""

    kind = "read"


class WriteError(FileAccessError):
    """The atomic replace of a file failed; the original is left untouched."""

    kind = "write"
