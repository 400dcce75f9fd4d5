"""
Data models for the whitespace fixer.

This module defines the Pydantic models shared by the fixer, the batch runner
and the command line: resolved options, per-file outcomes and the aggregate
batch result. All of them are immutable once built.
"""

# Standard library imports
from enum import Enum
from typing import List, Optional, Tuple

# Third-party imports
from pydantic import BaseModel, ConfigDict, Field


class LineEnding(str, Enum):
    """Line terminator style enforced on every line of a text file"""
    LF = "lf"
    CRLF = "crlf"

    @property
    def terminator(self) -> bytes:
        return b"\r\n" if self is LineEnding.CRLF else b"\n"

    @property
    def label(self) -> str:
        return self.name


class Options(BaseModel):
    """Resolved options, built once and passed through unchanged"""
    model_config = ConfigDict(frozen=True)

    line_ending: LineEnding = Field(default=LineEnding.LF, description="Enforced line ending style")
    check_only: bool = Field(default=False, description="Report required changes without writing")
    line_length: Optional[int] = Field(
        default=None, ge=1,
        description="Report lines wider than this many columns (advisory, never rewritten)"
    )
    tab_size: int = Field(default=4, ge=1, description="Column width of a tab when measuring lines")
    check_tabs: bool = Field(default=False, description="Report tabs that follow other characters")
    use_modeline: bool = Field(default=True, description="Honour vim/vi/ex modelines found in files")
    max_workers: int = Field(default=1, ge=1, description="Worker threads; 1 processes files sequentially")
    show_progress: bool = Field(default=False, description="Show a progress bar for parallel runs")


class OutcomeKind(str, Enum):
    """Classification of a single analyzed file"""
    UNCHANGED = "unchanged"
    BINARY = "binary"
    CHANGED = "changed"


class FileStatus(str, Enum):
    """Final status of a file within a batch"""
    UNCHANGED = "unchanged"
    BINARY = "binary"
    CHANGED = "changed"
    ERROR = "error"


class Diagnostic(BaseModel):
    """A single finding about a file"""
    model_config = ConfigDict(frozen=True)

    line: Optional[int] = Field(default=None, description="1-based line number, if line specific")
    message: str = Field(description="Human readable description")
    advisory: bool = Field(default=False, description="Advisory findings never cause a rewrite or failure")

    def format(self, path: str) -> str:
        location = f"{path}:{self.line}" if self.line is not None else path
        prefix = "warning: " if self.advisory else ""
        return f"{location}: {prefix}{self.message}"


class ChangeSummary(BaseModel):
    """Counts of the whitespace rules that fired for one file"""
    model_config = ConfigDict(frozen=True)

    trailing_whitespace: int = Field(default=0, ge=0, description="Lines with trailing whitespace stripped")
    line_endings: int = Field(default=0, ge=0, description="Line terminators rewritten")
    blank_lines_removed: int = Field(default=0, ge=0, description="Trailing blank lines removed")
    final_newline_added: bool = Field(default=False, description="A missing final newline was added")
    final_newline_removed: bool = Field(default=False, description="A whitespace-only file was emptied")

    @property
    def total(self) -> int:
        return (
            self.trailing_whitespace
            + self.line_endings
            + self.blank_lines_removed
            + int(self.final_newline_added)
        )

    @property
    def rules(self) -> List[str]:
        fired = []
        if self.trailing_whitespace:
            fired.append("trailing-whitespace")
        if self.line_endings:
            fired.append("line-endings")
        if self.blank_lines_removed:
            fired.append("trailing-blank-lines")
        if self.final_newline_added:
            fired.append("final-newline")
        if self.final_newline_removed:
            fired.append("whitespace-only-file")
        return fired


class FixOutcome(BaseModel):
    """Result of analyzing the bytes of one file"""
    model_config = ConfigDict(frozen=True)

    kind: OutcomeKind
    corrected: Optional[bytes] = Field(default=None, description="Corrected content, only for CHANGED")
    summary: ChangeSummary = Field(default_factory=ChangeSummary)
    diagnostics: Tuple[Diagnostic, ...] = Field(default=())

    @property
    def changed(self) -> bool:
        return self.kind is OutcomeKind.CHANGED

    @classmethod
    def unchanged(cls, diagnostics=()) -> "FixOutcome":
        return cls(kind=OutcomeKind.UNCHANGED, diagnostics=tuple(diagnostics))

    @classmethod
    def binary(cls) -> "FixOutcome":
        return cls(kind=OutcomeKind.BINARY)

    def without_content(self) -> "FixOutcome":
        """Copy of this outcome that no longer holds the corrected bytes"""
        if self.corrected is None:
            return self
        return self.model_copy(update={"corrected": None})


class FileError(BaseModel):
    """A read or write failure recorded against one file"""
    model_config = ConfigDict(frozen=True)

    path: str
    kind: str = Field(description="'read' or 'write'")
    message: str


class FileResult(BaseModel):
    """Per-file record produced by the batch runner"""
    model_config = ConfigDict(frozen=True)

    path: str
    status: FileStatus
    outcome: Optional[FixOutcome] = None
    written: bool = Field(default=False, description="Corrected content was written back")
    error: Optional[FileError] = None


class BatchResult(BaseModel):
    """Aggregate over all files of a run"""
    model_config = ConfigDict(frozen=True)

    check_only: bool = False
    files_scanned: int = 0
    files_changed: int = 0
    files_unchanged: int = 0
    files_binary: int = 0
    files_errored: int = 0
    files_written: int = 0
    lines_changed: int = 0
    results: Tuple[FileResult, ...] = Field(default=())
    errors: Tuple[FileError, ...] = Field(default=())

    @property
    def any_changes(self) -> bool:
        return self.files_changed > 0

    @property
    def first_error(self) -> Optional[FileError]:
        return self.errors[0] if self.errors else None

    @property
    def status(self) -> str:
        if self.errors or (self.check_only and self.any_changes):
            return "fail"
        return "pass"

    @property
    def passed(self) -> bool:
        return self.status == "pass"
