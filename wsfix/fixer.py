"""
File whitespace fixer.

This module holds the pure analysis step: given the raw bytes of one file and
the resolved options it decides whether the file is text or binary, computes
the corrected bytes and reports what had to change. Nothing here touches the
filesystem, so the rules can be exercised directly on byte strings.
"""

# Standard library imports
from typing import List, NamedTuple, Tuple

# Local imports
from .models import ChangeSummary, Diagnostic, FixOutcome, Options, OutcomeKind
from .modeline import ModelineSettings, apply_modeline, find_modeline

HORIZONTAL_WHITESPACE = b" \t"
NUL = b"\x00"


class _Line(NamedTuple):
    number: int
    content: bytes
    terminator: bytes
    trailing_whitespace: bool
    stray_cr: bool


def is_binary(data: bytes) -> bool:
    """A single NUL byte anywhere marks the file as binary."""
    return NUL in data


def split_lines(data: bytes) -> List[Tuple[bytes, bytes]]:
    """
    Split content into (content, terminator) pairs.

    Both LF and CRLF terminate a line. The last pair has an empty terminator
    when the data does not end with a newline. Empty data has no lines.
    """
    pieces = data.split(b"\n")
    tail = pieces.pop()
    lines = []
    for piece in pieces:
        if piece.endswith(b"\r"):
            lines.append((piece[:-1], b"\r\n"))
        else:
            lines.append((piece, b"\n"))
    if tail:
        lines.append((tail, b""))
    return lines


def strip_line(content: bytes) -> Tuple[bytes, bool, bool]:
    """
    Strip trailing spaces and tabs from a line's content.

    A carriage return left at the end of the content (a bare CR before end of
    file, or CR CR LF) is a broken terminator rather than content and goes too.

    Returns:
        Tuple of (stripped content, had trailing whitespace, had stray CR)
    """
    trailing = stray_cr = False
    while True:
        stripped = content.rstrip(HORIZONTAL_WHITESPACE)
        if stripped != content:
            trailing = True
        if not stripped.endswith(b"\r"):
            return stripped, trailing, stray_cr
        stray_cr = True
        content = stripped.rstrip(b"\r")


def _ending_label(terminator: bytes) -> str:
    return "CRLF" if terminator == b"\r\n" else "LF"


def _display_width(content: bytes, tab_size: int) -> int:
    text = content.decode("utf-8", errors="replace")
    return len(text) + text.count("\t") * (tab_size - 1)


def _tab_settings(data: bytes, options: Options) -> ModelineSettings:
    if not options.use_modeline:
        return ModelineSettings(options.tab_size, False)
    return apply_modeline(options.tab_size, find_modeline(data))


def _advisories(lines: List[_Line], data: bytes, options: Options) -> List[Diagnostic]:
    """Findings that are reported but never fixed."""
    if options.line_length is None and not options.check_tabs and not options.use_modeline:
        return []

    settings = _tab_settings(data, options)
    found = []
    for line in lines:
        if settings.expand_tabs and b"\t" in line.content:
            found.append(Diagnostic(
                line=line.number, message="tab character but modeline requests expandtab", advisory=True
            ))
        elif options.check_tabs and b"\t" in line.content.lstrip(b"\t"):
            found.append(Diagnostic(line=line.number, message="tab after other characters", advisory=True))

        if options.line_length is not None:
            width = _display_width(line.content, settings.tab_size)
            if width > options.line_length:
                found.append(Diagnostic(
                    line=line.number,
                    message=f"line too long ({width} > {options.line_length} columns)",
                    advisory=True,
                ))
    return found


def analyze(data: bytes, options: Options) -> FixOutcome:
    """
    Analyze one file's bytes and compute its corrected form.

    Args:
        data: Raw file content, with no assumed encoding
        options: Resolved options for the run

    Returns:
        FixOutcome that is BINARY for content containing a NUL byte, UNCHANGED
        when the content already has the correct form, and CHANGED with the
        corrected bytes and a summary otherwise
    """
    if is_binary(data):
        return FixOutcome.binary()

    target: bytes = options.line_ending.terminator
    expected = options.line_ending.label

    lines = []
    for number, (content, terminator) in enumerate(split_lines(data), start=1):
        stripped, trailing, stray_cr = strip_line(content)
        lines.append(_Line(number, stripped, terminator, trailing, stray_cr))

    # Trailing blank lines are dropped entirely
    keep = len(lines)
    while keep and not lines[keep - 1].content:
        keep -= 1
    kept, dropped = lines[:keep], lines[keep:]

    diagnostics = []
    trailing_whitespace = line_endings = 0
    for line in kept:
        if line.trailing_whitespace:
            trailing_whitespace += 1
            diagnostics.append(Diagnostic(line=line.number, message="trailing whitespace"))
        if line.stray_cr:
            line_endings += 1
            diagnostics.append(Diagnostic(line=line.number, message="stray carriage return at end of line"))
        if line.terminator and line.terminator != target:
            line_endings += 1
            diagnostics.append(Diagnostic(
                line=line.number,
                message=f"{_ending_label(line.terminator)} line ending, {expected} expected",
            ))

    final_newline_added = bool(kept) and not kept[-1].terminator
    if final_newline_added:
        diagnostics.append(Diagnostic(line=kept[-1].number, message="no newline at end of file"))
    if dropped:
        count = len(dropped)
        diagnostics.append(Diagnostic(
            line=dropped[0].number,
            message=f"{count} trailing blank line{'s' if count != 1 else ''} at end of file",
        ))

    diagnostics.extend(_advisories(kept, data, options))
    diagnostics.sort(key=lambda d: (d.line is None, d.line or 0))

    corrected = b"".join(line.content + target for line in kept)
    if corrected == data:
        return FixOutcome.unchanged(diagnostics)

    summary = ChangeSummary(
        trailing_whitespace=trailing_whitespace,
        line_endings=line_endings,
        blank_lines_removed=len(dropped),
        final_newline_added=final_newline_added,
        final_newline_removed=not kept and bool(data),
    )
    return FixOutcome(
        kind=OutcomeKind.CHANGED,
        corrected=corrected,
        summary=summary,
        diagnostics=tuple(diagnostics),
    )


def fix(data: bytes, options: Options) -> bytes:
    """Return the corrected content, or the input itself when nothing changes."""
    outcome = analyze(data, options)
    return outcome.corrected if outcome.changed else data
