"""
Puzzle input: one entry per line.

    <sample patterns> | <output patterns>

Patterns on each side are separated by whitespace. Blank lines are skipped.
"""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from segdecode.errors import DecodeError, MalformedEntryError
from segdecode.segments import SegmentSet

SEPARATOR = "|"


@dataclass(frozen=True)
class Entry:
    samples: Tuple[SegmentSet, ...]
    outputs: Tuple[SegmentSet, ...]
    line_number: int = 0


def _parse_patterns(text: str, side: str, line_number: int) -> Tuple[SegmentSet, ...]:
    tokens = text.split()
    if not tokens:
        raise MalformedEntryError(f"no {side} patterns", line_number=line_number)
    try:
        return tuple(SegmentSet.parse(token) for token in tokens)
    except DecodeError as e:
        raise e.with_line(line_number)


def parse_entry(line: str, line_number: int = 0) -> Entry:
    """
    Parse one input line.

    Args:
        line: "<samples> | <outputs>"
        line_number: 1-based position in the input, for error messages

    Returns:
        Entry with its sample and output patterns in input order

    Raises:
        MalformedEntryError: separator missing or repeated, a side empty, or
            a pattern with characters outside a..g
    """
    parts = line.split(SEPARATOR)
    if len(parts) != 2:
        raise MalformedEntryError(
            f"bad input: expected one '{SEPARATOR}' separator in {line.strip()!r}",
            line_number=line_number,
        )

    samples_text, outputs_text = parts
    samples = _parse_patterns(samples_text, "sample", line_number)
    outputs = _parse_patterns(outputs_text, "output", line_number)

    return Entry(samples=samples, outputs=outputs, line_number=line_number)


def load_entries(text: str) -> List[Entry]:
    """Parse every non-blank line of text, keeping input order."""
    return [
        parse_entry(line, line_number)
        for line_number, line in enumerate(text.splitlines(), start=1)
        if line.strip()
    ]


def read_input(path: Optional[Path] = None) -> str:
    """
    Read the whole puzzle input.

    Args:
        path: Input file; None or "-" reads standard input

    Returns:
        Input text

    Raises:
        MalformedEntryError: the input is not valid UTF-8
    """
    try:
        if path is None or str(path) == "-":
            return sys.stdin.read()

        with open(path, 'r', encoding='utf-8') as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise MalformedEntryError(
            f"input is not valid UTF-8: byte {e.object[e.start:e.start + 1]!r} "
            f"at offset {e.start}"
        ) from None
