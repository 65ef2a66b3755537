"""
Segment Sets + Reference Table

A segment set is an unordered collection of seven-segment display elements
(letters a..g). It is used both for observed, scrambled patterns and for the
canonical pattern of each digit.

Segment sets convert to and from length-7 boolean NumPy masks indexed by the
position of the letter in SEGMENTS, which is what the divergent mapping and the
decoder operate on.

The reference table is fixed, process-wide and read-only:
  - DIGITS_BY_SEGMENT_SET: canonical pattern -> digit
  - SEGMENT_SETS_BY_LENGTH: pattern length -> canonical patterns of that length
"""

import hashlib
from dataclasses import dataclass
from types import MappingProxyType
from typing import FrozenSet, Iterator, List, Mapping, Optional, Tuple

import numpy as np

from segdecode.errors import (
    InvalidLengthError,
    MalformedEntryError,
    UndecodablePatternError,
)


Segment = str
Digit = int

# All possible segments, in mask index order
SEGMENTS = "abcdefg"
NUM_SEGMENTS = len(SEGMENTS)
SEGMENT_INDEX = {segment: i for i, segment in enumerate(SEGMENTS)}


@dataclass(frozen=True)
class SegmentSet:
    """Immutable set of segments; equal when the contents are equal."""

    segments: FrozenSet[Segment]

    @classmethod
    def parse(cls, text: str) -> "SegmentSet":
        """
        Parse a contiguous run of segment letters.

        Args:
            text: Pattern such as "acedgfb" (letter order is irrelevant)

        Returns:
            SegmentSet holding the letters of text

        Raises:
            MalformedEntryError: empty text, a letter outside a..g, or a
                letter given twice
        """
        if not text:
            raise MalformedEntryError("empty pattern", pattern=text)

        invalid = sorted(set(text) - set(SEGMENTS))
        if invalid:
            raise MalformedEntryError(
                f"invalid segment {invalid[0]!r} in pattern: {text}",
                pattern=text,
            )

        segments = frozenset(text)
        if len(segments) != len(text):
            raise MalformedEntryError(
                f"repeated segment in pattern: {text}",
                pattern=text,
            )

        return cls(segments)

    @classmethod
    def from_mask(cls, mask: np.ndarray) -> "SegmentSet":
        """Build from a length-7 boolean mask."""
        mask = np.asarray(mask, dtype=bool)
        return cls(frozenset(SEGMENTS[i] for i in np.flatnonzero(mask)))

    def mask(self) -> np.ndarray:
        """Length-7 boolean mask with True at each present segment."""
        mask = np.zeros(NUM_SEGMENTS, dtype=bool)
        mask[np.array(self.indices(), dtype=np.intp)] = True
        return mask

    def indices(self) -> List[int]:
        """Sorted mask indices of the present segments."""
        return sorted(SEGMENT_INDEX[s] for s in self.segments)

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(sorted(self.segments))

    def __contains__(self, segment: object) -> bool:
        return segment in self.segments

    def __str__(self) -> str:
        return "".join(sorted(self.segments))


# Pattern-digit pairs ordered by pattern length. Within one length this order
# is the order in which the decoder builder tries canonical patterns.
SEGMENT_SET_DIGIT_PAIRS: Tuple[Tuple[SegmentSet, Digit], ...] = tuple(
    (SegmentSet.parse(pattern), digit)
    for pattern, digit in [
        ("cf", 1),
        ("acf", 7),
        ("bcdf", 4),
        ("acdeg", 2),
        ("acdfg", 3),
        ("abdfg", 5),
        ("abcefg", 0),
        ("abdefg", 6),
        ("abcdfg", 9),
        ("abcdefg", 8),
    ]
)


def _group_by_length(
    pairs: Tuple[Tuple[SegmentSet, Digit], ...],
) -> Mapping[int, Tuple[SegmentSet, ...]]:
    grouped = {}
    for segment_set, _ in pairs:
        grouped.setdefault(len(segment_set), []).append(segment_set)
    return MappingProxyType({length: tuple(sets) for length, sets in grouped.items()})


DIGITS_BY_SEGMENT_SET: Mapping[SegmentSet, Digit] = MappingProxyType(
    dict(SEGMENT_SET_DIGIT_PAIRS)
)

SEGMENT_SETS_BY_LENGTH: Mapping[int, Tuple[SegmentSet, ...]] = _group_by_length(
    SEGMENT_SET_DIGIT_PAIRS
)


def canonical_patterns(length: int, pattern: Optional[SegmentSet] = None) -> Tuple[SegmentSet, ...]:
    """
    Return the canonical patterns with the given number of segments.

    Args:
        length: Number of lit segments
        pattern: Observed pattern being matched (for the error message only)

    Returns:
        Canonical patterns in builder trial order

    Raises:
        InvalidLengthError: if no digit is drawn with that many segments
    """
    patterns = SEGMENT_SETS_BY_LENGTH.get(length)
    if patterns is None:
        if pattern is not None:
            raise InvalidLengthError(
                f"invalid pattern: {pattern} (no digit has {length} segments)",
                pattern=str(pattern),
            )
        raise InvalidLengthError(f"no digit has {length} segments")
    return patterns


def digit_for(pattern: SegmentSet) -> Digit:
    """Look up the digit of a canonical pattern."""
    digit = DIGITS_BY_SEGMENT_SET.get(pattern)
    if digit is None:
        raise UndecodablePatternError(
            f"not a canonical digit pattern: {pattern}",
            pattern=str(pattern),
        )
    return digit


def reference_table_hash() -> str:
    """
    Compute a deterministic SHA256 hash of the reference table.

    Pairs are serialized in table order as "digit:pattern;".

    Returns:
        Hex SHA256 hash string (64 chars)
    """
    parts = []
    for segment_set, digit in SEGMENT_SET_DIGIT_PAIRS:
        parts.append(str(digit))
        parts.append(':')
        parts.append(str(segment_set))
        parts.append(';')

    serialized = ''.join(parts).encode('utf-8')
    return hashlib.sha256(serialized).hexdigest()
