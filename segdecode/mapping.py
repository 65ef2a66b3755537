"""
Divergent Mapping

Working hypothesis of the wiring: a 7x7 boolean candidate matrix where
row r is a real (scrambled) segment and column c is a canonical segment.
candidates[r, c] is True while real segment r could still be canonical c.

Lifecycle:
  unconstrained (all True) -> partially reduced -> converged (one True per
  row and per column) | contradiction (an empty row or a shared singleton)

Candidates are only ever removed. narrowed() returns a new mapping so a
rejected trial leaves the current one untouched; reduce() works in place.
"""

import logging
from typing import Dict, Optional

import numpy as np

from segdecode.errors import UnresolvableMappingError
from segdecode.segments import (
    NUM_SEGMENTS,
    SEGMENT_INDEX,
    SEGMENTS,
    Segment,
    SegmentSet,
)

logger = logging.getLogger(__name__)

# Each productive sweep clears at least one of the 7x7 cells, plus one final
# sweep that observes the fixed point.
MAX_REDUCTION_SWEEPS = NUM_SEGMENTS * NUM_SEGMENTS + 1


class DivergentMapping:
    """Real segment -> set of canonical segments it may still represent."""

    def __init__(self, candidates: np.ndarray):
        candidates = np.array(candidates, dtype=bool)
        if candidates.shape != (NUM_SEGMENTS, NUM_SEGMENTS):
            raise ValueError(
                f"candidate matrix must be {NUM_SEGMENTS}x{NUM_SEGMENTS}, "
                f"got {candidates.shape}"
            )
        self._candidates = candidates

    @classmethod
    def unconstrained(cls) -> "DivergentMapping":
        """Every real segment may be any canonical segment."""
        return cls(np.ones((NUM_SEGMENTS, NUM_SEGMENTS), dtype=bool))

    def candidates(self, segment: Segment) -> SegmentSet:
        return SegmentSet.from_mask(self._candidates[SEGMENT_INDEX[segment]])

    def sizes(self) -> np.ndarray:
        """Number of candidates per real segment."""
        return self._candidates.sum(axis=1)

    def narrowed(self, sample: SegmentSet, pattern: SegmentSet) -> "DivergentMapping":
        """
        Trial narrowing of this mapping against one canonical pattern.

        Every real segment lit in sample is intersected with the canonical
        segments of pattern. Segments not in sample are left alone.

        Args:
            sample: Observed (scrambled) pattern
            pattern: Canonical pattern of the same length

        Returns:
            New DivergentMapping; self is not modified
        """
        trial = self._candidates.copy()
        rows = np.array(sample.indices(), dtype=np.intp)
        trial[rows] &= pattern.mask()
        return DivergentMapping(trial)

    def is_valid(self) -> bool:
        """
        Check that the mapping can still become a bijection.

        Invalid when any real segment has no candidates left, or when two
        real segments have converged on the same single canonical segment.
        """
        sizes = self.sizes()
        if np.any(sizes == 0):
            return False

        singletons = self._candidates[sizes == 1]
        return not np.any(singletons.sum(axis=0) > 1)

    def reduce_once(self) -> bool:
        """
        One elimination sweep.

        A candidate set S is semi-converged when exactly |S| real segments
        hold S: those segments account for all of S between them. S is then
        removed from every real segment whose set is not itself
        semi-converged.

        Returns:
            True if any candidate was removed
        """
        rows, counts = np.unique(self._candidates, axis=0, return_counts=True)
        semi_converged = rows[counts == rows.sum(axis=1)]
        if len(semi_converged) == 0:
            return False

        covered = np.any(semi_converged, axis=0)

        modified = False
        for r in range(NUM_SEGMENTS):
            row = self._candidates[r]
            if np.any(np.all(semi_converged == row, axis=1)):
                continue

            reduced = row & ~covered
            if not np.array_equal(reduced, row):
                self._candidates[r] = reduced
                modified = True

        return modified

    def reduce(self, max_sweeps: int = MAX_REDUCTION_SWEEPS) -> int:
        """
        Sweep until nothing changes.

        Args:
            max_sweeps: Upper bound on sweeps before giving up

        Returns:
            Number of productive sweeps

        Raises:
            UnresolvableMappingError: if no fixed point within max_sweeps
        """
        for sweep in range(max_sweeps):
            if not self.reduce_once():
                return sweep

        raise UnresolvableMappingError(
            f"could not converge signal patterns: reduction did not settle "
            f"within {max_sweeps} sweeps"
        )

    @property
    def is_converged(self) -> bool:
        return self.try_converge() is not None

    def try_converge(self) -> Optional[Dict[Segment, Segment]]:
        """
        Read off the wiring once every real segment has one candidate.

        Returns:
            Dict real segment -> canonical segment, or None while ambiguous
            or not one-to-one
        """
        if not np.all(self.sizes() == 1):
            return None

        columns = np.argmax(self._candidates, axis=1)
        if len(np.unique(columns)) != NUM_SEGMENTS:
            return None

        return {SEGMENTS[r]: SEGMENTS[int(c)] for r, c in enumerate(columns)}

    def describe(self) -> str:
        """Compact form such as 'a:acf b:bd ...' for logs."""
        return " ".join(f"{s}:{self.candidates(s)}" for s in SEGMENTS)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DivergentMapping):
            return NotImplemented
        return np.array_equal(self._candidates, other._candidates)

    def __repr__(self) -> str:
        return f"DivergentMapping({self.describe()})"
