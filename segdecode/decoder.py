"""
Decoder Builder + Decoder

Building the decoder reduces a one-to-many map (each scrambled segment to
every segment it could be) to a one-to-one map (each scrambled segment to
its canonical segment).

Build order:
  1. Sort samples by ascending length; 1, 7 and 4 are unambiguous by length
     and prune the most.
  2. For each sample, try the canonical patterns of the same length in table
     order and keep the first narrowing that stays valid.
  3. Reduce to a fixed point, then try to read off the bijection.
"""

import hashlib
import logging
from types import MappingProxyType
from typing import Iterable, List, Mapping, Sequence

import numpy as np

from segdecode.errors import UndecodablePatternError, UnresolvableMappingError
from segdecode.mapping import DivergentMapping
from segdecode.segments import (
    NUM_SEGMENTS,
    SEGMENT_INDEX,
    Digit,
    Segment,
    SegmentSet,
    canonical_patterns,
    digit_for,
)

logger = logging.getLogger(__name__)


class Decoder:
    """Converged one-to-one wiring from scrambled to canonical segments."""

    def __init__(self, mapping: Mapping[Segment, Segment], samples_consumed: int = 0):
        if len(set(mapping.values())) != len(mapping):
            raise ValueError(f"segment mapping is not one-to-one: {dict(mapping)}")

        self._mapping = MappingProxyType(dict(mapping))
        self.samples_consumed = samples_consumed

        # Permutation vector: real index -> canonical index, -1 where unmapped
        self._permutation = np.full(NUM_SEGMENTS, -1, dtype=np.int64)
        for real, canonical in self._mapping.items():
            self._permutation[SEGMENT_INDEX[real]] = SEGMENT_INDEX[canonical]

    @classmethod
    def build(cls, samples: Sequence[SegmentSet]) -> "Decoder":
        """
        Resolve the wiring from an entry's sample patterns.

        Args:
            samples: Observed patterns, normally one per digit in any order

        Returns:
            Decoder for the wiring the samples were drawn with

        Raises:
            InvalidLengthError: a sample has no canonical pattern of its length
            UnresolvableMappingError: the samples contradict each other or do
                not pin down every segment
        """
        ordered = sorted(samples, key=len)

        dsm = DivergentMapping.unconstrained()

        for consumed, sample in enumerate(ordered, start=1):
            possible_matches = canonical_patterns(len(sample), sample)

            for possible_match in possible_matches:
                trial = dsm.narrowed(sample, possible_match)
                if trial.is_valid():
                    dsm = trial
                    logger.debug(f"sample {sample} fits {possible_match}")
                    break
            else:
                raise UnresolvableMappingError(
                    f"could not converge signal patterns: no digit fits {sample}",
                    pattern=str(sample),
                )

            sweeps = dsm.reduce()
            if not dsm.is_valid():
                raise UnresolvableMappingError(
                    f"could not converge signal patterns: contradiction after {sample}",
                    pattern=str(sample),
                )
            logger.debug(f"reduced in {sweeps} sweeps: {dsm.describe()}")

            mapping = dsm.try_converge()
            if mapping is not None:
                logger.debug(f"converged after {consumed} of {len(ordered)} samples")
                return cls(mapping, samples_consumed=consumed)

        raise UnresolvableMappingError(
            f"could not converge signal patterns: {dsm.describe()}"
        )

    @property
    def mapping(self) -> Mapping[Segment, Segment]:
        return self._mapping

    def decode(self, encoded: SegmentSet) -> Digit:
        """
        Translate a scrambled pattern into its digit.

        Args:
            encoded: Pattern as observed on the scrambled display

        Returns:
            Digit 0-9

        Raises:
            UndecodablePatternError: a segment has no mapping, or the decoded
                pattern is not the canonical pattern of any digit
        """
        decoded = set()
        for segment in encoded:
            canonical = self._mapping.get(segment)
            if canonical is None:
                raise UndecodablePatternError(
                    f"invalid segment: {segment} in pattern {encoded}",
                    pattern=str(encoded),
                )
            decoded.add(canonical)

        try:
            return digit_for(SegmentSet(frozenset(decoded)))
        except UndecodablePatternError:
            raise UndecodablePatternError(
                f"could not decode pattern: {encoded}",
                pattern=str(encoded),
            ) from None

    def decode_all(self, patterns: Iterable[SegmentSet]) -> List[Digit]:
        return [self.decode(pattern) for pattern in patterns]

    def value(self, patterns: Iterable[SegmentSet]) -> int:
        """Number formed by the decoded digits, most significant first."""
        output = 0
        for digit in self.decode_all(patterns):
            output = output * 10 + digit
        return output

    def mapping_hash(self) -> str:
        """
        Compute a deterministic SHA256 hash of the wiring.

        Returns:
            Hex SHA256 hash string (64 chars)
        """
        return hashlib.sha256(self._permutation.tobytes()).hexdigest()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Decoder):
            return NotImplemented
        return dict(self._mapping) == dict(other._mapping)

    def __repr__(self) -> str:
        wiring = " ".join(f"{r}->{c}" for r, c in sorted(self._mapping.items()))
        return f"Decoder({wiring})"
