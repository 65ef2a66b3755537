"""
Both puzzle answers over a list of entries.

  - part 1: how many decoded output digits are 1, 4, 7 or 8
  - part 2: sum of every entry's output value

One decoder is built per entry and shared by both parts.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Tuple

from segdecode.decoder import Decoder
from segdecode.entries import Entry
from segdecode.errors import DecodeError
from segdecode.segments import Digit

logger = logging.getLogger(__name__)

# Digits drawn with a segment count no other digit uses
EASY_DIGITS = frozenset({1, 4, 7, 8})


@dataclass(frozen=True)
class EntrySolution:
    entry: Entry
    decoder: Decoder
    digits: Tuple[Digit, ...]
    value: int

    @property
    def easy_count(self) -> int:
        return sum(1 for digit in self.digits if digit in EASY_DIGITS)


def solve_entry(entry: Entry) -> EntrySolution:
    """
    Build the entry's decoder and decode its outputs.

    Errors are re-raised with the entry's line number attached.
    """
    try:
        decoder = Decoder.build(entry.samples)
        digits = tuple(decoder.decode_all(entry.outputs))
        value = decoder.value(entry.outputs)
    except DecodeError as e:
        raise e.with_line(entry.line_number)

    return EntrySolution(entry=entry, decoder=decoder, digits=digits, value=value)


def solve_entries(entries: Iterable[Entry]) -> List[EntrySolution]:
    """Solve every entry in order, stopping at the first failure."""
    solutions = []
    for entry in entries:
        solution = solve_entry(entry)
        logger.debug(
            f"line {entry.line_number}: {''.join(map(str, solution.digits))} "
            f"({solution.decoder.samples_consumed} samples)"
        )
        solutions.append(solution)
    return solutions


def part1(solutions: Iterable[EntrySolution]) -> int:
    return sum(solution.easy_count for solution in solutions)


def part2(solutions: Iterable[EntrySolution]) -> int:
    return sum(solution.value for solution in solutions)
