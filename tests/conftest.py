"""
Shared fixtures: published example input and scrambled wirings.
"""

import numpy as np
import pytest

from segdecode.segments import SEGMENT_SET_DIGIT_PAIRS, SEGMENTS, SegmentSet


EXAMPLE_LINE = (
    "acedgfb cdfbe gcdfa fbcad dab cefabd cdfgeb eafb cagedb ab | "
    "cdfeb fcadb cdfeb cdbaf"
)

EXAMPLE_INPUT = """\
be cfbegad cbdgef fgaecd cgeb fdcge agebfd fecdb fabcd edb | fdgacbe cefdb cefbgd gcbe
edbfga begcd cbg gc gcadebf fbgde acbgfd abcde gfcbed gfec | fcgedb cgb dgebacf gc
fgaebd cg bdaec gdafb agbcfd gdcbef bgcad gfac gcb cdgabef | cg cg fdcagb cbg
fbegcd cbd adcefb dageb afcb bc aefdc ecdab fgdeca fcdbega | efabcd cedba gadfec cb
aecbfdg fbg gf bafeg dbefa fcge gcbea fcaegb dgceab fcbdga | gecf egdcabf bgf bfgea
fgeab ca afcebg bdacfeg cfaedg gcfdb baec bfadeg bafgc acf | gebdcfa ecba ca fadegcb
dbcfg fgd bdegcaf fgec aegbdf ecdfab fbedc dacgb gdcebf gf | cefg dcbef fcge gbcadfe
bdfegc cbegaf gecbf dfcage bdacg ed bedf ced adcbefg gebcd | ed bcgafe cdgba cbgef
egadfb cdbfeg cegd fecab cgb gbdefca cg fgcdab egfdb bfceg | gbdfcae bgc cg cgb
gcafb gcf dcaebfg ecagb gf abcdeg gaef cafbge fdbac fegbdc | fgae cfgab fg bagce
"""

EXAMPLE_VALUES = [8394, 9781, 1197, 9361, 4873, 8418, 4548, 1625, 8717, 4315]


def random_wiring(seed):
    """Canonical segment -> scrambled segment, drawn from a seeded generator."""
    rng = np.random.default_rng(seed)
    permutation = rng.permutation(len(SEGMENTS))
    return {SEGMENTS[i]: SEGMENTS[int(j)] for i, j in enumerate(permutation)}


def scramble(pattern, wiring):
    return SegmentSet(frozenset(wiring[s] for s in pattern))


def scrambled_samples(wiring):
    """(scrambled pattern, digit) for all ten digits."""
    return [(scramble(pattern, wiring), digit) for pattern, digit in SEGMENT_SET_DIGIT_PAIRS]


@pytest.fixture
def identity_wiring():
    return {s: s for s in SEGMENTS}


@pytest.fixture
def example_input_file(tmp_path):
    path = tmp_path / "input.txt"
    path.write_text(EXAMPLE_INPUT, encoding="utf-8")
    return path
