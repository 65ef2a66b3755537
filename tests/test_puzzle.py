"""
Tests for the part 1 / part 2 answers
"""

import pytest

from conftest import EXAMPLE_INPUT, EXAMPLE_LINE, EXAMPLE_VALUES
from segdecode.entries import load_entries, parse_entry
from segdecode.errors import UndecodablePatternError, UnresolvableMappingError
from segdecode.puzzle import EASY_DIGITS, part1, part2, solve_entries, solve_entry


class TestSolveEntry:
    def test_single_entry(self):
        solution = solve_entry(parse_entry(EXAMPLE_LINE))
        assert solution.digits == (5, 3, 5, 3)
        assert solution.value == 5353
        assert solution.easy_count == 0

    def test_value_comes_from_decoder(self):
        entry = parse_entry(EXAMPLE_LINE.split("|")[0] + "| ab dab eafb acedgfb")
        solution = solve_entry(entry)
        assert solution.digits == (1, 7, 4, 8)
        assert solution.value == solution.decoder.value(entry.outputs) == 1748
        assert solution.easy_count == 4

    def test_error_carries_line_number(self):
        # Only nine samples, 7 missing
        line = "acedgfb cdfbe gcdfa fbcad cefabd cdfgeb eafb cagedb ab | ab"
        with pytest.raises(UnresolvableMappingError) as excinfo:
            solve_entry(parse_entry(line, line_number=4))
        assert excinfo.value.line_number == 4

    def test_undecodable_output(self):
        line = EXAMPLE_LINE.split("|")[0] + "| ab bd"
        with pytest.raises(UndecodablePatternError) as excinfo:
            solve_entry(parse_entry(line, line_number=2))
        assert excinfo.value.pattern == "bd"
        assert str(excinfo.value).startswith("line 2:")


class TestAnswers:
    def test_example_input(self):
        solutions = solve_entries(load_entries(EXAMPLE_INPUT))
        assert [s.value for s in solutions] == EXAMPLE_VALUES
        assert part1(solutions) == 26
        assert part2(solutions) == 61229

    def test_easy_digits(self):
        assert EASY_DIGITS == {1, 4, 7, 8}

    def test_no_entries(self):
        assert part1([]) == 0
        assert part2([]) == 0

    def test_fail_fast(self):
        entries = load_entries(EXAMPLE_LINE + "\n" + "ab cd | ab\n" + EXAMPLE_LINE)
        with pytest.raises(UnresolvableMappingError) as excinfo:
            solve_entries(entries)
        assert excinfo.value.line_number == 2
