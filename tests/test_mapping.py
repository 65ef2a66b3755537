"""
Tests for the divergent mapping
"""

import numpy as np
import pytest

from segdecode.errors import UnresolvableMappingError
from segdecode.mapping import DivergentMapping
from segdecode.segments import SegmentSet


def ss(text):
    return SegmentSet.parse(text)


def after_one_seven_four():
    dsm = DivergentMapping.unconstrained()
    for sample in ["cf", "acf", "bcdf"]:
        dsm = dsm.narrowed(ss(sample), ss(sample))
        dsm.reduce()
    return dsm


class TestDivergentMapping:
    def test_unconstrained(self):
        dsm = DivergentMapping.unconstrained()
        assert dsm.sizes().tolist() == [7] * 7
        assert dsm.is_valid()
        assert dsm.try_converge() is None

    def test_bad_shape(self):
        with pytest.raises(ValueError):
            DivergentMapping(np.ones((7, 6), dtype=bool))

    def test_narrowed_leaves_self_unchanged(self):
        dsm = DivergentMapping.unconstrained()
        trial = dsm.narrowed(ss("ab"), ss("cf"))
        assert str(trial.candidates("a")) == "cf"
        assert str(trial.candidates("b")) == "cf"
        assert str(trial.candidates("c")) == "abcdefg"
        assert str(dsm.candidates("a")) == "abcdefg"

    def test_reduce_removes_semi_converged(self):
        dsm = DivergentMapping.unconstrained().narrowed(ss("ab"), ss("cf"))
        sweeps = dsm.reduce()
        assert sweeps >= 1
        for segment in "cdefg":
            assert str(dsm.candidates(segment)) == "abdeg"
        assert str(dsm.candidates("a")) == "cf"

    def test_reduce_fixed_point(self):
        dsm = after_one_seven_four()
        assert dsm.reduce() == 0
        assert str(dsm.candidates("a")) == "a"
        assert str(dsm.candidates("b")) == "bd"
        assert str(dsm.candidates("d")) == "bd"
        assert str(dsm.candidates("c")) == "cf"
        assert str(dsm.candidates("e")) == "eg"
        assert str(dsm.candidates("g")) == "eg"

    def test_empty_candidates_invalid(self):
        dsm = DivergentMapping.unconstrained().narrowed(ss("ab"), ss("cf"))
        assert not dsm.narrowed(ss("a"), ss("d")).is_valid()

    def test_shared_singleton_invalid(self):
        # After 1/7/4, the "3" pattern cannot be read as "2": c and f both become {c}
        dsm = after_one_seven_four()
        assert not dsm.narrowed(ss("acdfg"), ss("acdeg")).is_valid()
        assert dsm.narrowed(ss("acdfg"), ss("acdfg")).is_valid()

    def test_converges_to_identity(self):
        dsm = after_one_seven_four()
        for sample in ["acdeg", "abdfg"]:
            dsm = dsm.narrowed(ss(sample), ss(sample))
            dsm.reduce()
        assert dsm.is_converged
        assert dsm.try_converge() == {s: s for s in "abcdefg"}

    def test_sweep_bound(self):
        dsm = DivergentMapping.unconstrained().narrowed(ss("ab"), ss("cf"))
        with pytest.raises(UnresolvableMappingError):
            dsm.reduce(max_sweeps=1)

    def test_equality(self):
        assert after_one_seven_four() == after_one_seven_four()
        assert after_one_seven_four() != DivergentMapping.unconstrained()
