"""Tests for the limb storage buffer."""

from __future__ import annotations

import pytest

import limbs
from errors import AllocationFailure, ErrorKind
from limbs import LIMB_BASE, LIMB_MASK, LimbSequence


class TestConstruction:

    def test_default_is_single_zero_limb(self):
        seq = LimbSequence()
        assert list(seq) == [0]
        assert len(seq) == 1
        assert seq.is_zero()

    def test_empty_iterable_becomes_zero(self):
        assert list(LimbSequence([])) == [0]

    def test_explicit_limbs_kept_in_order(self):
        seq = LimbSequence([5, 6, 7])
        assert [seq[0], seq[1], seq[2]] == [5, 6, 7]

    def test_reserve_does_not_change_length(self):
        seq = LimbSequence.zero(reserve=16)
        assert len(seq) == 1
        assert seq.capacity >= 16

    def test_filled_is_zeroed(self):
        seq = LimbSequence.filled(4)
        assert list(seq) == [0, 0, 0, 0]

    def test_filled_never_empty(self):
        assert len(LimbSequence.filled(0)) == 1

    @pytest.mark.parametrize("value", [0, 1, LIMB_MASK, LIMB_BASE, LIMB_BASE**3 + 42])
    def test_from_int_round_trip(self, value):
        assert LimbSequence.from_int(value).to_int() == value

    def test_from_int_splits_least_significant_first(self):
        assert list(LimbSequence.from_int(LIMB_BASE + 2)) == [2, 1]

    def test_from_int_rejects_negative(self):
        with pytest.raises(ValueError):
            LimbSequence.from_int(-1)


class TestLimbRange:

    def test_max_limb_accepted(self):
        seq = LimbSequence([LIMB_MASK])
        assert seq[0] == LIMB_MASK

    @pytest.mark.parametrize("bad", [-1, LIMB_BASE])
    def test_out_of_range_rejected_on_construction(self, bad):
        with pytest.raises(ValueError):
            LimbSequence([bad])

    @pytest.mark.parametrize("bad", [-1, LIMB_BASE])
    def test_out_of_range_rejected_on_set(self, bad):
        seq = LimbSequence([1])
        with pytest.raises(ValueError):
            seq[0] = bad

    @pytest.mark.parametrize("bad", [-1, LIMB_BASE])
    def test_out_of_range_rejected_on_append(self, bad):
        seq = LimbSequence([1])
        with pytest.raises(ValueError):
            seq.append(bad)


class TestIndexing:

    def test_index_past_length_raises(self):
        seq = LimbSequence.zero(reserve=8)
        with pytest.raises(IndexError):
            seq[1]

    def test_negative_index_counts_from_end(self):
        seq = LimbSequence([1, 2, 3])
        assert seq[-1] == 3

    def test_set_past_length_raises(self):
        seq = LimbSequence([1])
        with pytest.raises(IndexError):
            seq[1] = 5


class TestGrowth:

    def test_append_extends_length(self):
        seq = LimbSequence([1])
        seq.append(2)
        assert list(seq) == [1, 2]

    def test_capacity_doubles(self):
        seq = LimbSequence([1])
        assert seq.capacity == 1
        seq.append(2)
        assert seq.capacity == 2
        seq.append(3)
        assert seq.capacity == 4
        seq.append(4)
        assert seq.capacity == 4

    def test_many_appends(self):
        seq = LimbSequence([0])
        for i in range(1, 1000):
            seq.append(i)
        assert len(seq) == 1000
        assert seq[999] == 999
        assert seq.capacity >= 1000


class TestTrim:

    def test_trim_drops_high_zeros(self):
        seq = LimbSequence([1, 2, 0, 0])
        seq.trim()
        assert list(seq) == [1, 2]

    def test_trim_keeps_single_zero(self):
        seq = LimbSequence([0, 0, 0])
        seq.trim()
        assert list(seq) == [0]
        assert seq.is_zero()

    def test_trim_keeps_inner_zeros(self):
        seq = LimbSequence([0, 0, 9])
        seq.trim()
        assert list(seq) == [0, 0, 9]

    def test_append_after_trim(self):
        seq = LimbSequence([7, 0, 0])
        seq.trim()
        seq.append(3)
        assert list(seq) == [7, 3]


class TestCopy:

    def test_copy_is_deep(self):
        seq = LimbSequence([1, 2])
        dup = seq.copy()
        dup[0] = 99
        dup.append(5)
        assert list(seq) == [1, 2]
        assert list(dup) == [99, 2, 5]

    def test_equality_ignores_capacity(self):
        a = LimbSequence([1, 2], reserve=32)
        b = LimbSequence([1, 2])
        assert a == b

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(LimbSequence())


class _ExhaustedBuffer:
    """Buffer stand-in whose slices cannot be allocated."""

    def __getitem__(self, index):
        raise MemoryError


def _no_memory(*args, **kwargs):
    raise MemoryError


class TestAllocationFailure:

    def test_construction(self, monkeypatch):
        monkeypatch.setattr(limbs, "array", _no_memory)
        with pytest.raises(AllocationFailure) as info:
            LimbSequence(reserve=8)
        assert isinstance(info.value, MemoryError)
        assert info.value.kind is ErrorKind.ALLOCATION_FAILURE
        assert info.value.limbs == 8

    def test_growth(self, monkeypatch):
        seq = LimbSequence([1])
        monkeypatch.setattr(limbs, "array", _no_memory)
        with pytest.raises(AllocationFailure):
            seq.append(2)
        assert list(seq) == [1]

    def test_copy(self):
        seq = LimbSequence([1, 2, 3])
        seq._buf = _ExhaustedBuffer()
        with pytest.raises(AllocationFailure) as info:
            seq.copy()
        assert info.value.limbs == 3

    def test_cause_is_kept(self, monkeypatch):
        monkeypatch.setattr(limbs, "array", _no_memory)
        with pytest.raises(AllocationFailure) as info:
            LimbSequence.zero(reserve=4)
        assert isinstance(info.value.__cause__, MemoryError)
