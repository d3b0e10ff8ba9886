"""Limb storage for arbitrary-precision magnitudes.

A magnitude is held as a sequence of unsigned 32-bit words ("limbs") in
base 2**32, least significant limb first.  This module only knows how to
store, grow and index those words; all arithmetic lives in ``bigint``.

The buffer is a contiguous ``array.array`` with a logical length that is
tracked separately from its capacity.  Capacity doubles when an append
runs out of room, so appends are amortized O(1) and indexing is O(1).
"""
from __future__ import annotations

from array import array
from typing import Iterable, Iterator

from errors import AllocationFailure

LIMB_BITS = 32
LIMB_BASE = 1 << LIMB_BITS
LIMB_MASK = LIMB_BASE - 1

# "I" is 4 bytes on every mainstream platform; fall back to "L" otherwise.
_TYPECODE = "I" if array("I").itemsize == 4 else "L"


def _zeros(count: int) -> array:
    try:
        return array(_TYPECODE, bytes(count * array(_TYPECODE).itemsize))
    except MemoryError as exc:
        raise AllocationFailure(count) from exc


def _check_limb(value: int) -> int:
    if not 0 <= value <= LIMB_MASK:
        raise ValueError(f"limb {value} is outside [0, {LIMB_MASK}]")
    return value


class LimbSequence:
    """Growable buffer of 32-bit limbs, least significant first.

    A freshly built sequence always holds at least one limb.  Callers that
    build a value limb by limb can ``reserve`` capacity up front.
    """

    __slots__ = ("_buf", "_size")

    def __init__(self, limbs: Iterable[int] | None = None, reserve: int = 0) -> None:
        values = [0] if limbs is None else [_check_limb(v) for v in limbs]
        if not values:
            values = [0]
        self._buf = _zeros(max(len(values), reserve, 1))
        self._buf[: len(values)] = array(_TYPECODE, values)
        self._size = len(values)

    # -- constructors ---------------------------------------------------------

    @classmethod
    def zero(cls, reserve: int = 0) -> LimbSequence:
        return cls(reserve=reserve)

    @classmethod
    def filled(cls, count: int) -> LimbSequence:
        """A sequence of ``count`` zero limbs (at least one)."""
        seq = cls(reserve=count)
        seq._size = max(count, 1)
        return seq

    @classmethod
    def from_int(cls, value: int) -> LimbSequence:
        """Split a non-negative Python int into limbs."""
        if value < 0:
            raise ValueError("magnitude must be non-negative")
        limbs = []
        while True:
            limbs.append(value & LIMB_MASK)
            value >>= LIMB_BITS
            if not value:
                break
        return cls(limbs)

    # -- storage --------------------------------------------------------------

    @property
    def capacity(self) -> int:
        return len(self._buf)

    def reserve(self, capacity: int) -> None:
        """Make room for at least ``capacity`` limbs without changing length."""
        if capacity > len(self._buf):
            self._buf.extend(_zeros(capacity - len(self._buf)))

    def append(self, value: int) -> None:
        _check_limb(value)
        if self._size == len(self._buf):
            self.reserve(2 * len(self._buf))
        self._buf[self._size] = value
        self._size += 1

    def trim(self) -> None:
        """Drop high-order zero limbs, keeping at least one limb."""
        while self._size > 1 and self._buf[self._size - 1] == 0:
            self._size -= 1

    def copy(self) -> LimbSequence:
        dup = LimbSequence.__new__(LimbSequence)
        try:
            dup._buf = self._buf[: self._size]
        except MemoryError as exc:
            raise AllocationFailure(self._size) from exc
        dup._size = self._size
        return dup

    def is_zero(self) -> bool:
        return self._size == 1 and self._buf[0] == 0

    def to_int(self) -> int:
        value = 0
        for i in range(self._size - 1, -1, -1):
            value = (value << LIMB_BITS) | self._buf[i]
        return value

    # -- sequence protocol ----------------------------------------------------

    def __len__(self) -> int:
        return self._size

    def _index(self, index: int) -> int:
        if index < 0:
            index += self._size
        if not 0 <= index < self._size:
            raise IndexError(f"limb index {index} out of range")
        return index

    def __getitem__(self, index: int) -> int:
        return self._buf[self._index(index)]

    def __setitem__(self, index: int, value: int) -> None:
        self._buf[self._index(index)] = _check_limb(value)

    def __iter__(self) -> Iterator[int]:
        return iter(self._buf[: self._size])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LimbSequence):
            return NotImplemented
        return self._buf[: self._size] == other._buf[: other._size]

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"LimbSequence({list(self)!r})"
