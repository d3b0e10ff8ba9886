"""Arbitrary-precision signed integers.

A ``BigInteger`` is a sign plus a magnitude stored as 32-bit limbs (see
``limbs``).  Every operation validates its operands, works on magnitudes
through the shared helpers below, applies the sign rule and returns a new
value.  Operands are never mutated; where an algorithm needs an operand
with a different sign it derives a temporary value instead.

Algorithms are schoolbook: carry/borrow chains for addition and
subtraction, the O(n*m) product for multiplication, and repeated doubling
for division.  Decision branches carry the ids listed in
``contract.build_contract`` so white-box tests can be traced to them.
"""
from __future__ import annotations

from enum import Enum, IntEnum

from errors import DivisionByZeroError, NullInputError, ParseError
from limbs import LIMB_BASE, LIMB_BITS, LIMB_MASK, LimbSequence

DECIMAL_CHUNK_DIGITS = 9
DECIMAL_CHUNK_BASE = 10 ** DECIMAL_CHUNK_DIGITS

_WHITESPACE = " \t\n\r\v\f"
_DIGITS = "0123456789"


class Sign(Enum):
    POSITIVE = 1
    NEGATIVE = -1

    def negated(self) -> Sign:
        return Sign.NEGATIVE if self is Sign.POSITIVE else Sign.POSITIVE


class Ordering(IntEnum):
    LESS = -1
    EQUAL = 0
    GREATER = 1


# ---------------------------------------------------------------------------
# Magnitude helpers
#
# These work on LimbSequence values only and ignore signs.  Unless the name
# says "in_place" they leave their arguments untouched and return a fresh,
# trimmed sequence.
# ---------------------------------------------------------------------------

def _compare_magnitudes(a: LimbSequence, b: LimbSequence) -> int:
    """Return 1, 0 or -1 as |a| is greater than, equal to or less than |b|."""
    if len(a) != len(b):                                           # CMP-LENGTH
        return 1 if len(a) > len(b) else -1
    for i in range(len(a) - 1, -1, -1):
        if a[i] != b[i]:                                           # CMP-LIMB
            return 1 if a[i] > b[i] else -1
    return 0                                                       # CMP-EQUAL


def _add_magnitudes(a: LimbSequence, b: LimbSequence) -> LimbSequence:
    if len(a) < len(b):
        a, b = b, a
    size_a, size_b = len(a), len(b)
    result = LimbSequence.filled(size_a + 1)
    carry = 0
    for i in range(size_a):
        total = a[i] + (b[i] if i < size_b else 0) + carry
        result[i] = total & LIMB_MASK
        carry = total >> LIMB_BITS
    result[size_a] = carry                                         # ADD-CARRY-OUT
    result.trim()
    return result


def _subtract_magnitudes(larger: LimbSequence, smaller: LimbSequence) -> LimbSequence:
    """Return |larger| - |smaller|; requires |larger| >= |smaller|."""
    size_l, size_s = len(larger), len(smaller)
    result = LimbSequence.filled(size_l)
    borrow = 0
    for i in range(size_l):
        minuend = larger[i]
        value = (smaller[i] if i < size_s else 0) + borrow
        if minuend >= value:
            result[i] = minuend - value
            borrow = 0
        else:                                                      # SUB-BORROW
            result[i] = LIMB_BASE + minuend - value
            borrow = 1
    result.trim()
    return result


def _multiply_magnitudes(a: LimbSequence, b: LimbSequence) -> LimbSequence:
    size_a, size_b = len(a), len(b)
    result = LimbSequence.filled(size_a + size_b)
    for i in range(size_a):
        ai = a[i]
        carry = 0
        j = 0
        # Keeps going past the end of b while a carry is left over.
        while j < size_b or carry:
            bj = b[j] if j < size_b else 0                         # MUL-CARRY-TAIL
            product = ai * bj + result[i + j] + carry
            result[i + j] = product & LIMB_MASK
            carry = product >> LIMB_BITS
            j += 1
    result.trim()
    return result


def _divide_magnitudes(dividend: LimbSequence, divisor: LimbSequence) -> LimbSequence:
    """Quotient of |dividend| / |divisor| by repeated doubling.

    Each pass finds the largest ``divisor * 2**k`` that still fits in what is
    left of the dividend, subtracts it and adds ``2**k`` to the quotient.
    """
    remaining = dividend
    quotient = LimbSequence.zero()
    one = LimbSequence([1])
    while _compare_magnitudes(remaining, divisor) >= 0:
        shifted = divisor
        step = one
        while True:
            doubled = _add_magnitudes(shifted, shifted)
            if _compare_magnitudes(doubled, remaining) > 0:
                break
            shifted = doubled
            step = _add_magnitudes(step, step)
        remaining = _subtract_magnitudes(remaining, shifted)
        quotient = _add_magnitudes(quotient, step)
    return quotient


def _multiply_small_in_place(magnitude: LimbSequence, factor: int) -> None:
    carry = 0
    for i in range(len(magnitude)):
        product = magnitude[i] * factor + carry
        magnitude[i] = product & LIMB_MASK
        carry = product >> LIMB_BITS
    if carry:
        magnitude.append(carry)


def _add_small_in_place(magnitude: LimbSequence, addend: int) -> None:
    carry = addend
    i = 0
    while carry and i < len(magnitude):
        total = magnitude[i] + carry
        magnitude[i] = total & LIMB_MASK
        carry = total >> LIMB_BITS
        i += 1
    if carry:
        magnitude.append(carry)


def _divide_small_in_place(magnitude: LimbSequence, divisor: int) -> int:
    """Divide by a single-limb divisor, most significant limb first.

    Returns the remainder.
    """
    remainder = 0
    for i in range(len(magnitude) - 1, -1, -1):
        magnitude[i], remainder = divmod((remainder << LIMB_BITS) | magnitude[i], divisor)
    magnitude.trim()
    return remainder


def _limbs_for_digits(count: int) -> int:
    # log2(10) / 32 is just under 10 / 96.
    return count * 10 // 96 + 1


def _require(value: object, role: str = "operand") -> BigInteger:
    if value is None:
        raise NullInputError(role)
    if not isinstance(value, BigInteger):
        raise TypeError(f"{role} must be a BigInteger, got {type(value).__name__}")
    return value


def _coerce(value: object) -> BigInteger | None:
    if isinstance(value, BigInteger):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return BigInteger.from_integer(value)
    return None


# ---------------------------------------------------------------------------
# BigInteger
# ---------------------------------------------------------------------------

class BigInteger:
    """Signed integer of unbounded size.

    Values are immutable from the caller's side: the magnitude is owned by
    the instance and every operation returns a new instance.
    """

    __slots__ = ("_sign", "_magnitude")

    def __init__(
        self,
        sign: Sign = Sign.POSITIVE,
        magnitude: LimbSequence | None = None,
    ) -> None:
        magnitude = LimbSequence.zero() if magnitude is None else magnitude.copy()
        self._set(sign, magnitude)

    def _set(self, sign: Sign, magnitude: LimbSequence) -> None:
        magnitude.trim()
        self._magnitude = magnitude
        # Zero has no negative form.
        self._sign = Sign.POSITIVE if magnitude.is_zero() else sign

    @classmethod
    def _adopt(cls, sign: Sign, magnitude: LimbSequence) -> BigInteger:
        """Wrap a freshly built magnitude without copying it."""
        value = cls.__new__(cls)
        value._set(sign, magnitude)
        return value

    # -- construction -------------------------------------------------------

    @classmethod
    def from_decimal_string(cls, text: str | None) -> BigInteger:
        """Parse optionally signed decimal text.

        Leading whitespace and redundant leading zeros are skipped; every
        remaining character must be an ASCII digit.
        """
        if text is None:                                           # PARSE-NULL
            raise NullInputError("text")
        if not isinstance(text, str):
            raise TypeError(f"text must be a str, got {type(text).__name__}")

        pos, end = 0, len(text)
        while pos < end and text[pos] in _WHITESPACE:
            pos += 1

        negative = False
        if pos < end and text[pos] in "+-":
            negative = text[pos] == "-"                            # PARSE-SIGN
            pos += 1

        while pos < end - 1 and text[pos] == "0":
            pos += 1

        digits = text[pos:]
        if not digits:                                             # PARSE-NO-DIGITS
            raise ParseError(text, "no digits found")
        for ch in digits:
            if ch not in _DIGITS:                                  # PARSE-BAD-CHAR
                raise ParseError(text, f"unexpected character {ch!r}")

        magnitude = LimbSequence.zero(reserve=_limbs_for_digits(len(digits)))
        for ch in digits:
            _multiply_small_in_place(magnitude, 10)
            _add_small_in_place(magnitude, _DIGITS.index(ch))

        # A parsed "-0" is normalized to positive zero by _set.    PARSE-NEG-ZERO
        return cls._adopt(Sign.NEGATIVE if negative else Sign.POSITIVE, magnitude)

    @classmethod
    def from_integer(cls, value: int | None) -> BigInteger:
        if value is None:
            raise NullInputError("integer")
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"expected int, got {type(value).__name__}")
        sign = Sign.NEGATIVE if value < 0 else Sign.POSITIVE
        return cls._adopt(sign, LimbSequence.from_int(abs(value)))

    @classmethod
    def empty(cls, reserve_hint: int = 0) -> BigInteger:
        """Canonical zero with room reserved for ``reserve_hint`` limbs."""
        return cls._adopt(Sign.POSITIVE, LimbSequence.zero(reserve=reserve_hint))

    # -- queries ------------------------------------------------------------

    @property
    def sign(self) -> Sign:
        return self._sign

    @property
    def limbs(self) -> tuple[int, ...]:
        """Snapshot of the magnitude, least significant limb first."""
        return tuple(self._magnitude)

    def is_zero(self) -> bool:
        return self._magnitude.is_zero()

    def is_negative(self) -> bool:
        return self._sign is Sign.NEGATIVE

    def copy(self) -> BigInteger:
        return BigInteger(self._sign, self._magnitude)

    def negate(self) -> BigInteger:
        return BigInteger._adopt(self._sign.negated(), self._magnitude.copy())

    def abs(self) -> BigInteger:
        return BigInteger._adopt(Sign.POSITIVE, self._magnitude.copy())

    def compare(self, other: BigInteger) -> Ordering:
        other = _require(other)
        if self._sign is not other._sign:                          # CMP-SIGN
            return Ordering.GREATER if self._sign is Sign.POSITIVE else Ordering.LESS
        order = _compare_magnitudes(self._magnitude, other._magnitude)
        return Ordering(order * self._sign.value)

    # -- arithmetic ---------------------------------------------------------

    def add(self, other: BigInteger) -> BigInteger:
        other = _require(other)
        if self._sign is not other._sign:                          # ADD-MIXED-SIGN
            # Positive operand minus the magnitude of the negative one.
            if self._sign is Sign.POSITIVE:
                return self.subtract(other.abs())
            return other.subtract(self.abs())
        return BigInteger._adopt(                                  # ADD-SAME-SIGN
            self._sign, _add_magnitudes(self._magnitude, other._magnitude)
        )

    def subtract(self, other: BigInteger) -> BigInteger:
        other = _require(other)
        if self._sign is not other._sign:                          # SUB-MIXED-SIGN
            return self.add(other.negate())

        order = _compare_magnitudes(self._magnitude, other._magnitude)
        if order == 0:                                             # SUB-EQUAL
            return BigInteger.empty()
        if order > 0:                                              # SUB-GREATER
            return BigInteger._adopt(
                self._sign,
                _subtract_magnitudes(self._magnitude, other._magnitude),
            )
        return BigInteger._adopt(                                  # SUB-LESS
            self._sign.negated(),
            _subtract_magnitudes(other._magnitude, self._magnitude),
        )

    def multiply(self, other: BigInteger) -> BigInteger:
        other = _require(other)
        if self.is_zero() or other.is_zero():                      # MUL-ZERO
            return BigInteger.empty()
        sign = Sign.POSITIVE if self._sign is other._sign else Sign.NEGATIVE
        return BigInteger._adopt(
            sign, _multiply_magnitudes(self._magnitude, other._magnitude)
        )

    def divide(self, divisor: BigInteger) -> BigInteger:
        """Quotient truncated toward zero."""
        divisor = _require(divisor, "divisor")
        if divisor.is_zero():                                      # DIV-ZERO-DIVISOR
            raise DivisionByZeroError("division")
        if self.is_zero():                                         # DIV-ZERO-DIVIDEND
            return BigInteger.empty()
        sign = Sign.POSITIVE if self._sign is divisor._sign else Sign.NEGATIVE
        return BigInteger._adopt(                                  # DIV-DOUBLING
            sign, _divide_magnitudes(self._magnitude, divisor._magnitude)
        )

    def modulo(self, modulus: BigInteger) -> BigInteger:
        """Remainder in ``[0, |modulus|)`` whatever the operand signs."""
        modulus = _require(modulus, "modulus")
        if modulus.is_zero():                                      # MOD-ZERO-MODULUS
            raise DivisionByZeroError("modulo")
        quotient = self.divide(modulus)
        remainder = self.subtract(quotient.multiply(modulus))
        if remainder.is_negative():                                # MOD-ADJUST
            remainder = remainder.add(modulus.abs())
        return remainder

    # -- rendering ----------------------------------------------------------

    def to_decimal_string(self) -> str:
        if self.is_zero():                                         # STR-ZERO
            return "0"
        work = self._magnitude.copy()
        chunks: list[int] = []
        while not work.is_zero():                                  # STR-CHUNKS
            chunks.append(_divide_small_in_place(work, DECIMAL_CHUNK_BASE))
        text = str(chunks[-1]) + "".join(
            f"{chunk:0{DECIMAL_CHUNK_DIGITS}d}" for chunk in reversed(chunks[:-1])
        )
        return "-" + text if self.is_negative() else text

    # -- Python protocol ----------------------------------------------------

    def __str__(self) -> str:
        return self.to_decimal_string()

    def __repr__(self) -> str:
        return f"BigInteger({self.to_decimal_string()!r})"

    def __int__(self) -> int:
        value = self._magnitude.to_int()
        return -value if self.is_negative() else value

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __hash__(self) -> int:
        return hash((self._sign, self.limbs))

    def __copy__(self) -> BigInteger:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> BigInteger:
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BigInteger):
            return NotImplemented
        return self.compare(other) is Ordering.EQUAL

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, BigInteger):
            return NotImplemented
        return self.compare(other) is Ordering.LESS

    def __le__(self, other: object) -> bool:
        if not isinstance(other, BigInteger):
            return NotImplemented
        return self.compare(other) is not Ordering.GREATER

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, BigInteger):
            return NotImplemented
        return self.compare(other) is Ordering.GREATER

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, BigInteger):
            return NotImplemented
        return self.compare(other) is not Ordering.LESS

    def __neg__(self) -> BigInteger:
        return self.negate()

    def __abs__(self) -> BigInteger:
        return self.abs()

    def __add__(self, other: object) -> BigInteger:
        other = _coerce(other)
        return NotImplemented if other is None else self.add(other)

    def __radd__(self, other: object) -> BigInteger:
        other = _coerce(other)
        return NotImplemented if other is None else other.add(self)

    def __sub__(self, other: object) -> BigInteger:
        other = _coerce(other)
        return NotImplemented if other is None else self.subtract(other)

    def __rsub__(self, other: object) -> BigInteger:
        other = _coerce(other)
        return NotImplemented if other is None else other.subtract(self)

    def __mul__(self, other: object) -> BigInteger:
        other = _coerce(other)
        return NotImplemented if other is None else self.multiply(other)

    def __rmul__(self, other: object) -> BigInteger:
        other = _coerce(other)
        return NotImplemented if other is None else other.multiply(self)
