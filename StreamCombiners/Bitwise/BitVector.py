from collections.abc import Iterator
from typing import Self

from BitVector import BitVector as PackedBits

from StreamCombiners.Config import BYTE_WIDTH, SHORT_WIDTH, INT_WIDTH, LONG_WIDTH
from StreamCombiners.Errors import BitIndexError, BitValueError, VectorLengthError


def _check_bit(value: int) -> int:
    if value not in (0, 1):
        raise BitValueError(value)
    return int(value)


class BitVector:
    """An immutable, fixed-length vector of bits.

    Index 0 is the least significant bit. The bits are held in a
    `BitVector.BitVector`, which stores them most significant bit first,
    so every index is mirrored through `_bit()` before touching storage.
    """
    __slots__ = ('_bits', '_value')

    _bits: PackedBits
    _value: int

    def __init__(self, length: int = 0):
        if length < 0:
            raise ValueError(f"bit vectors cannot have a negative length ({length})")
        self._bits = PackedBits(size = length)
        self._value = 0

    @classmethod
    def _wrap(cls, packed: PackedBits) -> Self:
        # takes ownership of packed, which must not be modified afterwards
        output = object.__new__(cls)
        output._bits = packed
        output._value = int(packed) if len(packed) else 0
        return output


    # CONSTRUCTION:
    @classmethod
    def from_bits(cls, *bits: int) -> Self:
        """Build a vector with one position per argument, first argument at index 0.

        :raises BitValueError: if any argument is not exactly 0 or 1
        """
        checked = [_check_bit(b) for b in bits]
        if not checked:
            return cls(0)
        return cls._wrap(PackedBits(bitlist = checked[::-1]))

    @classmethod
    def from_value(cls, length: int, value: int) -> Self:
        """Build a vector from the low `length` bits of an integer.

        Higher order bits are discarded. Negative values contribute their two's
        complement bits, the same way a native integer would.
        """
        if length < 0:
            raise ValueError(f"bit vectors cannot have a negative length ({length})")
        if length == 0:
            return cls(0)
        return cls._wrap(PackedBits(intVal = value & ((1 << length) - 1), size = length))

    from_integer = from_value

    @classmethod
    def _from_width(cls, length: int, value: int, width: int) -> Self:
        # only the low width bits count, read as an unsigned pattern
        return cls.from_value(length, value & ((1 << width) - 1))

    @classmethod
    def from_byte(cls, length: int, value: int) -> Self:
        return cls._from_width(length, value, BYTE_WIDTH)

    @classmethod
    def from_short(cls, length: int, value: int) -> Self:
        return cls._from_width(length, value, SHORT_WIDTH)

    @classmethod
    def from_int(cls, length: int, value: int) -> Self:
        return cls._from_width(length, value, INT_WIDTH)

    @classmethod
    def from_long(cls, length: int, value: int) -> Self:
        return cls._from_width(length, value, LONG_WIDTH)


    # ACCESS:
    @property
    def length(self) -> int:
        return len(self._bits)

    def get_length(self) -> int:
        return len(self._bits)

    def __len__(self) -> int:
        return len(self._bits)

    def _bit(self, index: int) -> int:
        if not (0 <= index < len(self._bits)):
            raise BitIndexError(index, len(self._bits))
        return len(self._bits) - 1 - index

    def get(self, index: int) -> int:
        """Return the bit at `index`.

        :raises BitIndexError: if index is outside [0, length). Negative
            indices are not wrapped.
        """
        return self._bits[self._bit(index)]

    def __getitem__(self, index: int) -> int:
        return self.get(index)

    def __iter__(self) -> Iterator[int]:
        return reversed(self._bits)


    # TYPE CONVERSIONS:
    # each conversion keeps the bits the target width can hold and drops the rest
    def __int__(self) -> int:
        return self._value

    def to_byte(self) -> int:
        return self._value & ((1 << BYTE_WIDTH) - 1)

    def to_short(self) -> int:
        return self._value & ((1 << SHORT_WIDTH) - 1)

    def to_int(self) -> int:
        return self._value & ((1 << INT_WIDTH) - 1)

    def to_long(self) -> int:
        return self._value & ((1 << LONG_WIDTH) - 1)

    def to_bit_set(self) -> frozenset[int]:
        """Return the indices of every set bit."""
        return frozenset(i for i, bit in enumerate(self) if bit)

    def to_list(self) -> list[int]:
        return list(self)


    # DERIVED VECTORS:
    def _check_length(self, other: "BitVector") -> None:
        if len(other) != len(self):
            raise VectorLengthError(len(other), len(self))

    def __and__(self, other: "BitVector") -> "BitVector":
        self._check_length(other)
        return BitVector._wrap(self._bits & other._bits)

    def __xor__(self, other: "BitVector") -> "BitVector":
        self._check_length(other)
        return BitVector._wrap(self._bits ^ other._bits)

    def parity(self) -> int:
        """Return the XOR of all bits in the vector."""
        return self._value.bit_count() & 1

    def with_bit(self, index: int, value: int) -> "BitVector":
        """Return a copy of this vector with the bit at `index` replaced."""
        packed = self._bits.deep_copy()
        packed[self._bit(index)] = _check_bit(value)
        return BitVector._wrap(packed)

    def shifted_down(self, fill_bit: int) -> "BitVector":
        """Return a copy with every bit moved one index lower.

        The bit at index 0 is dropped and `fill_bit` is written at the highest
        index. A zero length vector is returned unchanged.
        """
        _check_bit(fill_bit)
        if not len(self._bits):
            return self
        packed = self._bits.deep_copy()
        packed.shift_right(1)
        packed[0] = fill_bit
        return BitVector._wrap(packed)


    # VALUE SEMANTICS:
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitVector):
            return NotImplemented
        return len(self) == len(other) and self._value == other._value

    def __hash__(self) -> int:
        return hash((len(self), self._value))

    def __str__(self) -> str:
        return str(self._bits)

    def __repr__(self) -> str:
        return f"BitVector({len(self)}, '{self}')"
