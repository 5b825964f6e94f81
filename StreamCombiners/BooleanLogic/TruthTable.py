from collections.abc import Callable, Iterable, Iterator
import logging

import numpy as np

from StreamCombiners.Bitwise import BitVector
from StreamCombiners.Config import MAX_ARITY
from StreamCombiners.Errors import ArityError, BitIndexError, BitValueError, VectorLengthError

logger = logging.getLogger(__name__)


def check_arity(arity: int) -> int:
    """Reject arities that cannot be packed into a monomial mask.

    :raises ArityError: if arity is outside [1, MAX_ARITY]
    """
    if not (1 <= arity <= MAX_ARITY):
        raise ArityError(arity, MAX_ARITY)
    return arity


class TruthTable:
    """The dense table of a Boolean function's outputs.

    Entry `v` holds the output for the input whose variables are the bits of
    `v`, with bit 0 as the first variable. The table is read-only once built.
    """
    arity: int
    _table: np.ndarray

    def __init__(self, arity: int, values: Iterable[int]):
        check_arity(arity)
        table = np.asarray(list(values))

        if table.shape != (1 << arity,):
            raise VectorLengthError(table.size, 1 << arity)

        bad = (table != 0) & (table != 1)
        if bad.any():
            raise BitValueError(table[np.argmax(bad)].item())

        self.arity = arity
        self._table = table.astype(np.uint8)
        self._table.flags.writeable = False

    @classmethod
    def _from_array(cls, arity: int, table: np.ndarray) -> "TruthTable":
        # skips validation, for tables produced by the transforms
        output = object.__new__(cls)
        output.arity = arity
        output._table = table.astype(np.uint8, copy = False)
        output._table.flags.writeable = False
        return output

    @classmethod
    def from_function(cls, arity: int, fn: Callable[[BitVector], int]) -> "TruthTable":
        """Tabulate a Python callable over every input of the given arity."""
        check_arity(arity)
        return cls(arity, (fn(BitVector.from_value(arity, v)) for v in range(1 << arity)))

    def get_arity(self) -> int:
        return self.arity

    def at(self, index: int | BitVector) -> int:
        """Return the output for an input.

        :param index: either an int in [0, 2**arity), or a BitVector of
            length arity.
        :raises BitIndexError: for an int outside the table
        :raises VectorLengthError: for a BitVector of the wrong length
        """
        if isinstance(index, BitVector):
            if len(index) != self.arity:
                raise VectorLengthError(len(index), self.arity)
            index = int(index)
        elif not isinstance(index, (int, np.integer)):
            raise TypeError(f"truth tables are indexed by int or BitVector, not {type(index).__name__}")
        elif not (0 <= index < len(self._table)):
            raise BitIndexError(index, len(self._table))

        return int(self._table[index])

    def __getitem__(self, index: int | BitVector) -> int:
        return self.at(index)

    def weight(self) -> int:
        """Return the number of inputs for which the function outputs 1."""
        return int(self._table.sum(dtype = np.int64))

    def to_numpy(self) -> np.ndarray:
        return self._table.copy()

    def build_term_table(self):
        raise NotImplementedError  # defined in TermTable.py


    # Generic container methods
    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[int]:
        return iter(self._table.tolist())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TruthTable):
            return NotImplemented
        return self.arity == other.arity and np.array_equal(self._table, other._table)

    def __hash__(self) -> int:
        return hash((self.arity, self._table.tobytes()))

    def __str__(self) -> str:
        return "".join(str(bit) for bit in self._table.tolist())

    def __repr__(self) -> str:
        return f"TruthTable({self.arity}, '{self}')"
