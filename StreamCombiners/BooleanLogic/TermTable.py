from collections.abc import Iterable, Iterator
from typing import Any
import json
import logging

from memoization import cached
import numpy as np
from numba import njit

from StreamCombiners.Bitwise import BitVector
from StreamCombiners.BooleanLogic.TruthTable import TruthTable, check_arity
from StreamCombiners.Errors import BitIndexError, VectorLengthError

logger = logging.getLogger(__name__)


@njit(cache = False)
def _anf_truth_table(arity, masks):
    table = np.zeros(1 << arity, dtype = np.uint8)
    for v in range(1 << arity):
        bit = 0
        for m in masks:
            if (v & m) == m:
                bit ^= 1
        table[v] = bit
    return table


# A container class holding the algebraic normal form of a Boolean function.
# Each monomial is a bitmask over the variables (bit i set <=> x_i appears),
# and the mask 0 is the constant term. Monomials are XORed together, so the
# term set never holds duplicates.
class TermTable:
    arity: int
    masks: frozenset[int]

    @classmethod
    def _convert_iterable_term(cls,
        arity: int,
        term: Iterable[int] | bool | int
    ) -> int | None:
        """Convert one term of a nested iterable into a monomial mask.

        `True` and the int `1` are the constant monomial (as is an empty
        iterable), while `False` and the int `0` convert to None and
        contribute nothing. Anything else must be an iterable of variable
        indices.

        :raises BitIndexError: if a variable index is outside [0, arity)
        :raises TypeError: if the term is not one of the forms above
        """
        # exceptions for ease of use:
        if isinstance(term, (bool, int, np.integer)):
            if term == 0:
                return None
            if term == 1:
                return 0
            raise TypeError(f"Unable to convert term {term!r} to a monomial; use 0, 1 or an iterable of indices.")

        try:
            indices = list(term)
        except TypeError:
            raise TypeError( # throw better error.
                f"Unable to convert term {term!r} (of type {type(term).__name__}) to a monomial."
            )

        mask = 0
        for idx in indices:
            if not (0 <= idx < arity):
                raise BitIndexError(idx, arity, what = "variable")
            mask |= 1 << idx
        return mask

    def __init__(self,
        arity: int,
        nested_iterable: Any = None
    ):
        check_arity(arity)
        self.arity = arity

        #if they want an empty (constant zero) table
        if nested_iterable is None:
            self.masks = frozenset()
            return

        masks = set()
        for term in nested_iterable:
            mask = TermTable._convert_iterable_term(arity, term)
            if mask is not None:
                masks ^= {mask}
        self.masks = frozenset(masks)

    @classmethod
    def _from_mask_set(cls, arity: int, masks: frozenset[int]) -> "TermTable":
        output = object.__new__(cls)
        output.arity = arity
        output.masks = masks
        return output

    @classmethod
    def from_masks(cls, arity: int, masks: Iterable[int]) -> "TermTable":
        """Build a term table from monomial bitmasks.

        Masks appearing an even number of times cancel.

        :raises BitIndexError: if a mask uses a variable at or above arity
        """
        check_arity(arity)
        limit = 1 << arity
        terms = set()
        for mask in masks:
            mask = int(mask)
            if not (0 <= mask < limit):
                raise BitIndexError(mask, limit, what = "monomial mask")
            terms ^= {mask}
        return cls._from_mask_set(arity, frozenset(terms))

    @classmethod
    def parse(cls, arity: int, expression: str, index_from_zero: bool = False) -> "TermTable":
        raise NotImplementedError  # defined in Expressions.py

    def get_arity(self) -> int:
        return self.arity

    def degree(self) -> int:
        """Compute the algebraic degree: the size of the largest monomial."""
        return max((mask.bit_count() for mask in self.masks), default = 0)

    def monomials(self) -> list[tuple[int, ...]]:
        """List each monomial as a tuple of variable indices, ordered by degree."""
        terms = [
            tuple(i for i in range(self.arity) if (mask >> i) & 1)
            for mask in self.masks
        ]
        return sorted(terms, key = lambda t: (len(t), t))


    # TermTable Operations:
    def _check_arity_matches(self, other: "TermTable") -> None:
        if self.arity != other.arity:
            raise ValueError(f"cannot combine term tables of arity {self.arity} and {other.arity}")

    # ADD and XOR
    def __xor__(self, other: "TermTable") -> "TermTable":
        self._check_arity_matches(other)
        return TermTable._from_mask_set(self.arity, self.masks ^ other.masks)

    def __add__(self, other: "TermTable") -> "TermTable":
        return self.__xor__(other)

    # MUL and AND (can make a TermTable very large, use w/ caution)
    def __and__(self, other: "TermTable") -> "TermTable":
        self._check_arity_matches(other)
        termset = set()
        for a in self.masks:
            for b in other.masks:
                new_term = a | b
                if new_term in termset:
                    termset.remove(new_term)
                else:
                    termset.add(new_term)
        return TermTable._from_mask_set(self.arity, frozenset(termset))

    def __mul__(self, other: "TermTable") -> "TermTable":
        return self.__and__(other)

    # invert by XORing with the constant term
    def __invert__(self) -> "TermTable":
        return TermTable._from_mask_set(self.arity, self.masks ^ {0})


    # Evaluation
    def evaluate(self, args: int | BitVector) -> int:
        """Evaluate the ANF directly for a single input.

        :param args: a BitVector of length arity, or an int whose low arity
            bits are the inputs (bit 0 is the first variable).
        """
        if isinstance(args, BitVector):
            if len(args) != self.arity:
                raise VectorLengthError(len(args), self.arity)
            value = int(args)
        else:
            value = int(args) & ((1 << self.arity) - 1)

        bit = 0
        for mask in self.masks:
            if (value & mask) == mask:
                bit ^= 1
        return bit

    # term tables are immutable and hashable, so equal tables share one result
    @cached(max_size = 128)
    def build_truth_table(self) -> TruthTable:
        """Evaluate the ANF over every input to produce the dense truth table.

        Each entry is the parity of the monomials whose variables are all set
        in the input. This costs O(2**arity * len(self)).
        """
        logger.debug(f"building truth table: arity={self.arity}, monomials={len(self.masks)}")
        masks = np.fromiter(self.masks, dtype = np.int64, count = len(self.masks))
        return TruthTable._from_array(self.arity, _anf_truth_table(self.arity, masks))


    # Printing
    def to_string(self, index_from_zero: bool = False) -> str:
        """Render the table in the expression syntax accepted by `parse`.

        The zero function renders as "0".
        """
        offset = 0 if index_from_zero else 1
        term_strings = []
        for term in self.monomials():
            if not term:
                term_strings.append("1")
            else:
                term_strings.append(" ".join(f"x{i + offset}" for i in term))
        return " + ".join(term_strings) if term_strings else "0"

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"TermTable({self.arity}, {self.monomials()!r})"


    # Generic container methods
    def __len__(self) -> int:
        return len(self.masks)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self.masks))

    def __contains__(self, term: Iterable[int] | int | bool) -> bool:
        mask = self._convert_iterable_term(self.arity, term)
        # the zero term is never stored
        if mask is None:
            return False
        return mask in self.masks

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TermTable):
            return NotImplemented
        return self.arity == other.arity and self.masks == other.masks

    def __hash__(self) -> int:
        return hash((self.arity, self.masks))


    # Serialization
    def to_JSON(self) -> dict:
        return {
            'class': type(self).__name__,
            'data': {
                'arity': self.arity,
                'terms': [list(term) for term in self.monomials()],
            }
        }

    @classmethod
    def from_JSON(cls, JSON_object: dict) -> "TermTable":
        if JSON_object.get('class') != cls.__name__:
            raise TypeError(f"Type '{JSON_object.get('class')}' is not a valid {cls.__name__}")
        data = JSON_object["data"]
        return cls(data["arity"], data["terms"])

    # json files only:
    def to_file(self, filename: str) -> None:
        with open(filename, 'w') as f:
            f.write(json.dumps(self.to_JSON(), indent = 2))

    @classmethod
    def from_file(cls, filename: str) -> "TermTable":
        with open(filename, 'r') as f:
            return cls.from_JSON(json.loads(f.read()))


# after loading, add the ANF transform to truth tables
@cached(max_size = 128)
def build_term_table(self: TruthTable) -> TermTable:
    """Recover the ANF of a truth table with the binary Moebius transform.

    The transform is a butterfly over the table: for each variable, every
    entry with that variable set is XORed with its partner where it is clear.
    It is its own inverse, and exactly undoes `TermTable.build_truth_table`.

    :return: the term table of the function
    :rtype: TermTable
    """
    coeffs = self.to_numpy()
    step = 1
    while step < len(coeffs):
        blocks = coeffs.reshape(-1, 2 * step)
        blocks[:, step:] ^= blocks[:, :step]
        step <<= 1

    logger.debug(f"built term table: arity={self.arity}, monomials={np.count_nonzero(coeffs)}")
    return TermTable._from_mask_set(
        self.arity, frozenset(np.flatnonzero(coeffs).tolist())
    )
TruthTable.build_term_table = build_term_table
