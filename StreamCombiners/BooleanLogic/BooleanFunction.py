from StreamCombiners.Bitwise import BitVector
from StreamCombiners.BooleanLogic.TermTable import TermTable
from StreamCombiners.BooleanLogic.TruthTable import TruthTable
from StreamCombiners.Errors import VectorLengthError


class BooleanFunction:
    """A Boolean function with a fixed number of arguments.

    The function is available both as a truth table and as a term table
    (its algebraic normal form). It is built from either one, and the other
    is derived the first time it is asked for; the two always agree.

    Arguments are bit vectors of length `arity`, with bit 0 as the first
    variable. E.g. 01101 means x0 = 1, x1 = 0, x2 = 1, x3 = 1 and x4 = 0.
    """
    arity: int
    _term_table: TermTable | None
    _truth_table: TruthTable | None

    def __init__(self, table: TermTable | TruthTable):
        if isinstance(table, TermTable):
            self._term_table, self._truth_table = table, None
        elif isinstance(table, TruthTable):
            self._term_table, self._truth_table = None, table
        else:
            raise TypeError(f"expected a TermTable or TruthTable, not {type(table).__name__}")
        self.arity = table.arity

    @classmethod
    def from_string(cls, arity: int, expression: str, index_from_zero: bool = False) -> "BooleanFunction":
        """Create a Boolean function from an expression such as "1 + x1 x2 + (x1 + 1) x3".

        See `StreamCombiners.BooleanLogic.Expressions` for the syntax.

        :param arity: the number of variables of the function
        :param expression: the expression text
        :param index_from_zero: if True, variables are numbered from x0,
            otherwise from x1
        :raises ArityError: if arity is outside [1, MAX_ARITY]
        :raises ExpressionParseError: if the expression is malformed or uses
            a variable outside the arity
        """
        return cls(TermTable.parse(arity, expression, index_from_zero))

    @classmethod
    def from_term_table(cls, term_table: TermTable) -> "BooleanFunction":
        return cls(term_table)

    @classmethod
    def from_truth_table(cls, truth_table: TruthTable) -> "BooleanFunction":
        return cls(truth_table)

    def get_arity(self) -> int:
        return self.arity


    # the tables are immutable, so they are shared rather than copied
    def get_truth_table(self) -> TruthTable:
        if self._truth_table is None:
            self._truth_table = self._term_table.build_truth_table()
        return self._truth_table

    def get_term_table(self) -> TermTable:
        if self._term_table is None:
            self._term_table = self._truth_table.build_term_table()
        return self._term_table


    # EVALUATION:
    def evaluate(self, args: BitVector) -> int:
        """Return the value of the function for an argument vector.

        :raises VectorLengthError: if args is not of length arity
        """
        if not isinstance(args, BitVector):
            raise TypeError(f"arguments must be a BitVector, not {type(args).__name__}")
        if len(args) != self.arity:
            raise VectorLengthError(len(args), self.arity)
        if self._truth_table is None:
            return self._term_table.evaluate(args)
        return self._truth_table.at(args)

    def at(self, args: BitVector | int) -> int:
        """Return the value of the function for a BitVector or an int.

        An int is taken to be `arity` bits long: higher order bits are
        dropped, as in `BitVector.from_value(arity, args)`.
        """
        if isinstance(args, BitVector):
            return self.evaluate(args)
        if isinstance(args, int):
            return self.evaluate(BitVector.from_value(self.arity, args))
        raise TypeError(f"arguments must be a BitVector or an int, not {type(args).__name__}")

    # the low bits of the given width are taken as an unsigned pattern, as in at()
    def at_byte(self, args: int) -> int:
        return self.evaluate(BitVector.from_byte(self.arity, args))

    def at_short(self, args: int) -> int:
        return self.evaluate(BitVector.from_short(self.arity, args))

    def at_int(self, args: int) -> int:
        return self.evaluate(BitVector.from_int(self.arity, args))

    def at_long(self, args: int) -> int:
        return self.evaluate(BitVector.from_long(self.arity, args))

    def __call__(self, *bits: int) -> int:
        """Evaluate with one bit per variable, e.g. the current outputs of several registers."""
        return self.evaluate(BitVector.from_bits(*bits))


    # PROPERTIES:
    def degree(self) -> int:
        return self.get_term_table().degree()

    def weight(self) -> int:
        return self.get_truth_table().weight()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BooleanFunction):
            return NotImplemented
        return self.get_truth_table() == other.get_truth_table()

    def __hash__(self) -> int:
        return hash(self.get_truth_table())

    def __str__(self) -> str:
        return str(self.get_term_table())

    def __repr__(self) -> str:
        return f"BooleanFunction.from_string({self.arity}, {str(self)!r})"
