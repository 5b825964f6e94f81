import logging

from StreamCombiners.Errors import (
    StreamCombinerError, RangeError, BitIndexError, BitValueError, VectorLengthError,
    WidthError, ArityError, ExpressionParseError, VariableIndexError
)
from StreamCombiners.Bitwise import BitVector
from StreamCombiners.Registers import Lfsr
from StreamCombiners.BooleanLogic import TruthTable, TermTable, BooleanFunction

logging.getLogger(__name__).addHandler(logging.NullHandler())
