# Bit widths of the native integer types that callers marshal into
# bit vectors. Values are reinterpreted with bit 0 as the least
# significant bit.
BYTE_WIDTH = 8
SHORT_WIDTH = 16
INT_WIDTH = 32
LONG_WIDTH = 64

# monomials (and truth table indices) are packed into signed 64 bit masks,
# which leaves 63 usable variable positions.
MASK_WIDTH = 64
MAX_ARITY = MASK_WIDTH - 1

# deepest group nesting the expression parser accepts; each level uses
# three stack frames, which keeps parsing well inside the interpreter's
# recursion limit.
MAX_NESTING = 200
