class StreamCombinerError(Exception):
    """Base class for every error raised by this package."""


class RangeError(StreamCombinerError):
    """An index, bit value or vector length fell outside its valid range."""


class BitIndexError(RangeError, IndexError):
    def __init__(self, index, length = None, what = "index"):
        self.index = index
        self.length = length
        if length is None:
            super().__init__(f"{what} {index} must not be negative")
        else:
            super().__init__(f"{what} {index} is out of range for length {length}")


class BitValueError(RangeError, ValueError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"bit values must be 0 or 1, got {value!r}")


class VectorLengthError(RangeError, ValueError):
    def __init__(self, actual, expected):
        self.actual = actual
        self.expected = expected
        super().__init__(f"expected a vector of length {expected}, got length {actual}")


class WidthError(StreamCombinerError, ValueError):
    def __init__(self, width, message):
        self.width = width
        super().__init__(message)


class ArityError(StreamCombinerError, ValueError):
    def __init__(self, arity, max_arity):
        self.arity = arity
        self.max_arity = max_arity
        super().__init__(f"arity must be between 1 and {max_arity}, got {arity}")


class ExpressionParseError(StreamCombinerError, ValueError):
    """Raised for malformed Boolean expressions.

    :ivar position: zero-based offset of the offending character in the expression
    :ivar token: the offending token text ('' at the end of input)
    """
    def __init__(self, message, position, token = ''):
        self.position = position
        self.token = token
        # not cooperative: VariableIndexError also derives from BitIndexError
        StreamCombinerError.__init__(
            self, f"{message} at position {position}" + (f" ({token!r})" if token else "")
        )


class VariableIndexError(ExpressionParseError, BitIndexError):
    def __init__(self, token, position, min_index, max_index):
        self.index = int(token[1:])
        self.length = max_index - min_index + 1
        ExpressionParseError.__init__(
            self,
            f"variable {token} is outside x{min_index}..x{max_index}",
            position, token
        )
