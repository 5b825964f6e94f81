"""Parsing of Boolean functions written as algebraic expressions.

An expression such as "1 + x1 x2 + (x1 + 1) x3" is a sum of products over
GF(2). Allowed symbols are the constants '0' and '1', variables of the form
xN, parentheses for grouping, and '+' for addition (XOR). Adjacent factors
are multiplied (AND). Whitespace is ignored::

    expr    := term ('+' term)*
    term    := factor+
    factor  := '0' | '1' | 'x' digits | '(' expr ')'

Products distribute over grouped sums, so the example above parses to the
term table 1 + x1 x2 + x1 x3 + x3.
"""
from typing import NamedTuple
import logging
import re

from StreamCombiners.BooleanLogic.TermTable import TermTable
from StreamCombiners.BooleanLogic.TruthTable import check_arity
from StreamCombiners.Config import MAX_NESTING
from StreamCombiners.Errors import ExpressionParseError, VariableIndexError

logger = logging.getLogger(__name__)

_DIGITS = re.compile(r"[0-9]+")

PLUS, LPAREN, RPAREN, CONST, VAR = "PLUS", "LPAREN", "RPAREN", "CONST", "VAR"
_SYMBOLS = {'+': PLUS, '(': LPAREN, ')': RPAREN, '0': CONST, '1': CONST}


class Token(NamedTuple):
    kind: str
    text: str
    position: int


def tokenize(expression: str) -> list[Token]:
    """Split an expression into tokens, dropping whitespace.

    :raises ExpressionParseError: on an unknown character, or an 'x' that is
        not immediately followed by digits
    """
    tokens = []
    pos = 0
    while pos < len(expression):
        ch = expression[pos]
        if ch.isspace():
            pos += 1
        elif ch in _SYMBOLS:
            tokens.append(Token(_SYMBOLS[ch], ch, pos))
            pos += 1
        elif ch == 'x':
            digits = _DIGITS.match(expression, pos + 1)
            if digits is None:
                raise ExpressionParseError("variable without an index", pos, ch)
            tokens.append(Token(VAR, expression[pos:digits.end()], pos))
            pos = digits.end()
        else:
            raise ExpressionParseError("unknown character", pos, ch)
    return tokens


class _Parser:
    def __init__(self, arity: int, expression: str, index_from_zero: bool):
        self.arity = arity
        self.end = len(expression)
        self.tokens = tokenize(expression)
        self.idx = 0
        self.depth = 0
        self.min_index = 0 if index_from_zero else 1

    def peek(self) -> Token | None:
        if self.idx < len(self.tokens):
            return self.tokens[self.idx]
        return None

    def advance(self) -> Token:
        token = self.tokens[self.idx]
        self.idx += 1
        return token

    def parse(self) -> TermTable:
        if not self.tokens:
            raise ExpressionParseError("empty expression", 0)

        result = self.expr()

        leftover = self.peek()
        if leftover is not None:
            if leftover.kind == RPAREN:
                raise ExpressionParseError("unbalanced ')'", leftover.position, leftover.text)
            raise ExpressionParseError("unexpected token", leftover.position, leftover.text)
        return result

    def expr(self) -> TermTable:
        result = self.term()
        while (token := self.peek()) is not None and token.kind == PLUS:
            self.advance()
            result = result + self.term()
        return result

    def term(self) -> TermTable:
        result = self.factor()
        while (token := self.peek()) is not None and token.kind in (CONST, VAR, LPAREN):
            result = result * self.factor()
        return result

    def factor(self) -> TermTable:
        token = self.peek()
        if token is None:
            raise ExpressionParseError("unexpected end of expression", self.end)

        if token.kind == CONST:
            self.advance()
            return TermTable(self.arity, [token.text == '1'])

        if token.kind == VAR:
            self.advance()
            return TermTable.from_masks(self.arity, [1 << self.variable(token)])

        if token.kind == LPAREN:
            self.advance()
            if self.depth == MAX_NESTING:
                raise ExpressionParseError(
                    f"expression nested deeper than {MAX_NESTING} groups", token.position, token.text
                )
            closing = self.peek()
            if closing is not None and closing.kind == RPAREN:
                raise ExpressionParseError("empty group", closing.position, closing.text)

            self.depth += 1
            inner = self.expr()
            self.depth -= 1

            closing = self.peek()
            if closing is None:
                raise ExpressionParseError("unbalanced '('", token.position, token.text)
            if closing.kind != RPAREN:
                raise ExpressionParseError("expected ')'", closing.position, closing.text)
            self.advance()
            return inner

        raise ExpressionParseError(
            "expected a constant, a variable or '('", token.position, token.text
        )

    def variable(self, token: Token) -> int:
        max_index = self.min_index + self.arity - 1
        index = int(token.text[1:])
        if not (self.min_index <= index <= max_index):
            raise VariableIndexError(token.text, token.position, self.min_index, max_index)
        return index - self.min_index


def parse_expression(arity: int, expression: str, index_from_zero: bool = False) -> TermTable:
    """Parse an expression into a term table.

    :param arity: the number of variables of the function; checked before
        the expression is looked at.
    :param expression: the expression text, e.g. "1 + x1 x2 + (x1 + 1) x3".
    :param index_from_zero: if True, variables are numbered from x0,
        otherwise from x1.
    :raises ArityError: if arity is outside [1, MAX_ARITY]
    :raises VariableIndexError: if a variable index is outside the arity
    :raises ExpressionParseError: if the expression is malformed
    """
    check_arity(arity)
    if not isinstance(expression, str):
        raise TypeError(f"expression must be a str, not {type(expression).__name__}")

    table = _Parser(arity, expression, index_from_zero).parse()
    logger.debug(f"parsed {expression!r} into {len(table)} monomials")
    return table


# after loading, expose the parser on TermTable
def parse(cls, arity: int, expression: str, index_from_zero: bool = False) -> TermTable:
    """Parse an expression into a term table (see `parse_expression`)."""
    return parse_expression(arity, expression, index_from_zero)
TermTable.parse = classmethod(parse)
