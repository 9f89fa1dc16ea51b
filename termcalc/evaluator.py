"""
Recursive-descent evaluator for calculator expressions.

Parsing and evaluation happen in the same pass; each grammar level takes the
token list and a cursor and returns ``(value, new_cursor)``:

    expression := term (("+" | "-") term)*
    term       := factor (("*" | "/" | "%") factor)*
    factor     := primary ("^" primary)*
    primary    := NUMBER | "-" primary | "(" expression ")"
                | IDENTIFIER "(" expression ")"

``^`` folds left to right, so ``2^3^2`` is ``(2^3)^2 == 64``.
Arithmetic follows IEEE doubles: domain errors give NaN or infinity instead
of raising. The only semantic error is division by an exact zero.
"""

import logging
from typing import List, Sequence, Tuple

import numpy as np

from .errors import (
    DivisionByZeroError,
    MissingParenthesisError,
    NestingTooDeepError,
    UnexpectedEndError,
    UnexpectedIdentifierError,
    UnexpectedTokenError,
    UnknownFunctionError,
)
from .tokenizer import Token, TokenKind, tokenize

logger = logging.getLogger(__name__)

Step = Tuple[float, int]


def _degrees(func):
    def wrapped(x, func=func):
        return func(np.radians(x))

    return wrapped


# Trig functions take degrees, like the calculator's buttons.
FUNCTIONS = {
    "sin": _degrees(np.sin),
    "cos": _degrees(np.cos),
    "tan": _degrees(np.tan),
    "sqrt": np.sqrt,
    "log": np.log10,
    "ln": np.log,
    "exp": np.exp,
    "abs": np.abs,
}


def _ieee(func, *args) -> float:
    with np.errstate(all="ignore"):
        return float(func(*(np.float64(a) for a in args)))


def apply_function(name: str, value: float) -> float:
    if name not in FUNCTIONS:
        raise UnknownFunctionError(name)
    return _ieee(FUNCTIONS[name], value)


def _expect_rparen(tokens: Sequence[Token], pos: int) -> int:
    if pos >= len(tokens) or tokens[pos].kind is not TokenKind.RPAREN:
        raise MissingParenthesisError(pos)
    return pos + 1


def parse_expression(tokens: Sequence[Token], pos: int = 0) -> Step:
    left, pos = parse_term(tokens, pos)
    while pos < len(tokens):
        kind = tokens[pos].kind
        if kind is TokenKind.PLUS:
            right, pos = parse_term(tokens, pos + 1)
            left += right
        elif kind is TokenKind.MINUS:
            right, pos = parse_term(tokens, pos + 1)
            left -= right
        else:
            break
    return left, pos


def parse_term(tokens: Sequence[Token], pos: int) -> Step:
    left, pos = parse_factor(tokens, pos)
    while pos < len(tokens):
        kind = tokens[pos].kind
        if kind is TokenKind.MULTIPLY:
            right, pos = parse_factor(tokens, pos + 1)
            left *= right
        elif kind is TokenKind.DIVIDE:
            right, pos = parse_factor(tokens, pos + 1)
            # exact comparison: tiny non-zero divisors are allowed
            if right == 0.0:
                raise DivisionByZeroError()
            left /= right
        elif kind is TokenKind.MODULO:
            right, pos = parse_factor(tokens, pos + 1)
            left = _ieee(np.fmod, left, right)
        else:
            break
    return left, pos


def parse_factor(tokens: Sequence[Token], pos: int) -> Step:
    base, pos = parse_primary(tokens, pos)
    while pos < len(tokens) and tokens[pos].kind is TokenKind.POWER:
        exponent, pos = parse_primary(tokens, pos + 1)
        base = _ieee(np.power, base, exponent)
    return base, pos


def parse_primary(tokens: Sequence[Token], pos: int) -> Step:
    # leading minuses are counted rather than recursed into
    minuses = 0
    while pos < len(tokens) and tokens[pos].kind is TokenKind.MINUS:
        minuses += 1
        pos += 1
    value, pos = _parse_operand(tokens, pos)
    if minuses % 2:
        value = -value
    return value, pos


def _parse_operand(tokens: Sequence[Token], pos: int) -> Step:
    if pos >= len(tokens):
        raise UnexpectedEndError()

    token = tokens[pos]
    if token.kind is TokenKind.NUMBER:
        return token.value, pos + 1

    if token.kind is TokenKind.LPAREN:
        value, pos = parse_expression(tokens, pos + 1)
        return value, _expect_rparen(tokens, pos)

    if token.kind is TokenKind.IDENTIFIER:
        if pos + 1 < len(tokens) and tokens[pos + 1].kind is TokenKind.LPAREN:
            arg, pos = parse_expression(tokens, pos + 2)
            pos = _expect_rparen(tokens, pos)
            return apply_function(token.name, arg), pos
        raise UnexpectedIdentifierError(token.name)

    raise UnexpectedTokenError(token)


def evaluate(tokens: List[Token]) -> float:
    """
    Evaluate a token list. Tokens left over after a complete expression are
    ignored, so ``2 pi`` evaluates to 2.
    """
    try:
        value, pos = parse_expression(tokens, 0)
    except RecursionError:
        raise NestingTooDeepError() from None
    if pos < len(tokens):
        logger.debug("ignoring %d trailing token(s) from %s", len(tokens) - pos, tokens[pos])
    return float(value)


def evaluate_expression(text: str) -> float:
    """
    Tokenize and evaluate ``text``. Empty or blank input evaluates to 0.0.
    Raises LexError or an EvalError subclass.
    """
    text = text.strip()
    if not text:
        return 0.0
    return evaluate(tokenize(text))
