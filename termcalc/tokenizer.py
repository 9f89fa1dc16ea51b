"""
Lexer for calculator expressions.

Turns text such as ``3(4) + sin(90)`` into a flat list of tokens:

- numbers (``12``, ``0.5``, ``.5``) and the constants ``pi``/``π`` and ``e``
- the single-character operators ``+ - * / ^ %`` and parentheses
- identifiers, left for the evaluator to resolve as function names

Implicit multiplication (``3(4)``, ``(2)3``, ``(2)(3)``) is spliced into the
token list here, so the evaluator only ever sees explicit operators.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .errors import LexError


class TokenKind(Enum):
    NUMBER = "number"
    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    POWER = "^"
    MODULO = "%"
    LPAREN = "("
    RPAREN = ")"
    IDENTIFIER = "identifier"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: Optional[float] = None
    name: Optional[str] = None

    def __str__(self):
        if self.kind is TokenKind.NUMBER:
            return repr(self.value)
        if self.kind is TokenKind.IDENTIFIER:
            return self.name
        return self.kind.value


PI_GLYPH = "π"

CONSTANTS = {
    "pi": math.pi,
    PI_GLYPH: math.pi,
    "e": math.e,
}

_OPERATORS = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.MULTIPLY,
    "/": TokenKind.DIVIDE,
    "^": TokenKind.POWER,
    "%": TokenKind.MODULO,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
}

# (left, right) pairs that get a Multiply token between them
_IMPLICIT_MULTIPLY = {
    (TokenKind.NUMBER, TokenKind.LPAREN),
    (TokenKind.RPAREN, TokenKind.NUMBER),
    (TokenKind.RPAREN, TokenKind.LPAREN),
}

MULTIPLY = Token(TokenKind.MULTIPLY)


def number(value: float) -> Token:
    return Token(TokenKind.NUMBER, value=float(value))


def identifier(name: str) -> Token:
    return Token(TokenKind.IDENTIFIER, name=name)


def _is_identifier_start(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == PI_GLYPH


def _is_identifier_part(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def _parse_number(literal: str) -> Token:
    try:
        return number(float(literal))
    except ValueError:
        raise LexError(f"Invalid number: {literal}", literal) from None


def _insert_implicit_multiply(tokens: List[Token]) -> List[Token]:
    result = []
    for i, token in enumerate(tokens):
        result.append(token)
        if i + 1 < len(tokens) and (token.kind, tokens[i + 1].kind) in _IMPLICIT_MULTIPLY:
            result.append(MULTIPLY)
    return result


def tokenize(expr: str) -> List[Token]:
    """
    Split an expression into tokens.

    Raises LexError on the first character that cannot start a token, or on a
    numeric literal that float() rejects (``1.2.3``, a lone ``.``).
    """
    tokens = []
    num_buf = ""
    i = 0
    n = len(expr)

    while i < n:
        ch = expr[i]

        if ch.isascii() and (ch.isdigit() or ch == "."):
            num_buf += ch
            i += 1
            continue

        if num_buf:
            tokens.append(_parse_number(num_buf))
            num_buf = ""

        if _is_identifier_start(ch):
            start = i
            i += 1
            while i < n and _is_identifier_part(expr[i]):
                i += 1
            ident = expr[start:i].lower()
            if ident in CONSTANTS:
                tokens.append(number(CONSTANTS[ident]))
            else:
                tokens.append(identifier(ident))
        elif ch in _OPERATORS:
            tokens.append(Token(_OPERATORS[ch]))
            i += 1
        elif ch == " ":
            i += 1
        else:
            raise LexError(f"Invalid character: {ch}", ch)

    if num_buf:
        tokens.append(_parse_number(num_buf))

    return _insert_implicit_multiply(tokens)
