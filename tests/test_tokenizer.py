import math

import pytest

from termcalc.errors import LexError
from termcalc.tokenizer import MULTIPLY, Token, TokenKind, identifier, number, tokenize

LPAREN = Token(TokenKind.LPAREN)
RPAREN = Token(TokenKind.RPAREN)
PLUS = Token(TokenKind.PLUS)


def test_numbers_and_operators():
    assert tokenize("12 + 0.5") == [number(12), PLUS, number(0.5)]
    kinds = [t.kind for t in tokenize("1-2*3/4^5%6")]
    assert kinds == [
        TokenKind.NUMBER, TokenKind.MINUS, TokenKind.NUMBER, TokenKind.MULTIPLY,
        TokenKind.NUMBER, TokenKind.DIVIDE, TokenKind.NUMBER, TokenKind.POWER,
        TokenKind.NUMBER, TokenKind.MODULO, TokenKind.NUMBER,
    ]


def test_leading_and_trailing_dot_literals():
    assert tokenize(".5") == [number(0.5)]
    assert tokenize("2.") == [number(2.0)]


def test_constants_resolve_to_numbers():
    assert tokenize("pi") == [number(math.pi)]
    assert tokenize("PI") == [number(math.pi)]
    assert tokenize("π") == [number(math.pi)]
    assert tokenize("e") == [number(math.e)]


def test_identifiers_are_lowercased():
    assert tokenize("SIN(30)")[0] == identifier("sin")
    assert tokenize("x_1") == [identifier("x_1")]
    assert tokenize("x2") == [identifier("x2")]


def test_implicit_multiplication():
    assert tokenize("3(4)") == [number(3), MULTIPLY, LPAREN, number(4), RPAREN]
    assert tokenize("(2)3") == [LPAREN, number(2), RPAREN, MULTIPLY, number(3)]
    assert tokenize("(2)(3)") == [LPAREN, number(2), RPAREN, MULTIPLY, LPAREN, number(3), RPAREN]


def test_no_implicit_multiplication_before_function_call():
    assert tokenize("sin(0)")[:2] == [identifier("sin"), LPAREN]
    assert tokenize("2 pi") == [number(2), number(math.pi)]


def test_space_ends_a_number():
    assert tokenize("1 2") == [number(1), number(2)]


def test_invalid_character():
    with pytest.raises(LexError) as exc:
        tokenize("2#3")
    assert exc.value.text == "#"
    assert "#" in str(exc.value)


def test_malformed_number():
    with pytest.raises(LexError) as exc:
        tokenize("1.2.3+4")
    assert exc.value.text == "1.2.3"

    with pytest.raises(LexError):
        tokenize(".")


def test_empty_input():
    assert tokenize("") == []
    assert tokenize("   ") == []


def test_token_str():
    assert str(number(2.5)) == "2.5"
    assert str(identifier("foo")) == "foo"
    assert str(Token(TokenKind.POWER)) == "^"
