"""Expression engine behind the terminal calculator."""

from .errors import (
    CalcError,
    DivisionByZeroError,
    EvalError,
    LexError,
    MissingParenthesisError,
    NestingTooDeepError,
    UnexpectedEndError,
    UnexpectedIdentifierError,
    UnexpectedTokenError,
    UnknownFunctionError,
)
from .evaluator import evaluate, evaluate_expression
from .formatting import format_result
from .tokenizer import Token, TokenKind, tokenize

__version__ = "0.1.0"

__all__ = [
    "CalcError",
    "DivisionByZeroError",
    "EvalError",
    "LexError",
    "MissingParenthesisError",
    "NestingTooDeepError",
    "Token",
    "TokenKind",
    "UnexpectedEndError",
    "UnexpectedIdentifierError",
    "UnexpectedTokenError",
    "UnknownFunctionError",
    "evaluate",
    "evaluate_expression",
    "format_result",
    "tokenize",
]
