"""
Calculator session: the expression being edited, its live result and the
history of finished calculations.

While the expression is being edited the result is refreshed after every
change; errors are swallowed there and the raw text is shown instead, so a
half-typed ``3+`` reads as ``3+`` rather than an error. Only calculate() and
recall() report errors.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from .config import DEFAULT_HISTORY_LIMIT
from .errors import CalcError
from .evaluator import apply_function as _apply, evaluate_expression
from .formatting import format_result

logger = logging.getLogger(__name__)

OPERATORS = "+-*/^%"
_OPERATOR_RE = re.compile("[%s]" % re.escape(OPERATORS))


def _reciprocal(x):
    return 1.0 / x if x != 0.0 else float("inf")


# Functions offered on the scientific keypad, applied to the current result.
def _keypad_functions():
    funcs = {
        name: (lambda v, name=name: _apply(name, v))
        for name in ("sin", "cos", "tan", "sqrt", "log", "ln", "exp", "abs")
    }
    funcs["1/x"] = _reciprocal
    funcs["x^2"] = lambda v: v * v
    return funcs


KEYPAD_FUNCTIONS = _keypad_functions()


class CalculatorMode(Enum):
    BASIC = "basic"
    SCIENTIFIC = "scientific"


@dataclass
class CalculationEntry:
    expression: str
    result: str
    timestamp: datetime = field(default_factory=datetime.now)


class Calculator:
    def __init__(self, history_limit: int = DEFAULT_HISTORY_LIMIT):
        self.expression = ""
        self.result = "0"
        self.history: List[CalculationEntry] = []
        self.error_message: Optional[str] = None
        self.mode = CalculatorMode.BASIC
        self.history_limit = history_limit

    # -- editing ---------------------------------------------------------

    def append_digit(self, digit: str):
        self.error_message = None
        self.expression += digit
        self.update_result()

    def append_text(self, text: str):
        """Append arbitrary typed text (typing mode) and refresh the result."""
        self.error_message = None
        self.expression += text
        self.update_result()

    def append_operator(self, op: str):
        if op not in OPERATORS:
            raise ValueError(f"Unsupported operator: {op}")
        self.error_message = None
        if not self.expression:
            # only a leading minus makes sense on an empty line
            if op == "-":
                self.expression = "-"
            return
        if self.expression[-1] in OPERATORS:
            self.expression = self.expression[:-1]
        self.expression += op

    def append_decimal(self):
        self.error_message = None
        last_number = _OPERATOR_RE.split(self.expression)[-1]
        if "." in last_number:
            return
        self.expression += "0." if not last_number else "."

    def backspace(self):
        self.error_message = None
        self.expression = self.expression[:-1]
        self.update_result()

    def clear(self):
        self.expression = ""
        self.result = "0"
        self.error_message = None

    def clear_all(self):
        self.clear()
        self.history.clear()

    def toggle_mode(self):
        if self.mode is CalculatorMode.BASIC:
            self.mode = CalculatorMode.SCIENTIFIC
        else:
            self.mode = CalculatorMode.BASIC
        return self.mode

    # -- evaluation ------------------------------------------------------

    def update_result(self):
        if not self.expression:
            self.result = "0"
            return
        try:
            self.result = format_result(evaluate_expression(self.expression))
            self.error_message = None
        except CalcError as e:
            logger.debug("live update of %r failed: %s", self.expression, e)
            self.result = self.expression

    def _fail(self, error: CalcError):
        self.error_message = f"Error: {error}"
        self.result = "Error"

    def _record(self, expression: str, result: str):
        self.history.append(CalculationEntry(expression, result))
        if self.history_limit and len(self.history) > self.history_limit:
            del self.history[: len(self.history) - self.history_limit]

    def calculate(self) -> Optional[str]:
        """
        Evaluate the current expression. On success the formatted result is
        recorded in the history and becomes the new expression; on failure
        error_message is set and the result reads "Error".
        """
        if not self.expression:
            return None
        try:
            value = evaluate_expression(self.expression)
        except CalcError as e:
            self._fail(e)
            return None

        result = format_result(value)
        self._record(self.expression, result)
        self.result = result
        self.expression = result
        self.error_message = None
        return result

    def apply_function(self, name: str) -> Optional[str]:
        """Apply a keypad function to the displayed result, if it is a number."""
        if name not in KEYPAD_FUNCTIONS:
            raise ValueError(f"Unknown function: {name}")
        try:
            current = float(self.result)
        except ValueError:
            return None

        result = format_result(KEYPAD_FUNCTIONS[name](current))
        self._record(f"{name}({format_result(current)})", result)
        self.expression = result
        self.result = result
        return result

    def recall(self, index: int) -> bool:
        """Load a history entry's expression and re-evaluate it."""
        if not 0 <= index < len(self.history):
            return False
        self.expression = self.history[index].expression
        try:
            self.result = format_result(evaluate_expression(self.expression))
            self.error_message = None
        except CalcError as e:
            self._fail(e)
        return True
