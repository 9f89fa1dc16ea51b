"""Canonical display string for evaluation results."""

import math

DECIMALS = 10


def format_result(value: float) -> str:
    """
    Format a result for the display and history.

    Infinities of either sign print as ``Infinity`` and NaN as ``NaN``.
    Anything else is printed with ten decimals, then trailing zeros and a
    dangling decimal point are dropped: ``3.0`` -> ``"3"``, ``3.5`` -> ``"3.5"``.
    """
    if math.isinf(value):
        return "Infinity"
    if math.isnan(value):
        return "NaN"
    s = f"{value:.{DECIMALS}f}"
    return s.rstrip("0").rstrip(".")
