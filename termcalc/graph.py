"""
Sampling a function of ``x`` for plotting.

The expression text is evaluated once per sample with every stand-alone
``x`` replaced by the sample value in parentheses (``x^2`` at 3.5 becomes
``(3.5)^2``). Points that fail to evaluate, are not finite, or fall outside
the window's y range are dropped, so ``1/x`` still plots around ``x = 0``.
"""

import logging
import math
import re
from dataclasses import dataclass, replace
from typing import List, NamedTuple, Optional

import numpy as np

from .config import (
    DEFAULT_SAMPLES,
    DEFAULT_X_MAX,
    DEFAULT_X_MIN,
    DEFAULT_Y_MAX,
    DEFAULT_Y_MIN,
)
from .errors import CalcError
from .evaluator import evaluate_expression

logger = logging.getLogger(__name__)

VARIABLE = "x"

# "x" on its own, not inside a longer name such as "exp"
_VARIABLE_RE = re.compile(r"(?<![A-Za-z_])%s(?![A-Za-z_])" % VARIABLE)

PAN_STEP = 0.1


class GraphPoint(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class GraphWindow:
    x_min: float = DEFAULT_X_MIN
    x_max: float = DEFAULT_X_MAX
    y_min: float = DEFAULT_Y_MIN
    y_max: float = DEFAULT_Y_MAX

    def __post_init__(self):
        if not self.x_min < self.x_max:
            raise ValueError("x_min must be less than x_max")
        if not self.y_min < self.y_max:
            raise ValueError("y_min must be less than y_max")

    @property
    def x_range(self) -> float:
        return self.x_max - self.x_min

    @property
    def y_range(self) -> float:
        return self.y_max - self.y_min

    def contains_y(self, y: float) -> bool:
        return self.y_min <= y <= self.y_max

    def pan(self, dx: float, dy: float) -> "GraphWindow":
        """Shift by ``dx``/``dy`` tenths of the current range."""
        sx = dx * self.x_range * PAN_STEP
        sy = dy * self.y_range * PAN_STEP
        return replace(
            self,
            x_min=self.x_min + sx,
            x_max=self.x_max + sx,
            y_min=self.y_min + sy,
            y_max=self.y_max + sy,
        )

    def zoom(self, factor: float) -> "GraphWindow":
        """Scale both ranges about the centre; ``factor > 1`` zooms in."""
        if factor <= 0:
            raise ValueError("zoom factor must be positive")
        x_center = (self.x_min + self.x_max) / 2
        y_center = (self.y_min + self.y_max) / 2
        half_x = self.x_range / factor / 2
        half_y = self.y_range / factor / 2
        return GraphWindow(
            x_center - half_x, x_center + half_x, y_center - half_y, y_center + half_y
        )


def substitute_variable(expression: str, x: float) -> str:
    # positional notation: "1e-05" would tokenize as 1 * e * ...
    value = np.format_float_positional(x, trim="-")
    return _VARIABLE_RE.sub(lambda _: "(%s)" % value, expression)


def point_at(expression: str, x: float) -> Optional[float]:
    """Value of the expression at ``x``, or None where it is undefined."""
    try:
        return evaluate_expression(substitute_variable(expression, x))
    except CalcError:
        return None


def sample_points(
    expression: str, window: GraphWindow = GraphWindow(), samples: int = DEFAULT_SAMPLES
) -> List[GraphPoint]:
    if samples < 1:
        raise ValueError("samples must be at least 1")

    points = []
    for i in range(samples):
        x = window.x_min + (i / samples) * window.x_range
        try:
            y = evaluate_expression(substitute_variable(expression, x))
        except CalcError as e:
            logger.debug("dropping x=%r: %s", x, e)
            continue
        if not math.isfinite(y) or not window.contains_y(y):
            logger.debug("dropping x=%r: y=%r outside window", x, y)
            continue
        points.append(GraphPoint(x, y))

    logger.debug("sampled %d/%d points of %r", len(points), samples, expression)
    return points
