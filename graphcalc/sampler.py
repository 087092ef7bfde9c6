import logging
import math
import operator
from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from graphcalc import config
from graphcalc.errors import EvalError
from graphcalc.evaluator import evaluate
from graphcalc.nodes import Node

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class SamplePoint(NamedTuple):
    x: float
    y: Optional[float]  # None where the function is undefined

    @property
    def defined(self) -> bool:
        return self.y is not None


def sample(tree: Node, x_min: float, x_max: float, step_count: int) -> List[SamplePoint]:
    """
    Evaluate ``tree`` at ``step_count + 1`` evenly spaced x-values from x_min to x_max.

    A domain error at one x marks that point undefined and sampling carries on,
    so the caller can leave a gap in the drawn curve. Points come back in
    ascending x.
    """
    if not (math.isfinite(x_min) and math.isfinite(x_max)):
        raise ValueError("x-range bounds must be finite numbers")
    if x_min >= x_max:
        raise ValueError("x-min must be < x-max")
    try:
        steps = operator.index(step_count)
    except TypeError:
        raise ValueError(f"step_count must be an integer, got {step_count!r}") from None
    if steps < 1 or steps > config.MAX_STEP_COUNT:
        raise ValueError(f"step_count must be between 1 and {config.MAX_STEP_COUNT}")

    xs = np.linspace(x_min, x_max, steps + 1)
    points: List[SamplePoint] = []
    undefined = 0
    for xv in xs:
        x = float(xv)
        try:
            y: Optional[float] = evaluate(tree, x)
        except EvalError:
            y = None
            undefined += 1
        points.append(SamplePoint(x, y))

    logger.debug(
        "sample: %d points over [%g, %g], %d undefined", len(points), x_min, x_max, undefined
    )
    return points


def sample_for_viewport(tree: Node, x_min: float, x_max: float, pixel_width: int) -> List[SamplePoint]:
    """Sample one point per pixel column of a viewport ``pixel_width`` pixels wide."""
    return sample(tree, x_min, x_max, max(1, int(pixel_width)))


def sample_arrays(samples: Sequence[SamplePoint]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Convert samples into ``(xs, ys)`` float arrays, with NaN for undefined points.

    Plotting libraries break the line at NaN, which gives the visible gap.
    """
    xs = np.array([p.x for p in samples], dtype=float)
    ys = np.array([p.y if p.defined else np.nan for p in samples], dtype=float)
    return xs, ys
