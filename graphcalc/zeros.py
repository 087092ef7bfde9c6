from typing import List, NamedTuple, Optional, Sequence

from graphcalc import config
from graphcalc.sampler import SamplePoint


class ZeroPoint(NamedTuple):
    x: float
    y: float = 0.0


def find_zero_crossings(
    samples: Sequence[SamplePoint],
    tolerance: float = config.ZERO_TOLERANCE,
    max_jump: Optional[float] = None,
) -> List[ZeroPoint]:
    """
    Mark x-intercepts in an x-ascending sample sequence.

    Adjacent defined samples with strictly opposite signs give one point by
    linear interpolation between them. A sample with |y| <= tolerance is an
    intercept at its own x; a run of such samples is reported once, at its
    first sample. Undefined samples break adjacency. When ``max_jump`` is set,
    pairs whose y-values differ by more than it are taken as a discontinuity
    (e.g. across a pole) and skipped.

    Accuracy is bounded by the sample spacing; this marks intercepts for
    display, it is not a root finder.
    """
    zeros: List[ZeroPoint] = []
    prev: Optional[SamplePoint] = None
    in_zero_run = False

    for point in samples:
        if not point.defined:
            prev = None
            in_zero_run = False
            continue

        if abs(point.y) <= tolerance:
            if not in_zero_run:
                zeros.append(ZeroPoint(point.x, 0.0))
            in_zero_run = True
        else:
            if prev is not None and not in_zero_run and (prev.y < 0) != (point.y < 0):
                dy = point.y - prev.y
                if max_jump is None or abs(dy) <= max_jump:
                    x0 = prev.x - prev.y * (point.x - prev.x) / dy
                    zeros.append(ZeroPoint(x0, 0.0))
            in_zero_run = False
        prev = point

    return zeros
