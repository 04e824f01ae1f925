# pourover/services/curve.py
# Target weight curve math: interpolation, scaling, chart sampling
# Pure functions only; callers hand in already-validated recipe data.

from __future__ import annotations
import math
from typing import Any, List, Mapping, Sequence, Union

from pourover.models.schemas import MAX_WEIGHT_GRAMS, WeightPoint

PointLike = Union[WeightPoint, Mapping[str, Any]]

DEFAULT_POINT_GAP = 30  # seconds between the last point and a newly added one

class InvalidInputError(ValueError):
    """Raised for inputs the curve math cannot work with (empty curve, bad factor)."""

def _tw(p: PointLike) -> tuple[float, float]:
    if isinstance(p, Mapping):
        return float(p["time"]), float(p["weight"])
    return float(p.time), float(p.weight)

def target_weight(points: Sequence[PointLike], t: float) -> float:
    """
    Target weight (g) at elapsed time ``t`` (s).

    Points must be ordered by time; the result is clamped to the first/last
    weight outside the curve and linearly interpolated inside it.
    """
    if not points:
        raise InvalidInputError("target curve has no points")

    first_t, first_w = _tw(points[0])
    last_t, last_w = _tw(points[-1])
    if t <= first_t:
        return first_w
    if t >= last_t:
        return last_w

    # first segment with a.time <= t < b.time
    i = 0
    while i < len(points) - 1 and _tw(points[i + 1])[0] <= t:
        i += 1

    a_t, a_w = _tw(points[i])
    b_t, b_w = _tw(points[i + 1])
    ratio = (t - a_t) / (b_t - a_t)
    return a_w + ratio * (b_w - a_w)

def scale_points(points: Sequence[PointLike], factor: float) -> List[WeightPoint]:
    """New curve with every weight multiplied by ``factor``; times unchanged."""
    if not math.isfinite(factor) or factor <= 0:
        raise InvalidInputError(f"scale factor must be a positive number, got {factor}")
    out: List[WeightPoint] = []
    for p in points:
        t, w = _tw(p)
        scaled = w * factor
        if scaled > MAX_WEIGHT_GRAMS:
            raise InvalidInputError(f"scaled weight {scaled:g} g exceeds {MAX_WEIGHT_GRAMS:g} g")
        out.append(WeightPoint(time=t, weight=scaled))
    return out

def max_weight(points: Sequence[PointLike]) -> float:
    # chart y-axis upper bound; empty curve -> 0
    return max((_tw(p)[1] for p in points), default=0.0)

def sample_curve(points: Sequence[PointLike], total_time: float, step: float = 1.0) -> List[WeightPoint]:
    """Evenly spaced samples over [0, total_time], both ends included."""
    if not math.isfinite(step) or step <= 0:
        raise InvalidInputError(f"sample step must be positive, got {step}")
    if total_time < 0:
        raise InvalidInputError(f"total time must not be negative, got {total_time}")

    n = int(total_time // step)
    times = [k * step for k in range(n + 1)]
    if not times or times[-1] < total_time:
        times.append(float(total_time))
    return [WeightPoint(time=t, weight=target_weight(points, t)) for t in times]

def next_point_time(points: Sequence[PointLike], gap: float = DEFAULT_POINT_GAP) -> float:
    # editor "add point": one gap after the latest point
    if not points:
        return float(gap)
    return max(_tw(p)[0] for p in points) + gap
