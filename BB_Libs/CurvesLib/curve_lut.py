"""
Curve-to-lookup-table interpolation for BatchBox Curves.

Turns a set of (input level, output level) control points into a 256-entry
lookup table using cubic Hermite interpolation. Tangents are the mean of the
adjacent secants, forced to zero at local extrema so the curve does not
overshoot between points.

Non-monotone point sets are allowed: the result is only clamped to the valid
range at the final rounding step.

Functions:
    identity_lut: The 256-entry identity table
    round_half_up: Round to the nearest integer, halves upward
    compute_secants: Segment slopes between consecutive points
    compute_tangents: Per-point tangents used by the Hermite basis
    evaluate_curve: Interpolated output for one input level
    compute_lut: Build the full lookup table from control points
"""

import math
from typing import Dict, List, Sequence, Tuple

from BB_Libs.constants import CHANNEL_MAX, CHANNEL_MIN, LUT_SIZE

LookupTable = Tuple[int, ...]
Coordinate = Tuple[float, float]


def identity_lut() -> LookupTable:
    """Return a table that maps every level to itself."""
    return tuple(range(LUT_SIZE))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _clamp_level(value: float) -> int:
    return max(CHANNEL_MIN, min(CHANNEL_MAX, round_half_up(value)))


def _prepare_coordinates(points: Sequence[Coordinate]) -> List[Coordinate]:
    """
    Sort coordinates by x and collapse entries sharing the same x.

    The later entry in sort order wins, so a zero-width segment never
    reaches the secant computation.
    """
    ordered = sorted(((float(x), float(y)) for x, y in points), key=lambda p: p[0])
    collapsed: Dict[float, float] = {}
    for x, y in ordered:
        collapsed[x] = y
    return sorted(collapsed.items())


def compute_secants(xs: Sequence[float], ys: Sequence[float]) -> List[float]:
    """
    Compute the slope of every segment between consecutive points.

    Args:
        xs: Strictly increasing x coordinates
        ys: Matching y coordinates

    Returns:
        List of len(xs) - 1 slopes
    """
    return [
        (ys[i + 1] - ys[i]) / (xs[i + 1] - xs[i])
        for i in range(len(xs) - 1)
    ]


def compute_tangents(secants: Sequence[float]) -> List[float]:
    """
    Compute the tangent at every point from the segment secants.

    Interior tangents are the mean of the two adjacent secants, or zero when
    those secants differ in sign or either is flat. The end points take the
    slope of their only segment.

    Args:
        secants: Output of compute_secants (at least one entry)

    Returns:
        List of len(secants) + 1 tangents
    """
    tangents = [secants[0]]
    for i in range(len(secants) - 1):
        left, right = secants[i], secants[i + 1]
        if left * right <= 0:
            tangents.append(0.0)
        else:
            tangents.append((left + right) / 2.0)
    tangents.append(secants[-1])
    return tangents


def _find_segment(xs: Sequence[float], level: float) -> int:
    last = len(xs) - 2
    for j in range(last):
        if xs[j] <= level < xs[j + 1]:
            return j
    return last


def evaluate_curve(
    xs: Sequence[float],
    ys: Sequence[float],
    tangents: Sequence[float],
    level: float,
) -> int:
    """
    Evaluate the interpolated curve at one input level.

    Levels at or beyond the outermost points take that point's y. Inside
    the range the cubic Hermite basis is evaluated on the containing
    segment, and the result is rounded half up and clamped to 0-255.
    """
    if level <= xs[0]:
        return _clamp_level(ys[0])
    if level >= xs[-1]:
        return _clamp_level(ys[-1])

    j = _find_segment(xs, level)
    h = xs[j + 1] - xs[j]
    t = (level - xs[j]) / h
    t2 = t * t
    t3 = t2 * t

    h00 = 2 * t3 - 3 * t2 + 1
    h10 = t3 - 2 * t2 + t
    h01 = -2 * t3 + 3 * t2
    h11 = t3 - t2

    value = (
        h00 * ys[j]
        + h10 * h * tangents[j]
        + h01 * ys[j + 1]
        + h11 * h * tangents[j + 1]
    )
    return _clamp_level(value)


def compute_lut(points: Sequence[Coordinate]) -> LookupTable:
    """
    Build a 256-entry lookup table from control point coordinates.

    Args:
        points: (x, y) pairs in any order; x and y are expected in 0-255

    Returns:
        Tuple of 256 ints in 0-255, indexed by input level

    Example:
        >>> compute_lut([(0, 0), (255, 255)])[128]
        128
    """
    coordinates = _prepare_coordinates(points)
    if len(coordinates) < 2:
        return identity_lut()

    xs = [x for x, _ in coordinates]
    ys = [y for _, y in coordinates]
    tangents = compute_tangents(compute_secants(xs, ys))

    return tuple(evaluate_curve(xs, ys, tangents, level) for level in range(LUT_SIZE))
