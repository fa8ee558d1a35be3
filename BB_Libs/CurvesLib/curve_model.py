"""
Control point model for the tonal curve.

The CurveModel keeps an ordered set of control points and the lookup table
derived from them. Every edit replaces the point tuple with a new, sorted
one and recomputes the table, so readers never observe a half-edited set.

Edits that would break the model's invariants are clamped or ignored
instead of raising:
- x and y are clamped to 0-255
- a new point closer than POINT_X_EPSILON to an existing x is rejected
- the set never shrinks below two points

Classes:
    ControlPoint: One (input level, output level) pair
    CurveModel: Editable point set with a cached lookup table

Functions:
    serialize_points: Convert points to JSON-friendly dictionaries
    deserialize_points: Rebuild points from dictionaries, or None if malformed
"""

import logging
import uuid
from dataclasses import dataclass, replace
from typing import Any, Dict, Iterable, List, Optional, Tuple

from BB_Libs.CurvesLib.curve_lut import LookupTable, compute_lut, round_half_up
from BB_Libs.constants import (
    CHANNEL_MAX,
    CHANNEL_MIN,
    DEFAULT_POINTS,
    FIELD_POINT_ID,
    FIELD_POINT_X,
    FIELD_POINT_Y,
    MIN_POINT_COUNT,
    POINT_X_EPSILON,
)

logger = logging.getLogger(__name__)


def _clamp_coordinate(value: float) -> int:
    return max(CHANNEL_MIN, min(CHANNEL_MAX, round_half_up(value)))


def _generate_point_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class ControlPoint:
    """A user-placed point on the curve.

    Attributes:
        id: Opaque identifier, stable across edits
        x: Input level (0-255)
        y: Output level (0-255)
    """
    id: str
    x: int
    y: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {FIELD_POINT_ID: self.id, FIELD_POINT_X: self.x, FIELD_POINT_Y: self.y}


def default_points() -> Tuple[ControlPoint, ...]:
    """Return the two-point identity set."""
    return tuple(ControlPoint(point_id, x, y) for point_id, x, y in DEFAULT_POINTS)


def _sorted_points(points: Iterable[ControlPoint]) -> Tuple[ControlPoint, ...]:
    return tuple(sorted(points, key=lambda point: point.x))


class CurveModel:
    """
    Editable, always-sorted set of control points.

    Example:
        >>> curve = CurveModel()
        >>> point = curve.add_point(64, 96)
        >>> curve.lut[64]
        96
    """

    def __init__(self, points: Optional[Iterable[ControlPoint]] = None):
        """
        Create a curve from the given points, or the identity pair.

        Points are clamped to range and sorted, and repeated ids are replaced.
        Fewer than two points fall back to the identity pair.
        """
        normalized = []
        seen_ids = set()
        for point in points or ():
            point_id = point.id if point.id not in seen_ids else _generate_point_id()
            seen_ids.add(point_id)
            normalized.append(
                ControlPoint(point_id, _clamp_coordinate(point.x), _clamp_coordinate(point.y))
            )
        if len(normalized) < MIN_POINT_COUNT:
            normalized = list(default_points())
        self._points: Tuple[ControlPoint, ...] = _sorted_points(normalized)
        self._lut: LookupTable = self.compute_lut()

    @property
    def points(self) -> Tuple[ControlPoint, ...]:
        """Current points ordered by ascending x."""
        return self._points

    @property
    def lut(self) -> LookupTable:
        """Lookup table for the current points."""
        return self._lut

    def __len__(self) -> int:
        return len(self._points)

    def get_point(self, point_id: str) -> Optional[ControlPoint]:
        for point in self._points:
            if point.id == point_id:
                return point
        return None

    def _set_points(self, points: Iterable[ControlPoint]) -> None:
        self._points = _sorted_points(points)
        self._lut = self.compute_lut()

    def add_point(self, x: float, y: float) -> Optional[ControlPoint]:
        """
        Insert a new point unless one already sits within POINT_X_EPSILON of x.

        Args:
            x: Input level
            y: Output level

        Returns:
            The inserted point, or None if the insert was rejected
        """
        x = _clamp_coordinate(x)
        if any(abs(point.x - x) < POINT_X_EPSILON for point in self._points):
            logger.debug(f"Rejected point at x={x}: too close to an existing point")
            return None

        new_point = ControlPoint(_generate_point_id(), x, _clamp_coordinate(y))
        self._set_points(self._points + (new_point,))
        return new_point

    def update_point(self, point_id: str, x: float, y: float) -> bool:
        """
        Move a point, clamping x and y independently to 0-255.

        The point may cross its neighbours in x or y; the set is re-sorted.

        Returns:
            True if the point exists and was updated
        """
        if self.get_point(point_id) is None:
            return False

        self._set_points(
            replace(point, x=_clamp_coordinate(x), y=_clamp_coordinate(y))
            if point.id == point_id else point
            for point in self._points
        )
        return True

    def remove_point(self, point_id: str) -> bool:
        """
        Remove a point while more than two points remain.

        Returns:
            True if a point was removed
        """
        if len(self._points) <= MIN_POINT_COUNT:
            return False

        target = self.get_point(point_id)
        if target is None:
            return False

        self._set_points(point for point in self._points if point is not target)
        return True

    def reset(self) -> None:
        """Restore the identity pair."""
        self._set_points(default_points())

    def compute_lut(self) -> LookupTable:
        """Compute the lookup table for the current points."""
        return compute_lut([(point.x, point.y) for point in self._points])

    def serialize(self) -> List[Dict[str, Any]]:
        """Return the point set as a list of dictionaries."""
        return serialize_points(self._points)

    @classmethod
    def deserialize(cls, data: Any) -> "CurveModel":
        """Rebuild a curve from serialized points, or the identity curve if malformed."""
        points = deserialize_points(data)
        if points is None:
            return cls()
        return cls(points)


def serialize_points(points: Iterable[ControlPoint]) -> List[Dict[str, Any]]:
    return [point.to_dict() for point in points]


def deserialize_points(data: Any) -> Optional[List[ControlPoint]]:
    """
    Parse a serialized point list.

    Args:
        data: A list of dictionaries with 'x', 'y' and optional 'id' keys

    Returns:
        Clamped points, or None if data is not a list of at least two valid
        points (any invalid entry rejects the whole list). A missing or
        repeated id is replaced with a fresh one.
    """
    if not isinstance(data, list) or len(data) < MIN_POINT_COUNT:
        return None

    points: List[ControlPoint] = []
    seen_ids = set()
    for entry in data:
        if not isinstance(entry, dict):
            return None
        try:
            x = _clamp_coordinate(float(entry[FIELD_POINT_X]))
            y = _clamp_coordinate(float(entry[FIELD_POINT_Y]))
        except (KeyError, TypeError, ValueError, OverflowError):
            return None
        point_id = str(entry.get(FIELD_POINT_ID) or "")
        if not point_id or point_id in seen_ids:
            point_id = _generate_point_id()
        seen_ids.add(point_id)
        points.append(ControlPoint(point_id, x, y))

    return points
