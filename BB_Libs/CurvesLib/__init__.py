"""
CurvesLib - Tonal curve editing

This module provides the control point model and the lookup table
interpolation used by the curves tool.
"""

from BB_Libs.CurvesLib.curve_lut import (
    LookupTable,
    identity_lut,
    compute_lut,
)
from BB_Libs.CurvesLib.curve_model import (
    ControlPoint,
    CurveModel,
    default_points,
    serialize_points,
    deserialize_points,
)

__all__ = [
    "LookupTable",
    "identity_lut",
    "compute_lut",
    "ControlPoint",
    "CurveModel",
    "default_points",
    "serialize_points",
    "deserialize_points",
]
