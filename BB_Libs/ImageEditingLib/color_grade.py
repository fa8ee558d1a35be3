"""
Temperature and tint grading.

A ColorGrade turns two user-facing sliders into additive per-channel shifts.
Positive temperature warms the image (more red, less blue); positive tint
pushes toward green, negative toward magenta. The shifts are applied to the
raw channel values before the curve lookup table.

Classes:
    ColorGrade: Temperature/tint pair clamped to -100..100

Functions:
    compute_shifts: Per-channel shifts for a grade
"""

import math
from dataclasses import dataclass, asdict
from typing import Any, Dict

from BB_Libs.ImageEditingLib.image_models import ChannelShifts
from BB_Libs.constants import GRADE_MAX, GRADE_MIN, GRADE_SHIFT_FACTOR


def _clamp_grade(value: Any) -> int:
    return max(GRADE_MIN, min(GRADE_MAX, int(math.floor(float(value) + 0.5))))


@dataclass(frozen=True)
class ColorGrade:
    """Color grading parameters.

    Attributes:
        temperature: Warm/cool balance, -100 (cool) to 100 (warm)
        tint: Green/magenta balance, -100 (magenta) to 100 (green)
    """
    temperature: int = 0
    tint: int = 0

    def __post_init__(self):
        object.__setattr__(self, "temperature", _clamp_grade(self.temperature))
        object.__setattr__(self, "tint", _clamp_grade(self.tint))

    @property
    def is_neutral(self) -> bool:
        return self.temperature == 0 and self.tint == 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ColorGrade":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**filtered)


def compute_shifts(grade: ColorGrade) -> ChannelShifts:
    """
    Compute the additive shift for each color channel.

    Args:
        grade: The color grade to convert

    Returns:
        ChannelShifts with r = 0.4 * temperature, g = 0.4 * tint and
        b = -0.4 * temperature
    """
    return ChannelShifts(
        r=GRADE_SHIFT_FACTOR * grade.temperature,
        g=GRADE_SHIFT_FACTOR * grade.tint,
        b=-GRADE_SHIFT_FACTOR * grade.temperature,
    )
