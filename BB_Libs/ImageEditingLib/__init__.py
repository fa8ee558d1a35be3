"""
ImageEditingLib - Core image editing functionality

This module provides the color grade model and the pixel transform
engine that applies a curve lookup table to whole images.
"""

from BB_Libs.ImageEditingLib.image_models import ChannelShifts, ImageRecord
from BB_Libs.ImageEditingLib.color_grade import ColorGrade, compute_shifts
from BB_Libs.ImageEditingLib.pixel_transform import (
    DecodeError,
    EncodeError,
    EncodeOptions,
    PixelTransformEngine,
    decode_image,
    apply_lut_and_shifts,
    transform_image,
    encode_image,
)

__all__ = [
    "ChannelShifts",
    "ImageRecord",
    "ColorGrade",
    "compute_shifts",
    "DecodeError",
    "EncodeError",
    "EncodeOptions",
    "PixelTransformEngine",
    "decode_image",
    "apply_lut_and_shifts",
    "transform_image",
    "encode_image",
]
