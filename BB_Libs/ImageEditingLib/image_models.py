"""
Image editing data models for BatchBox Curves.

This module defines core data structures used by the transform engine.

Classes:
    ChannelShifts: Additive per-channel offsets applied before the lookup table
    ImageRecord: Container for an image's name and both original and modified versions
"""

from dataclasses import dataclass
from typing import NamedTuple

from PIL import Image


class ChannelShifts(NamedTuple):
    r: float = 0.0
    g: float = 0.0
    b: float = 0.0


@dataclass
class ImageRecord:
    name: str
    original: 'Image.Image'
    modified: 'Image.Image'
