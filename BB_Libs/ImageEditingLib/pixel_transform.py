"""
Pixel Transform Engine for BatchBox Curves.

Decodes a source image, applies the color grade shifts and the curve lookup
table to every pixel, and re-encodes the result to a lossy format.

The per-pixel step is a pure map over an (H, W, 4) uint8 buffer with no
dependency between pixels, implemented as vectorized NumPy indexing:

    out[c] = lut[clamp(round(in[c] + shift[c]), 0, 255)]   for c in R, G, B
    out[A] = in[A]

Example:
    >>> engine = PixelTransformEngine()
    >>> data = engine.transform(Path("photo.png"), curve.lut, ColorGrade(20, -5))
    >>> Path("photo_processed.jpg").write_bytes(data)

Classes:
    DecodeError: Source bytes could not be read as an image
    EncodeError: Transformed buffer could not be serialized
    EncodeOptions: Output format and quality
    PixelTransformEngine: Decode, transform and encode in one call

Functions:
    decode_image: Open a source as an RGBA PIL Image
    apply_lut_and_shifts: Pure per-pixel transform on a NumPy buffer
    transform_image: Apply the transform to a PIL Image
    encode_image: Serialize a PIL Image to lossy bytes
"""

import io
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import numpy as np
from PIL import Image

from BB_Libs.ImageEditingLib.color_grade import ColorGrade, compute_shifts
from BB_Libs.ImageEditingLib.image_models import ChannelShifts, ImageRecord
from BB_Libs.constants import (
    CHANNEL_MAX,
    CHANNEL_MIN,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_QUALITY,
    LOSSY_OUTPUT_FORMATS,
    LUT_SIZE,
)

logger = logging.getLogger(__name__)


class DecodeError(OSError):
    """Raised when a source cannot be interpreted as an image."""


class EncodeError(OSError):
    """Raised when a transformed image cannot be serialized."""


@dataclass
class EncodeOptions:
    """Output encoding configuration.

    Attributes:
        quality: Lossy quality factor 0.0-1.0 (default: 0.9)
        save_format: Output format, JPEG or WEBP (default: JPEG)
    """
    quality: float = DEFAULT_QUALITY
    save_format: str = DEFAULT_OUTPUT_FORMAT

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EncodeOptions":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**filtered)

    @property
    def normalized_format(self) -> str:
        # PIL uses "JPEG" not "JPG"
        save_format = self.save_format.upper()
        if save_format == "JPG":
            save_format = "JPEG"
        if save_format not in LOSSY_OUTPUT_FORMATS:
            supported = ", ".join(sorted(LOSSY_OUTPUT_FORMATS))
            raise ValueError(f"Unsupported output format '{self.save_format}'. Supported: {supported}")
        return save_format

    @property
    def extension(self) -> str:
        """File extension (without dot) for the output format."""
        return LOSSY_OUTPUT_FORMATS[self.normalized_format]

    def get_save_kwargs(self) -> Dict[str, Any]:
        """Get PIL Image.save() kwargs, mapping quality 0.0-1.0 onto 1-100."""
        quality = int(round(float(self.quality) * 100))
        return {
            "format": self.normalized_format,
            "quality": max(1, min(100, quality)),
        }


def decode_image(source: Any) -> Image.Image:
    """
    Decode a source into an RGBA image at native resolution.

    Args:
        source: Encoded bytes, a filesystem path, or a binary file object

    Returns:
        Fully loaded PIL Image in RGBA mode

    Raises:
        DecodeError: If the source cannot be read or is not an image
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        source = io.BytesIO(bytes(source))
    elif isinstance(source, str):
        source = Path(source)

    try:
        with Image.open(source) as img:
            img.load()
            # Convert to RGBA for consistency
            return img.convert("RGBA")
    except Exception as e:
        raise DecodeError(f"Failed to decode image: {str(e)}") from e


def _lut_array(lut: Sequence[int]) -> np.ndarray:
    if len(lut) != LUT_SIZE:
        raise ValueError(f"Lookup table must have {LUT_SIZE} entries, got {len(lut)}")
    return np.clip(np.asarray(lut, dtype=np.int64), CHANNEL_MIN, CHANNEL_MAX).astype(np.uint8)


def _shifted_indices(channel: np.ndarray, shift: float) -> np.ndarray:
    if shift == 0:
        return channel
    # Round half up so the index matches the lookup table's own rounding
    shifted = np.floor(channel.astype(np.float64) + shift + 0.5)
    return np.clip(shifted, CHANNEL_MIN, CHANNEL_MAX).astype(np.uint8)


def apply_lut_and_shifts(
    rgba: np.ndarray,
    lut: Sequence[int],
    shifts: ChannelShifts = ChannelShifts(),
) -> np.ndarray:
    """
    Apply channel shifts then the lookup table to every pixel.

    Args:
        rgba: (H, W, 4) uint8 buffer
        lut: 256-entry lookup table
        shifts: Additive R, G, B offsets applied before the lookup

    Returns:
        New (H, W, 4) uint8 buffer; the input is not modified and alpha is
        copied unchanged

    Raises:
        ValueError: If the buffer is not RGBA or the table has the wrong size
    """
    if rgba.ndim != 3 or rgba.shape[2] != 4:
        raise ValueError(f"Expected an (H, W, 4) buffer, got shape {rgba.shape}")

    table = _lut_array(lut)
    output = rgba.copy()
    for channel_index, shift in enumerate(shifts):
        output[..., channel_index] = table[_shifted_indices(rgba[..., channel_index], shift)]
    return output


def transform_image(image: Image.Image, lut: Sequence[int], grade: ColorGrade) -> Image.Image:
    """Apply the grade and lookup table to a PIL Image, returning a new RGBA image."""
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    pixels = np.asarray(image, dtype=np.uint8)
    transformed = apply_lut_and_shifts(pixels, lut, compute_shifts(grade))
    return Image.fromarray(transformed)


def encode_image(image: Image.Image, options: Optional[EncodeOptions] = None) -> bytes:
    """
    Encode an image to a lossy format.

    Alpha is dropped before encoding since neither output format keeps it
    here.

    Args:
        image: PIL Image to encode
        options: Format and quality (default: JPEG at 0.9)

    Returns:
        Encoded bytes

    Raises:
        EncodeError: If Pillow fails or produces no output
    """
    options = options or EncodeOptions()
    kwargs = options.get_save_kwargs()

    if image.mode != "RGB":
        image = image.convert("RGB")

    buffer = io.BytesIO()
    try:
        image.save(buffer, **kwargs)
    except Exception as e:
        raise EncodeError(f"Failed to encode image as {kwargs['format']}: {str(e)}") from e

    data = buffer.getvalue()
    if not data:
        raise EncodeError(f"Encoding as {kwargs['format']} produced no output")
    return data


class PixelTransformEngine:
    """
    Decodes, transforms and re-encodes one image per call.

    The engine holds only encoding options; the lookup table and grade are
    passed on every call so callers can snapshot them.
    """

    def __init__(self, options: Optional[EncodeOptions] = None):
        self.options = options or EncodeOptions()

    def transform(
        self,
        source: Any,
        lut: Sequence[int],
        grade: ColorGrade,
        quality: Optional[float] = None,
    ) -> bytes:
        """
        Produce the encoded output for one source.

        Args:
            source: Encoded bytes, path, or binary file object
            lut: 256-entry lookup table
            grade: Color grade applied before the table
            quality: Override for the configured quality (0.0-1.0)

        Returns:
            Encoded output bytes

        Raises:
            DecodeError: If the source is not a readable image
            EncodeError: If the result cannot be encoded
        """
        options = self.options
        if quality is not None:
            options = EncodeOptions(quality=quality, save_format=options.save_format)

        image = decode_image(source)
        try:
            transformed = transform_image(image, lut, grade)
        finally:
            image.close()

        try:
            data = encode_image(transformed, options)
        finally:
            transformed.close()

        logger.debug(f"Encoded {len(data)} bytes as {options.normalized_format}")
        return data

    def render_preview(
        self,
        source: Any,
        lut: Sequence[int],
        grade: ColorGrade,
        name: str = "",
    ) -> ImageRecord:
        """
        Transform a source without encoding, for before/after previews.

        Returns:
            ImageRecord holding the decoded original and the transformed image
        """
        original = decode_image(source)
        return ImageRecord(name=name, original=original, modified=transform_image(original, lut, grade))
