"""
Batch intake for BatchBox Curves.

Turns sources handed over by the file intake (paths, encoded bytes, or
binary file objects) into BatchItems. Reading dimensions only parses the
image header; the full decode happens later in the transform engine.

Functions:
    get_supported_image_formats: Get list of supported image extensions
    is_supported_format: Check a path's extension
    filter_supported_paths: Keep only paths with supported extensions
    get_source_size: Size of a source in bytes
    read_image_dimensions: Width and height from the image header
    create_batch_item: Build a pending BatchItem for a source
"""

import io
import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple

from PIL import Image

from BB_Libs.BatchLib.batch_models import BatchItem
from BB_Libs.constants import SUPPORTED_STANDARD_IMAGES

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_NAME = "image"


def get_supported_image_formats() -> List[str]:
    """
    Get list of supported standard image formats.

    Returns:
        List of file extensions (e.g., ['.bmp', '.gif', ...])
    """
    return sorted(SUPPORTED_STANDARD_IMAGES)


def is_supported_format(file_path: Path) -> bool:
    """
    Check if a file path has a supported format.

    Args:
        file_path: Path to the file

    Returns:
        True if file extension is supported
    """
    return Path(file_path).suffix.lower() in SUPPORTED_STANDARD_IMAGES


def filter_supported_paths(paths: Iterable[Path]) -> List[Path]:
    supported = []
    for path in paths:
        path = Path(path)
        if path.is_file() and is_supported_format(path):
            supported.append(path)
        else:
            logger.debug(f"Skipping unsupported source: {path}")
    return supported


def _as_path(source: Any) -> Optional[Path]:
    if isinstance(source, (str, Path)):
        return Path(source)
    return None


def get_source_size(source: Any) -> int:
    """
    Get the size of a source in bytes.

    Args:
        source: Encoded bytes, path, or seekable binary file object

    Returns:
        Size in bytes, or 0 if it cannot be determined
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        return len(source)

    path = _as_path(source)
    if path is not None:
        try:
            return path.stat().st_size
        except OSError:
            return 0

    if hasattr(source, "seek") and hasattr(source, "tell"):
        position = source.tell()
        try:
            return source.seek(0, io.SEEK_END)
        finally:
            source.seek(position)

    return 0


def read_image_dimensions(source: Any) -> Tuple[int, int]:
    """
    Read width and height without decoding pixel data.

    Args:
        source: Encoded bytes, path, or seekable binary file object

    Returns:
        (width, height), or (0, 0) if the source is not a readable image
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        target = io.BytesIO(bytes(source))
    else:
        target = _as_path(source) or source

    position = target.tell() if hasattr(target, "tell") else None
    try:
        with Image.open(target) as img:
            return img.size
    except Exception as e:
        logger.debug(f"Could not read image dimensions: {str(e)}")
        return 0, 0
    finally:
        if position is not None:
            target.seek(position)


def create_batch_item(source: Any, name: Optional[str] = None) -> BatchItem:
    """
    Create a pending BatchItem for a source.

    Args:
        source: Encoded bytes, path, or binary file object
        name: Display/output name; defaults to the path's filename or the
              file object's name attribute

    Returns:
        New BatchItem in PENDING state
    """
    if name is None:
        path = _as_path(source)
        if path is not None:
            name = path.name
        else:
            name = Path(str(getattr(source, "name", "") or DEFAULT_SOURCE_NAME)).name

    width, height = read_image_dimensions(source)
    return BatchItem(
        name=name,
        source=source,
        input_size=get_source_size(source),
        width=width,
        height=height,
    )
