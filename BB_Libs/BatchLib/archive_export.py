"""
Archive export for processed batch items.

Collects the outputs of DONE items as (filename, data) entries named
<original-basename>_processed.<ext> and writes them into a zip archive.

Classes:
    ArchiveEntry: One named output blob

Functions:
    build_output_filename: Output filename for a source name
    collect_archive_entries: Entries for all DONE items, with unique names
    default_archive_name: Dated default archive filename
    write_zip_archive: Write entries to a zip file
    format_bytes: Human-readable byte size
"""

import logging
import zipfile
from datetime import date
from pathlib import Path, PurePath
from typing import Iterable, List, NamedTuple, Optional

from BB_Libs.BatchLib.batch_models import BatchItem, BatchStatus
from BB_Libs.constants import (
    ARCHIVE_EXTENSION,
    ARCHIVE_NAME_PREFIX,
    DEFAULT_OUTPUT_FORMAT,
    LOSSY_OUTPUT_FORMATS,
    OUTPUT_FILE_SUFFIX,
)

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = LOSSY_OUTPUT_FORMATS[DEFAULT_OUTPUT_FORMAT]


class ArchiveEntry(NamedTuple):
    filename: str
    data: bytes


def build_output_filename(source_name: str, extension: str = DEFAULT_EXTENSION) -> str:
    """
    Build the archive filename for a processed source.

    Args:
        source_name: Original filename (directories are ignored)
        extension: Output extension with or without a leading dot

    Returns:
        '<basename>_processed.<ext>'

    Example:
        >>> build_output_filename("holiday/beach.png")
        'beach_processed.jpg'
    """
    stem = PurePath(source_name.replace("\\", "/")).stem or "image"
    return f"{stem}{OUTPUT_FILE_SUFFIX}.{extension.lstrip('.')}"


def _unique_filename(filename: str, used: set) -> str:
    if filename not in used:
        return filename

    path = PurePath(filename)
    counter = 1
    candidate = f"{path.stem}_{counter}{path.suffix}"
    while candidate in used:
        counter += 1
        candidate = f"{path.stem}_{counter}{path.suffix}"
    return candidate


def collect_archive_entries(
    items: Iterable[BatchItem],
    extension: str = DEFAULT_EXTENSION,
) -> List[ArchiveEntry]:
    """
    Collect outputs of DONE items in order.

    Pending, processing and failed items never contribute an entry. Names
    that collide get a numeric suffix (beach_processed_1.jpg).

    Args:
        items: Batch items in display order
        extension: Used for items that did not record the extension of
                   their output

    Returns:
        List of ArchiveEntry
    """
    entries: List[ArchiveEntry] = []
    used: set = set()
    for item in items:
        if item.status != BatchStatus.DONE or not item.output:
            continue
        item_extension = item.output_extension or extension
        filename = _unique_filename(build_output_filename(item.name, item_extension), used)
        used.add(filename)
        entries.append(ArchiveEntry(filename, item.output))
    return entries


def default_archive_name(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"{ARCHIVE_NAME_PREFIX}{today.isoformat()}{ARCHIVE_EXTENSION}"


def write_zip_archive(
    entries: Iterable[ArchiveEntry],
    output_path: Path,
    overwrite: bool = False,
) -> Path:
    """
    Write entries into a zip archive.

    Args:
        entries: Entries from collect_archive_entries()
        output_path: Archive file path; parent directories are created
        overwrite: Replace an existing archive

    Returns:
        Path to the written archive

    Raises:
        ValueError: If there are no entries, or the file exists and
                    overwrite=False
        OSError: If the archive cannot be written
    """
    entries = list(entries)
    if not entries:
        raise ValueError("No processed images to archive")

    output_path = Path(output_path)
    if output_path.exists() and not overwrite:
        raise ValueError(
            f"Archive already exists: {output_path}. "
            f"Set overwrite=True to replace."
        )

    output_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with zipfile.ZipFile(output_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for entry in entries:
                archive.writestr(entry.filename, entry.data)
    except Exception as e:
        raise OSError(f"Failed to write archive to {output_path}: {str(e)}") from e

    logger.info(f"Wrote {len(entries)} image(s) to {output_path}")
    return output_path


def format_bytes(size: int, decimals: int = 2) -> str:
    """
    Format a byte count for display.

    Example:
        >>> format_bytes(1536)
        '1.5 KB'
    """
    if size <= 0:
        return "0 Bytes"

    units = ["Bytes", "KB", "MB", "GB"]
    decimals = max(0, decimals)
    index = 0
    while size >= 1024 ** (index + 1) and index < len(units) - 1:
        index += 1
    value = round(size / (1024 ** index), decimals)
    if value == int(value):
        value = int(value)
    return f"{value} {units[index]}"
