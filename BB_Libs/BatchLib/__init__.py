"""
BatchLib - Batch processing of images

This module provides batch items and sessions, file intake, the
sequential batch runner, and archive export of processed outputs.
"""

from BB_Libs.BatchLib.batch_models import BatchItem, BatchStatus
from BB_Libs.BatchLib.batch_intake import (
    get_supported_image_formats,
    is_supported_format,
    filter_supported_paths,
    get_source_size,
    read_image_dimensions,
    create_batch_item,
)
from BB_Libs.BatchLib.batch_session import BatchSession
from BB_Libs.BatchLib.batch_runner import BatchRunSummary, BatchRunner
from BB_Libs.BatchLib.archive_export import (
    ArchiveEntry,
    build_output_filename,
    collect_archive_entries,
    default_archive_name,
    write_zip_archive,
    format_bytes,
)

__all__ = [
    "BatchItem",
    "BatchStatus",
    "get_supported_image_formats",
    "is_supported_format",
    "filter_supported_paths",
    "get_source_size",
    "read_image_dimensions",
    "create_batch_item",
    "BatchSession",
    "BatchRunSummary",
    "BatchRunner",
    "ArchiveEntry",
    "build_output_filename",
    "collect_archive_entries",
    "default_archive_name",
    "write_zip_archive",
    "format_bytes",
]
