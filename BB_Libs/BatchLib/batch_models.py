"""
Batch item data models for BatchBox Curves.

Classes:
    BatchStatus: Lifecycle states of a batch item
    BatchItem: One source image tracked through the batch lifecycle
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class BatchStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class BatchItem:
    """A source image queued for processing.

    The source is referenced, not owned: it is whatever the intake handed
    over (bytes, a path, or a binary file object).

    Attributes:
        name: Original filename, used to name the output
        source: Encoded image bytes, path, or binary file object
        input_size: Size of the source in bytes
        width: Source width in pixels (0 if unknown)
        height: Source height in pixels (0 if unknown)
        id: Unique identifier
        status: Current lifecycle state
        output: Encoded result, set only when status is DONE
        output_size: Size of output in bytes, set only when status is DONE
        output_extension: File extension of output (e.g. "jpg"), set only when
                          status is DONE
        error_message: Failure reason, set only when status is FAILED
    """
    name: str
    source: Any
    input_size: int = 0
    width: int = 0
    height: int = 0
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    status: BatchStatus = BatchStatus.PENDING
    output: Optional[bytes] = field(default=None, repr=False)
    output_size: Optional[int] = None
    output_extension: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def is_done(self) -> bool:
        return self.status == BatchStatus.DONE

    @property
    def is_terminal(self) -> bool:
        return self.status in (BatchStatus.DONE, BatchStatus.FAILED)

    def mark_processing(self) -> None:
        self.status = BatchStatus.PROCESSING
        self.output = None
        self.output_size = None
        self.output_extension = None
        self.error_message = None

    def mark_done(self, output: bytes, extension: Optional[str] = None) -> None:
        self.output = output
        self.output_size = len(output)
        self.output_extension = extension
        self.error_message = None
        self.status = BatchStatus.DONE

    def mark_failed(self, error_message: str) -> None:
        self.output = None
        self.output_size = None
        self.output_extension = None
        self.error_message = error_message
        self.status = BatchStatus.FAILED

    def release(self) -> None:
        """Drop the encoded output buffer."""
        self.output = None
        self.output_size = None
        self.output_extension = None
